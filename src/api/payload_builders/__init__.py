"""Payload builders: conteúdo outbound no formato do provedor.

Estrutura:
- provider/: texto, mídia, localização, enquete e contato (um builder por tipo)
"""

__all__: list[str] = []
