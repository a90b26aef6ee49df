"""Connectors: adapters de borda para o provedor de mensagens.

Estrutura:
- provider/: carregamento do connector, classificação de JIDs e causa de desconexão
"""

__all__: list[str] = []
