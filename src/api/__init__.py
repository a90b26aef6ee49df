"""API: camada de borda do gateway.

Responsabilidades:
- Expor a superfície REST (sessão, mensagens, webhooks, health)
- Adaptar o cliente do provedor (loader do connector, classificação de JIDs)
- Construir o conteúdo de mensagens de saída no formato do provedor

Subpastas:
- connectors/: adapters do provedor de mensagens
- payload_builders/: construção de conteúdo para o provedor
- routes/: endpoints HTTP

NÃO PODE conter: FSM, regras de sessão, orquestração de casos de uso.
"""
