"""App: orquestração do gateway: sessão, roteamento e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: roteamento de eventos inbound → webhooks
- use_cases/: operações expostas pela API REST
- infra/: implementações concretas de IO (stores, HTTP, webhooks)
- protocols/: contratos/interfaces
- sessions/: ciclo de vida da sessão com o provedor
- observability/: correlation_id e avisos de conectividade
- constants/: constantes da aplicação

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
