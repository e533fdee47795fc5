# apps/board/__init__.py

"""
Board - Aplicação Kanban do Vaga Board

Funcionalidades:
- Motor de reconciliação de posições (ordem com gaps + rebalanceamento)
- Endpoints JSON para drag-and-drop com rollback otimista
- WebSockets para atualizações em tempo real
"""
