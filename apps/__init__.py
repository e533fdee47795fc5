# apps/__init__.py

"""
Vaga Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Models principais e permissões
- board: Kanban, reconciliação de posições e WebSockets
"""

__version__ = '0.1.0'
__author__ = 'Equipe Vaga Board'
