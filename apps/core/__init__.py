# apps/core/__init__.py

"""
Core - Aplicação principal do Vaga Board

Contém:
- Models (Board, Coluna, Candidatura)
- Permissões de acesso ao board
- Sinais (colunas padrão)
- Comando de manutenção para renumerar colunas
"""
