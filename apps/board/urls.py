# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Estado do Kanban
    path('<int:board_id>/', views.board_kanban_view, name='kanban'),

    # AJAX/HTMX - Movimentação de candidaturas
    path('mover-item/', views.mover_item_ajax, name='mover_item'),

    # Criação e exclusão de candidaturas
    path('<int:board_id>/candidaturas/', views.criar_candidatura, name='criar_candidatura'),
    path('candidaturas/<int:candidatura_id>/excluir/', views.excluir_candidatura, name='excluir_candidatura'),
]
