# apps/core/permissions.py

from functools import wraps
from django.http import JsonResponse


class VagaPermissions:
    """
    Permissões do Vaga Board
    Cada board pertence a um usuário; superusuários veem todos
    """

    @staticmethod
    def tem_acesso_board(user, board):
        """Verifica se tem acesso ao board"""
        if not user.is_authenticated:
            return False

        if user.is_superuser:
            return True

        return board.dono_id == user.id

    @staticmethod
    def pode_mover_candidatura(user, candidatura):
        """Verifica se pode mover a candidatura entre colunas"""
        return VagaPermissions.tem_acesso_board(user, candidatura.coluna.board)


# Decoradores para views

def ajax_requer_acesso_board(view_func):
    """
    Decorador para views JSON que recebem board_id
    Retorna 404/403 em JSON ao invés de redirecionar
    """

    @wraps(view_func)
    def wrapped_view(request, board_id, *args, **kwargs):
        from .models import Board

        try:
            board = Board.objects.get(id=board_id, ativo=True)
        except Board.DoesNotExist:
            return JsonResponse({'success': False, 'error': 'Board não encontrado'}, status=404)

        if not VagaPermissions.tem_acesso_board(request.user, board):
            return JsonResponse({'success': False, 'error': 'Sem acesso ao board'}, status=403)

        # Adiciona o board ao request para uso na view
        request.board = board
        return view_func(request, board_id, *args, **kwargs)

    return wrapped_view
