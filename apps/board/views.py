# apps/board/views.py

import json
import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from apps.core.forms import CandidaturaForm
from apps.core.models import Candidatura
from apps.core.permissions import VagaPermissions, ajax_requer_acesso_board
from .exceptions import GroupNotFound, InvalidMove, StorageError
from .servicos import MovimentacaoService, estado_board
from .tipos import parse_move_payload

logger = logging.getLogger(__name__)

CAMPOS_CANDIDATURA = ['empresa', 'cargo', 'localizacao', 'link', 'salario', 'notas', 'data_candidatura']

STATUS_ERRO = {
    InvalidMove: 400,
    GroupNotFound: 404,
    StorageError: 503,
}


def _ler_payload(request):
    """Aceita JSON no corpo ou form-encoded (HTMX)"""
    if request.content_type == 'application/json':
        try:
            return json.loads(request.body or b'{}')
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidMove("JSON inválido") from exc
    return request.POST.dict()


def _resposta_erro(exc):
    """Erro do movimento: o cliente deve desfazer o reorder otimista"""
    corpo = dict(exc.to_dict(), success=False, rollback=True)
    return JsonResponse(corpo, status=STATUS_ERRO.get(type(exc), 400))


@login_required
@require_GET
@ajax_requer_acesso_board
def board_kanban_view(request, board_id):
    """
    Estado completo do board Kanban
    Usado na carga inicial e para ressincronizar depois de um rollback
    """
    return JsonResponse(estado_board(request.board))


@login_required
@require_POST
def mover_item_ajax(request):
    """
    Move candidatura entre/dentro de colunas
    Usado pelo drag-and-drop
    """
    try:
        intent = parse_move_payload(_ler_payload(request))

        candidatura = (
            Candidatura.objects.select_related('coluna__board')
            .filter(id=intent.item_id)
            .first()
        )
        if candidatura is None:
            raise InvalidMove(f"Candidatura {intent.item_id} não encontrada")

        # Verificar permissão
        if not VagaPermissions.pode_mover_candidatura(request.user, candidatura):
            return JsonResponse(
                {'success': False, 'error': 'Sem permissão para mover item', 'rollback': True},
                status=403
            )

        resultado = MovimentacaoService().mover(
            intent,
            board_id=candidatura.coluna.board_id,
            usuario=request.user,
        )

    except (InvalidMove, GroupNotFound, StorageError) as exc:
        logger.warning(f"⚠️  Movimento recusado para {request.user.username}: {exc}")
        return _resposta_erro(exc)

    response = JsonResponse(resultado.to_dict())
    if getattr(request, 'htmx', False) and not resultado.noop:
        response['HX-Trigger'] = 'board-atualizado'
    return response


@login_required
@require_POST
@ajax_requer_acesso_board
def criar_candidatura(request, board_id):
    """
    Cria candidatura no final de uma coluna do board
    """
    try:
        dados = _ler_payload(request)
    except InvalidMove as exc:
        return _resposta_erro(exc)

    if not isinstance(dados, dict):
        return JsonResponse({'success': False, 'error': 'Payload inválido'}, status=400)

    coluna_id = str(dados.get('coluna_id') or '')
    form = CandidaturaForm(dict(dados, coluna=coluna_id), board=request.board)

    if not form.is_valid():
        # Id numérico fora deste board: mesma resposta de coluna inexistente
        if coluna_id.isdigit() and form.has_error('coluna', 'invalid_choice'):
            return JsonResponse({'success': False, 'error': 'Coluna não encontrada'}, status=404)

        return JsonResponse(
            {'success': False, 'error': 'Dados inválidos', 'erros': form.errors.get_json_data()},
            status=400
        )

    campos = {campo: form.cleaned_data[campo] for campo in CAMPOS_CANDIDATURA}
    coluna = form.cleaned_data['coluna']

    candidatura = MovimentacaoService().criar(coluna, criado_por=request.user, **campos)

    return JsonResponse({'success': True, 'item': candidatura.to_dict()}, status=201)


@login_required
@require_POST
def excluir_candidatura(request, candidatura_id):
    """
    Remove candidatura sem renumerar as demais
    """
    candidatura = get_object_or_404(
        Candidatura.objects.select_related('coluna__board'),
        id=candidatura_id
    )

    if not VagaPermissions.tem_acesso_board(request.user, candidatura.coluna.board):
        return JsonResponse({'success': False, 'error': 'Sem permissão'}, status=403)

    MovimentacaoService().excluir(candidatura, usuario=request.user)

    return JsonResponse({'success': True, 'item_id': candidatura_id})
