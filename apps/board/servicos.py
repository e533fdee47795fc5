# apps/board/servicos.py

"""
Serviço de movimentação - liga o motor de reconciliação ao banco e ao WebSocket

Para cada movimento: lê as colunas envolvidas, pede o write-set ao motor,
aplica no repositório e avisa os outros clientes do board.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.utils import timezone

from apps.core.models import Candidatura, Coluna
from .exceptions import InvalidMove
from .reconciliacao import MotorReconciliacao
from .repositorio import RepositorioCandidaturas
from .tipos import MoveIntent, WriteSet

logger = logging.getLogger(__name__)


@dataclass
class ResultadoMovimento:
    """Resultado de um movimento já aplicado"""

    write_set: WriteSet
    colunas: Dict[str, List[Dict[str, int]]] = field(default_factory=dict)

    @property
    def noop(self) -> bool:
        return self.write_set.vazio

    def to_dict(self):
        return {
            'success': True,
            'noop': self.noop,
            'rebalanceado': self.write_set.rebalanceado,
            'write_set': self.write_set.to_list(),
            'colunas': self.colunas,
        }


def _nome_usuario(usuario):
    if usuario is None:
        return None
    return usuario.get_full_name() or usuario.username


class MovimentacaoService:
    """
    Orquestra movimentos, criações e exclusões de candidaturas

    InvalidMove: relê o estado do banco e tenta mais uma vez
    GroupNotFound / StorageError: propagados na hora, sem retry
    """

    TENTATIVAS_INVALID_MOVE = 2

    def __init__(self, repositorio: Optional[RepositorioCandidaturas] = None,
                 motor: Optional[MotorReconciliacao] = None):
        self.repositorio = repositorio or RepositorioCandidaturas()
        self.motor = motor or MotorReconciliacao()

    def mover(self, intent: MoveIntent, board_id=None, usuario=None) -> ResultadoMovimento:
        """Planeja e aplica um MoveIntent"""
        for tentativa in range(1, self.TENTATIVAS_INVALID_MOVE + 1):
            itens_origem = self.repositorio.fetch_group_items_sorted(intent.origem_id, board_id)
            itens_destino = self.repositorio.fetch_group_items_sorted(intent.destino_id, board_id)

            try:
                write_set = self.motor.plan_move(intent, itens_origem, itens_destino)
                break
            except InvalidMove as exc:
                if tentativa == self.TENTATIVAS_INVALID_MOVE:
                    logger.warning(f"❌ Movimento inválido após {tentativa} tentativas: {exc}")
                    raise
                logger.info(f"🔄 Movimento inválido, relendo estado das colunas: {exc}")

        if write_set.vazio:
            return ResultadoMovimento(write_set)

        self.repositorio.apply_write_set(write_set)

        colunas = self.repositorio.colunas_afetadas(write_set, intent.origem_id)

        logger.info(
            f"✅ Candidatura {intent.item_id} movida da coluna {intent.origem_id} "
            f"para {intent.destino_id} ({len(write_set)} escritas"
            f"{', rebalanceada' if write_set.rebalanceado else ''})"
        )

        notificar_board(board_id or self._board_da_coluna(intent.destino_id), 'item_moved', {
            'item_id': intent.item_id,
            'coluna_anterior': intent.origem_id,
            'nova_coluna': intent.destino_id,
            'rebalanceado': write_set.rebalanceado,
            'write_set': write_set.to_list(),
            'colunas': colunas,
            'usuario': _nome_usuario(usuario),
        })

        return ResultadoMovimento(write_set, colunas)

    def criar(self, coluna: Coluna, criado_por, usuario=None, **campos) -> Candidatura:
        """Cria uma candidatura no final da coluna"""
        using = self.repositorio.using

        with transaction.atomic(using=using):
            # Trava a coluna para duas criações simultâneas não pegarem a mesma ordem
            Coluna.objects.using(using).select_for_update().get(id=coluna.id)

            itens = self.repositorio.fetch_group_items_sorted(coluna.id) or []
            ordem = self.motor.plan_insert_new(itens)

            candidatura = Candidatura.objects.using(using).create(
                coluna=coluna,
                ordem=ordem,
                criado_por=criado_por,
                **campos
            )

        logger.info(f"✨ Candidatura {candidatura.id} criada na coluna {coluna.id} (ordem {ordem})")

        notificar_board(coluna.board_id, 'item_created', {
            'item': candidatura.to_dict(),
            'usuario': _nome_usuario(usuario or criado_por),
        })

        return candidatura

    def excluir(self, candidatura: Candidatura, usuario=None):
        """Remove a candidatura; as demais mantêm suas ordens"""
        item_id = candidatura.id
        coluna_id = candidatura.coluna_id
        board_id = candidatura.coluna.board_id

        candidatura.delete()

        logger.info(f"🗑️  Candidatura {item_id} removida da coluna {coluna_id}")

        notificar_board(board_id, 'item_deleted', {
            'item_id': item_id,
            'coluna_id': coluna_id,
            'usuario': _nome_usuario(usuario),
        })

    def _board_da_coluna(self, coluna_id):
        return (
            Coluna.objects.using(self.repositorio.using)
            .filter(id=coluna_id)
            .values_list('board_id', flat=True)
            .first()
        )


def notificar_board(board_id, tipo, mensagem):
    """
    Envia o evento para o grupo WebSocket do board

    Chamado depois da gravação confirmada: falha no channel layer só é
    logada, os outros clientes se recuperam com sync_board.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None or board_id is None:
        return

    mensagem = dict(mensagem, timestamp=timezone.now().isoformat())
    try:
        async_to_sync(channel_layer.group_send)(
            f'board_{board_id}',
            {
                'type': tipo,
                'message': mensagem,
            }
        )
    except Exception as e:
        logger.error(f"❌ Erro ao notificar board {board_id} ({tipo}): {e}")


def estado_board(board):
    """Colunas do board com as candidaturas na ordem de exibição"""
    colunas = board.colunas.prefetch_related('candidaturas').order_by('ordem')
    return {
        'board_id': board.id,
        'titulo': board.titulo,
        'colunas': [
            {
                'id': coluna.id,
                'titulo': coluna.titulo,
                'cor': coluna.cor,
                'candidaturas': [
                    c.to_dict()
                    for c in sorted(coluna.candidaturas.all(), key=lambda c: (c.ordem, c.id))
                ],
            }
            for coluna in colunas
        ],
    }
