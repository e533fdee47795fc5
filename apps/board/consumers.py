# apps/board/consumers.py

import json
import logging
from channels.generic.websocket import AsyncWebsocketConsumer
from channels.db import database_sync_to_async
from django.conf import settings
from django.utils import timezone
from apps.core.models import Board
from apps.core.permissions import VagaPermissions

logger = logging.getLogger(__name__)


class BoardConsumer(AsyncWebsocketConsumer):
    """
    WebSocket de um board Kanban

    Recebe do grupo `board_<id>` os eventos publicados por notificar_board
    (item_moved, item_created, item_deleted, board_refresh) e repassa ao
    navegador. O cliente só manda `ping` e `sync_board`; movimentos
    continuam indo pelo endpoint HTTP.
    """

    async def connect(self):
        self.board_id = self.scope['url_route']['kwargs']['board_id']
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        if not await self.check_board_access():
            logger.warning(f"❌ Conexão WebSocket rejeitada - {self.user.username} sem acesso ao board {self.board_id}")
            await self.close()
            return

        self.board_group_name = f'board_{self.board_id}'
        await self.channel_layer.group_add(self.board_group_name, self.channel_name)
        await self.accept()

        await self._avisar_presenca('user_joined')

        logger.info(f"✅ WebSocket conectado - {self.user.username} no board {self.board_id}")

    async def disconnect(self, close_code):
        # Conexões recusadas nunca entraram no grupo
        if not hasattr(self, 'board_group_name'):
            return

        await self._avisar_presenca('user_left')
        await self.channel_layer.group_discard(self.board_group_name, self.channel_name)

        logger.info(f"🔌 WebSocket desconectado do board {self.board_id} (código {close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            await self._enviar('error', error='JSON inválido')
            return

        tipo = data.get('type') if isinstance(data, dict) else None

        if tipo == 'ping':
            await self._enviar(
                'pong',
                intervalo=getattr(settings, 'VAGA_BOARD_WS_HEARTBEAT_INTERVAL', 30),
            )

        elif tipo == 'sync_board':
            # Cliente desfez um reorder otimista e quer o estado confirmado
            await self._enviar('board_sync', board_data=await self.get_board_state())

        else:
            await self._enviar('error', error=f'Tipo de mensagem desconhecido: {tipo}')

    # === Eventos do grupo ===

    async def _repassar(self, event):
        await self.send(text_data=json.dumps({
            'type': event['type'],
            'message': event['message'],
        }))

    item_moved = _repassar
    item_created = _repassar
    item_deleted = _repassar
    board_refresh = _repassar

    async def user_joined(self, event):
        if event['message']['user_id'] != self.user.id:
            await self._repassar(event)

    async def user_left(self, event):
        if event['message']['user_id'] != self.user.id:
            await self._repassar(event)

    # === Métodos auxiliares ===

    async def _enviar(self, tipo, **dados):
        await self.send(text_data=json.dumps(dict(
            dados,
            type=tipo,
            timestamp=timezone.now().isoformat(),
        )))

    async def _avisar_presenca(self, tipo):
        await self.channel_layer.group_send(self.board_group_name, {
            'type': tipo,
            'message': {
                'usuario': self.user.get_full_name() or self.user.username,
                'user_id': self.user.id,
                'timestamp': timezone.now().isoformat(),
            },
        })

    @database_sync_to_async
    def check_board_access(self):
        """Board ativo e usuário dono (ou superusuário)"""
        board = Board.objects.filter(id=self.board_id, ativo=True).first()
        return board is not None and VagaPermissions.tem_acesso_board(self.user, board)

    @database_sync_to_async
    def get_board_state(self):
        from .servicos import estado_board

        board = Board.objects.filter(id=self.board_id).first()
        return estado_board(board) if board is not None else {}
