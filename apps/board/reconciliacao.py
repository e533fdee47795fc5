# apps/board/reconciliacao.py

"""
Motor de reconciliação de posições

Recebe um MoveIntent e o estado atual das colunas envolvidas (já ordenado
por `ordem`) e devolve o menor write-set que coloca o item na posição pedida.
O motor é puro: não lê nem escreve no banco, só calcula.

Fluxo de um movimento:
1. Resolve  - descobre o índice de destino e os vizinhos
2. Allocate - pede uma ordem ao alocador; sem gap, renumera a coluna
3. Assemble - monta o write-set (uma escrita, ou a coluna inteira)
4. Emit     - devolve o write-set para o repositório aplicar
"""

import logging
from typing import Hashable, List, Optional, Sequence

from .exceptions import GroupNotFound, InvalidMove, NeedsRebalance
from .posicoes import AlocadorPosicoes
from .tipos import WRITE_SET_VAZIO, Escrita, ItemPosicao, MoveIntent, WriteSet

logger = logging.getLogger(__name__)


def _indice_de(itens: Sequence[ItemPosicao], item_id: Hashable) -> Optional[int]:
    for indice, item in enumerate(itens):
        if item.item_id == item_id:
            return indice
    return None


class MotorReconciliacao:
    """Calcula write-sets para movimentações e criações de candidaturas"""

    def __init__(self, alocador: Optional[AlocadorPosicoes] = None):
        self.alocador = alocador or AlocadorPosicoes()

    def plan_move(self,
                  intent: MoveIntent,
                  itens_origem: Optional[Sequence[ItemPosicao]],
                  itens_destino: Optional[Sequence[ItemPosicao]]) -> WriteSet:
        """
        Planeja a movimentação de um item

        itens_origem / itens_destino: itens das colunas ordenados por `ordem`,
        ou None quando a coluna não existe.

        Levanta GroupNotFound se o destino não existe e InvalidMove se o item
        não está na coluna de origem informada. NeedsRebalance nunca sai daqui.
        """
        if itens_destino is None:
            raise GroupNotFound(
                f"Coluna {intent.destino_id} não encontrada",
                coluna_id=intent.destino_id,
            )

        if itens_origem is None:
            raise InvalidMove(
                f"Coluna de origem {intent.origem_id} não encontrada",
                coluna_id=intent.origem_id,
            )

        origem = list(itens_origem)
        destino = list(itens_destino)

        indice_atual = _indice_de(origem, intent.item_id)
        if indice_atual is None:
            raise InvalidMove(
                f"Item {intent.item_id} não está na coluna {intent.origem_id}",
                item_id=intent.item_id,
                coluna_id=intent.origem_id,
            )

        # Destino visto sem o item movido
        vista = [item for item in destino if item.item_id != intent.item_id]

        # === RESOLVE ===
        if intent.alvo_id is not None:
            if intent.alvo_id == intent.item_id:
                logger.debug(f"Item {intent.item_id} solto sobre ele mesmo - nada a fazer")
                return WRITE_SET_VAZIO

            indice = _indice_de(destino, intent.alvo_id)
            if indice is None:
                raise InvalidMove(
                    f"Item alvo {intent.alvo_id} não está na coluna {intent.destino_id}",
                    item_id=intent.alvo_id,
                    coluna_id=intent.destino_id,
                )

            # Índice do alvo é da sequência atual; sem o item movido ele desce uma posição
            if intent.mesma_coluna and indice_atual < indice:
                indice -= 1

        elif intent.indice_destino is not None:
            indice = min(intent.indice_destino, len(vista))

        else:
            indice = len(vista)

        if intent.mesma_coluna and indice == indice_atual:
            logger.debug(f"Item {intent.item_id} já está no índice {indice} - nada a fazer")
            return WRITE_SET_VAZIO

        anterior = vista[indice - 1] if indice > 0 else None
        posterior = vista[indice] if indice < len(vista) else None

        # === ALLOCATE ===
        try:
            ordem = self.alocador.insert_between(
                anterior.ordem if anterior else None,
                posterior.ordem if posterior else None,
            )
        except NeedsRebalance as exc:
            sequencia = [item.item_id for item in vista]
            sequencia.insert(indice, intent.item_id)

            logger.warning(
                f"⚖️  Rebalanceando coluna {intent.destino_id} "
                f"({len(sequencia)} itens): {exc}"
            )

            return self._write_set_rebalanceado(intent.destino_id, sequencia)

        # === ASSEMBLE ===
        return WriteSet((Escrita(intent.item_id, intent.destino_id, ordem),))

    def plan_insert_new(self, itens_coluna: Sequence[ItemPosicao]) -> int:
        """Ordem para uma candidatura nova, sempre no final da coluna"""
        maior_ordem = max((item.ordem for item in itens_coluna), default=None)
        return self.alocador.append_order(maior_ordem)

    def plan_rebalance(self, coluna_id: Hashable, itens_coluna: Sequence[ItemPosicao]) -> WriteSet:
        """Renumera a coluna mantendo a sequência atual"""
        return self._write_set_rebalanceado(
            coluna_id,
            [item.item_id for item in itens_coluna],
        )

    def precisa_rebalancear(self, itens_coluna: Sequence[ItemPosicao]) -> bool:
        """True se algum ponto da coluna já não aceita inserção (ou há ordens repetidas)"""
        ordens = [None] + [item.ordem for item in itens_coluna] + [None]
        for anterior, posterior in zip(ordens, ordens[1:]):
            try:
                self.alocador.insert_between(anterior, posterior)
            except NeedsRebalance:
                return True
        return False

    def _write_set_rebalanceado(self, coluna_id: Hashable, sequencia: List[Hashable]) -> WriteSet:
        ordens = self.alocador.rebalance(sequencia)
        return WriteSet(
            tuple(Escrita(item_id, coluna_id, ordem) for item_id, ordem in ordens.items()),
            rebalanceado=True,
        )


def plan_move(intent, itens_origem, itens_destino) -> WriteSet:
    """Atalho para MotorReconciliacao().plan_move"""
    return MotorReconciliacao().plan_move(intent, itens_origem, itens_destino)


def plan_insert_new(itens_coluna) -> int:
    """Atalho para MotorReconciliacao().plan_insert_new"""
    return MotorReconciliacao().plan_insert_new(itens_coluna)
