# apps/board/posicoes.py

"""
Alocação de posições (campo `ordem`) com estratégia de gaps

Novas candidaturas recebem ordens múltiplas de GAP (100, 200, 300...).
Inserir entre dois vizinhos usa o ponto médio, então cabem ~99 inserções
seguidas no mesmo ponto antes de ser preciso renumerar a coluna inteira.
"""

from typing import Dict, Hashable, Iterable, Optional

from django.conf import settings

from .exceptions import NeedsRebalance

GAP = 100


def append_order(maior_ordem: Optional[int], gap: int = GAP) -> int:
    """Ordem para um item adicionado ao final da coluna"""
    if maior_ordem is None:
        return gap
    return maior_ordem + gap


def insert_between(ordem_anterior: Optional[int], ordem_posterior: Optional[int],
                   gap: int = GAP) -> int:
    """
    Ordem para um item inserido entre dois vizinhos

    Qualquer um dos vizinhos pode ser None (início/final da coluna).
    Levanta NeedsRebalance quando não sobra inteiro entre eles.
    """
    if ordem_anterior is None and ordem_posterior is None:
        return gap

    if ordem_anterior is None:
        ordem = ordem_posterior // 2
        if ordem <= 0 or ordem >= ordem_posterior:
            raise NeedsRebalance(None, ordem_posterior)
        return ordem

    if ordem_posterior is None:
        return ordem_anterior + gap

    ordem = (ordem_anterior + ordem_posterior) // 2
    # ordem < anterior só acontece com vizinhos fora de ordem (dados corrompidos)
    if ordem <= ordem_anterior:
        raise NeedsRebalance(ordem_anterior, ordem_posterior)
    return ordem


def rebalance(ids_em_ordem: Iterable[Hashable], gap: int = GAP) -> Dict[Hashable, int]:
    """Renumera a sequência para gap, 2*gap, 3*gap..."""
    return {
        item_id: gap * posicao
        for posicao, item_id in enumerate(ids_em_ordem, start=1)
    }


class AlocadorPosicoes:
    """
    Alocador com gap configurável

    O gap padrão vem de settings.VAGA_BOARD_ORDEM_GAP (100 se ausente).
    """

    def __init__(self, gap: Optional[int] = None):
        if gap is None:
            gap = getattr(settings, 'VAGA_BOARD_ORDEM_GAP', GAP)
        if gap < 2:
            raise ValueError("O gap precisa ser pelo menos 2")
        self.gap = gap

    def append_order(self, maior_ordem: Optional[int]) -> int:
        return append_order(maior_ordem, self.gap)

    def insert_between(self, ordem_anterior: Optional[int], ordem_posterior: Optional[int]) -> int:
        return insert_between(ordem_anterior, ordem_posterior, self.gap)

    def rebalance(self, ids_em_ordem: Iterable[Hashable]) -> Dict[Hashable, int]:
        return rebalance(ids_em_ordem, self.gap)
