# apps/board/tipos.py

"""
Tipos compartilhados do motor de reconciliação

Value objects imutáveis que circulam entre o repositório, o motor e as views.
Nenhum deles é persistido.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, Optional, Tuple

from .exceptions import InvalidMove


@dataclass(frozen=True)
class ItemPosicao:
    """Uma candidatura vista pelo motor: id + ordem dentro da coluna"""

    item_id: Hashable
    ordem: int


@dataclass(frozen=True)
class MoveIntent:
    """
    Pedido de movimentação vindo do drag-and-drop

    indice_destino: posição (0-based) na sequência da coluna de destino
                    depois do movimento
    alvo_id: card sobre o qual o item foi solto (insere antes dele)

    Sem indice_destino nem alvo_id o item vai para o final da coluna.
    """

    item_id: Hashable
    origem_id: Hashable
    destino_id: Hashable
    indice_destino: Optional[int] = None
    alvo_id: Optional[Hashable] = None

    @property
    def mesma_coluna(self) -> bool:
        return self.origem_id == self.destino_id


@dataclass(frozen=True)
class Escrita:
    """Uma escrita do write-set: (item, nova coluna, nova ordem)"""

    item_id: Hashable
    coluna_id: Hashable
    ordem: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'item_id': self.item_id,
            'coluna_id': self.coluna_id,
            'ordem': self.ordem,
        }


@dataclass(frozen=True)
class WriteSet:
    """
    Lote de escritas de um movimento, aplicado atomicamente pelo repositório

    Garante na construção que não há item repetido nem duas escritas com a
    mesma ordem na mesma coluna.
    """

    escritas: Tuple[Escrita, ...] = field(default_factory=tuple)
    rebalanceado: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'escritas', tuple(self.escritas))

        ids = [e.item_id for e in self.escritas]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Write-set com item repetido: {ids}")

        posicoes = [(e.coluna_id, e.ordem) for e in self.escritas]
        if len(posicoes) != len(set(posicoes)):
            raise ValueError(f"Write-set com ordem repetida na mesma coluna: {posicoes}")

    def __iter__(self) -> Iterator[Escrita]:
        return iter(self.escritas)

    def __len__(self) -> int:
        return len(self.escritas)

    def __bool__(self) -> bool:
        return bool(self.escritas)

    @property
    def vazio(self) -> bool:
        return not self.escritas

    @property
    def colunas(self) -> set:
        return {e.coluna_id for e in self.escritas}

    def to_list(self):
        return [e.to_dict() for e in self.escritas]


WRITE_SET_VAZIO = WriteSet()

# Só dígitos ASCII; str.isdigit aceita sobrescritos que int() recusa
INTEIRO_RE = re.compile(r'-?[0-9]+')


def _inteiro(dados: Dict[str, Any], chave: str, obrigatorio: bool = True) -> Optional[int]:
    """Converte um campo do payload para int, rejeitando bool/float/texto livre"""
    valor = dados.get(chave)

    if valor is None or valor == '':
        if obrigatorio:
            raise InvalidMove(f"Campo obrigatório ausente: {chave}", campo=chave)
        return None

    if isinstance(valor, bool):
        raise InvalidMove(f"Campo {chave} deve ser inteiro", campo=chave)

    if isinstance(valor, int):
        return valor

    if isinstance(valor, str) and INTEIRO_RE.fullmatch(valor.strip()):
        return int(valor.strip())

    raise InvalidMove(f"Campo {chave} deve ser inteiro", campo=chave)


def parse_move_payload(dados: Any) -> MoveIntent:
    """
    Valida o payload do drag-end e monta um MoveIntent

    Formato esperado:
        {
            "item_id": 12,
            "origem_id": 3,
            "destino_id": 4,
            "indice_destino": 1,   # opcional
            "alvo_id": 15          # opcional, exclusivo com indice_destino
        }
    """
    if not isinstance(dados, dict):
        raise InvalidMove("Payload de movimentação deve ser um objeto JSON")

    item_id = _inteiro(dados, 'item_id')
    origem_id = _inteiro(dados, 'origem_id')
    destino_id = _inteiro(dados, 'destino_id')
    indice_destino = _inteiro(dados, 'indice_destino', obrigatorio=False)
    alvo_id = _inteiro(dados, 'alvo_id', obrigatorio=False)

    if indice_destino is not None and indice_destino < 0:
        raise InvalidMove("indice_destino não pode ser negativo", campo='indice_destino')

    if indice_destino is not None and alvo_id is not None:
        raise InvalidMove("Informe indice_destino ou alvo_id, não ambos")

    return MoveIntent(
        item_id=item_id,
        origem_id=origem_id,
        destino_id=destino_id,
        indice_destino=indice_destino,
        alvo_id=alvo_id,
    )
