# apps/board/repositorio.py

"""
Repositório de posições das candidaturas

Única camada que lê e grava `coluna`/`ordem` no banco. Cada instância carrega
o alias do banco que deve usar; não existe conexão ou cache global aqui.
"""

import logging
from typing import Dict, Iterable, List, Optional

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.utils import timezone

from apps.core.models import Candidatura, Coluna
from .exceptions import StorageError
from .tipos import ItemPosicao, WriteSet

logger = logging.getLogger(__name__)


class RepositorioCandidaturas:
    """Leitura ordenada das colunas e aplicação atômica de write-sets"""

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    def _candidaturas(self):
        return Candidatura.objects.using(self.using)

    def _colunas(self):
        return Coluna.objects.using(self.using)

    def fetch_group_items_sorted(self, coluna_id, board_id=None) -> Optional[List[ItemPosicao]]:
        """
        Itens da coluna ordenados por `ordem` (id desempata)

        Retorna None quando a coluna não existe, ou não pertence ao board_id.
        """
        colunas = self._colunas().filter(id=coluna_id)
        if board_id is not None:
            colunas = colunas.filter(board_id=board_id)

        if not colunas.exists():
            return None

        linhas = (
            self._candidaturas()
            .filter(coluna_id=coluna_id)
            .order_by('ordem', 'id')
            .values_list('id', 'ordem')
        )
        return [ItemPosicao(item_id, ordem) for item_id, ordem in linhas]

    def apply_write_set(self, write_set: WriteSet) -> List[Candidatura]:
        """
        Aplica todas as escritas numa única transação

        Ou todas as escritas entram ou nenhuma entra. Qualquer falha vira
        StorageError; o chamador deve tratar o movimento como falho.
        """
        if write_set.vazio:
            return []

        ids = [escrita.item_id for escrita in write_set]

        try:
            with transaction.atomic(using=self.using):
                candidaturas = self._candidaturas().select_for_update().in_bulk(ids)

                faltando = [item_id for item_id in ids if item_id not in candidaturas]
                if faltando:
                    raise StorageError(f"Candidaturas não encontradas: {faltando}")

                agora = timezone.now()
                alteradas = []
                for escrita in write_set:
                    candidatura = candidaturas[escrita.item_id]
                    candidatura.coluna_id = escrita.coluna_id
                    candidatura.ordem = escrita.ordem
                    candidatura.atualizado_em = agora
                    alteradas.append(candidatura)

                self._candidaturas().bulk_update(alteradas, ['coluna', 'ordem', 'atualizado_em'])

        except DatabaseError as exc:
            logger.error(f"❌ Erro ao aplicar write-set ({len(write_set)} escritas): {exc}")
            raise StorageError(f"Erro ao salvar posições: {exc}") from exc

        logger.debug(f"💾 Write-set aplicado: {write_set.to_list()}")
        return alteradas

    def snapshot_colunas(self, coluna_ids: Iterable) -> Dict[str, List[Dict[str, int]]]:
        """Estado confirmado das colunas, no formato devolvido ao cliente"""
        snapshot = {}
        for coluna_id in coluna_ids:
            itens = self.fetch_group_items_sorted(coluna_id) or []
            snapshot[str(coluna_id)] = [
                {'id': item.item_id, 'ordem': item.ordem}
                for item in itens
            ]
        return snapshot

    def colunas_afetadas(self, write_set: WriteSet, *coluna_ids) -> Dict[str, List[Dict[str, int]]]:
        """Snapshot das colunas tocadas pelo write-set (mais as informadas)"""
        colunas = set(write_set.colunas) | {c for c in coluna_ids if c is not None}
        return self.snapshot_colunas(sorted(colunas))
