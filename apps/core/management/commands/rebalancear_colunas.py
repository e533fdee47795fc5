# apps/core/management/commands/rebalancear_colunas.py

from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS
from apps.core.models import Coluna
from apps.board.exceptions import StorageError
from apps.board.reconciliacao import MotorReconciliacao
from apps.board.repositorio import RepositorioCandidaturas
from apps.board.servicos import notificar_board


class Command(BaseCommand):
    help = 'Renumera colunas sem espaço entre ordens (ou com ordens repetidas)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--board',
            type=int,
            help='Processa apenas as colunas deste board'
        )
        parser.add_argument(
            '--todas',
            action='store_true',
            help='Renumera todas as colunas, mesmo as que ainda têm espaço'
        )
        parser.add_argument(
            '--database',
            default=DEFAULT_DB_ALIAS,
            help='Alias do banco a usar'
        )

    def handle(self, *args, **options):
        repositorio = RepositorioCandidaturas(using=options['database'])
        motor = MotorReconciliacao()

        colunas = Coluna.objects.using(options['database']).order_by('board_id', 'ordem')
        if options['board'] is not None:
            colunas = colunas.filter(board_id=options['board'])

        self.stdout.write('🔍 Verificando ordens das colunas...')

        boards_alterados = set()
        total_colunas = 0

        for coluna in colunas:
            itens = repositorio.fetch_group_items_sorted(coluna.id) or []
            if not itens:
                continue

            if not options['todas'] and not motor.precisa_rebalancear(itens):
                continue

            write_set = motor.plan_rebalance(coluna.id, itens)
            try:
                repositorio.apply_write_set(write_set)
            except StorageError as e:
                raise CommandError(f'❌ Erro ao renumerar coluna {coluna.id}: {e}') from e

            total_colunas += 1
            boards_alterados.add(coluna.board_id)
            self.stdout.write(f'  ⚖️  {coluna} - {len(write_set)} candidaturas renumeradas')

        for board_id in sorted(boards_alterados):
            notificar_board(board_id, 'board_refresh', {'motivo': 'rebalanceamento'})

        if total_colunas == 0:
            self.stdout.write(self.style.SUCCESS('✅ Nenhuma coluna precisava ser renumerada'))
            return

        self.stdout.write(
            self.style.SUCCESS(f'✅ {total_colunas} colunas renumeradas')
        )
