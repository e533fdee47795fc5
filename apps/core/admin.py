# apps/core/admin.py

from django.contrib import admin, messages
from django.utils.html import format_html
from apps.board.exceptions import StorageError
from apps.board.reconciliacao import MotorReconciliacao
from apps.board.repositorio import RepositorioCandidaturas
from apps.board.servicos import notificar_board
from .models import Board, Coluna, Candidatura


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin para boards Kanban"""

    list_display = [
        'titulo', 'dono', 'colunas_count', 'candidaturas_count',
        'ativo', 'criado_em'
    ]
    list_filter = ['ativo', 'criado_em']
    search_fields = ['titulo', 'descricao', 'dono__username']
    readonly_fields = ['criado_em']

    def colunas_count(self, obj):
        """Conta colunas do board"""
        return obj.colunas.count()

    colunas_count.short_description = 'Colunas'

    def candidaturas_count(self, obj):
        """Conta candidaturas do board"""
        return Candidatura.objects.filter(coluna__board=obj).count()

    candidaturas_count.short_description = 'Candidaturas'


class CandidaturaInline(admin.TabularInline):
    """Candidaturas da coluna na ordem do board"""
    model = Candidatura
    extra = 0
    fields = ['empresa', 'cargo', 'ordem']
    ordering = ['ordem', 'id']


@admin.register(Coluna)
class ColunaAdmin(admin.ModelAdmin):
    """Admin para colunas do Kanban"""

    list_display = ['titulo', 'board', 'ordem', 'candidaturas_count', 'cor_preview']
    list_filter = ['board']
    search_fields = ['titulo', 'board__titulo']
    ordering = ['board', 'ordem']

    inlines = [CandidaturaInline]
    actions = ['renumerar_candidaturas']

    @admin.action(description='Renumerar candidaturas (100, 200, 300...)')
    def renumerar_candidaturas(self, request, queryset):
        """Mesmo efeito do comando rebalancear_colunas --todas, só nas colunas selecionadas"""
        repositorio = RepositorioCandidaturas()
        motor = MotorReconciliacao()
        renumeradas = 0
        nivel = messages.SUCCESS

        for coluna in queryset:
            itens = repositorio.fetch_group_items_sorted(coluna.id) or []
            if not itens:
                continue
            try:
                repositorio.apply_write_set(motor.plan_rebalance(coluna.id, itens))
            except StorageError as e:
                self.message_user(request, f'Erro ao renumerar {coluna}: {e}', messages.ERROR)
                nivel = messages.WARNING
                break
            renumeradas += 1
            notificar_board(coluna.board_id, 'board_refresh', {'motivo': 'rebalanceamento'})

        # Também após erro: as colunas anteriores já foram gravadas
        self.message_user(request, f'{renumeradas} colunas renumeradas', nivel)

    def candidaturas_count(self, obj):
        """Conta candidaturas na coluna"""
        return obj.candidaturas.count()

    candidaturas_count.short_description = 'Candidaturas'

    def cor_preview(self, obj):
        """Preview da cor da coluna"""
        return format_html(
            '<div style="width: 20px; height: 20px; background-color: {}; '
            'border: 1px solid #ccc; border-radius: 3px;"></div>',
            obj.cor
        )

    cor_preview.short_description = 'Cor'


@admin.register(Candidatura)
class CandidaturaAdmin(admin.ModelAdmin):
    """Admin para candidaturas"""

    list_display = ['cargo', 'empresa', 'coluna', 'ordem', 'data_candidatura', 'atualizado_em']
    list_filter = ['coluna__board', 'coluna__titulo']
    search_fields = ['cargo', 'empresa', 'localizacao', 'notas']
    readonly_fields = ['criado_em', 'atualizado_em']
    ordering = ['coluna', 'ordem']

    fieldsets = (
        ('Vaga', {
            'fields': ('empresa', 'cargo', 'localizacao', 'link', 'salario')
        }),
        ('Acompanhamento', {
            'fields': ('coluna', 'ordem', 'data_candidatura', 'notas', 'criado_por')
        }),
        ('Datas', {
            'fields': ('criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )
