# apps/core/models.py

from django.conf import settings
from django.db import models


class Board(models.Model):
    """Quadro Kanban de candidaturas de um usuário"""

    COLUNAS_PADRAO = [
        ('Salvas', '#6B7280'),
        ('Candidatadas', '#3B82F6'),
        ('Entrevista', '#F59E0B'),
        ('Oferta', '#10B981'),
        ('Rejeitadas', '#EF4444'),
    ]

    titulo = models.CharField(max_length=200)
    descricao = models.TextField(blank=True)
    dono = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='boards'
    )
    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'board'
        ordering = ['titulo']

    def __str__(self):
        return self.titulo

    def criar_colunas_padrao(self):
        """Cria colunas padrão para novo board"""
        for idx, (nome, cor) in enumerate(self.COLUNAS_PADRAO):
            Coluna.objects.create(
                titulo=nome,
                board=self,
                ordem=idx,
                cor=cor
            )


class Coluna(models.Model):
    """
    Coluna do board Kanban

    A sequência de candidaturas da coluna não é guardada em lugar nenhum:
    é sempre derivada ordenando as candidaturas por `ordem`.
    """

    titulo = models.CharField(max_length=100)
    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='colunas'
    )
    ordem = models.IntegerField(default=0)
    cor = models.CharField(max_length=7, default='#6B7280')

    class Meta:
        db_table = 'coluna'
        ordering = ['ordem', 'titulo']
        unique_together = ['board', 'ordem']

    def __str__(self):
        return f"{self.titulo} - {self.board.titulo}"

    def candidaturas_em_ordem(self):
        """Sequência visível da coluna"""
        return self.candidaturas.order_by('ordem', 'id')


class Candidatura(models.Model):
    """Card do board: uma candidatura a uma vaga"""

    empresa = models.CharField(max_length=200)
    cargo = models.CharField(max_length=200)
    localizacao = models.CharField(max_length=200, blank=True)
    link = models.URLField(blank=True)
    salario = models.CharField(max_length=100, blank=True)
    notas = models.TextField(blank=True)
    data_candidatura = models.DateField(null=True, blank=True)

    coluna = models.ForeignKey(
        Coluna,
        on_delete=models.CASCADE,
        related_name='candidaturas'
    )
    ordem = models.IntegerField(default=0)

    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='candidaturas'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'candidatura'
        ordering = ['coluna', 'ordem', 'id']
        indexes = [
            models.Index(fields=['coluna', 'ordem'], name='candidatura_coluna_ordem_idx'),
        ]

    def __str__(self):
        return f"{self.cargo} @ {self.empresa}"

    @property
    def board(self):
        return self.coluna.board

    def to_dict(self):
        return {
            'id': self.id,
            'empresa': self.empresa,
            'cargo': self.cargo,
            'localizacao': self.localizacao,
            'link': self.link,
            'salario': self.salario,
            'data_candidatura': self.data_candidatura.isoformat() if self.data_candidatura else None,
            'coluna_id': self.coluna_id,
            'ordem': self.ordem,
        }
