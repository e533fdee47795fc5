# apps/core/tests/test_models.py

from datetime import date

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.core.models import Board, Candidatura

User = get_user_model()


class BoardTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.usuario = User.objects.create_user(username='ana', password='senha-forte-123')

    def test_board_novo_ganha_colunas_padrao(self):
        board = Board.objects.create(titulo='Vagas', dono=self.usuario)

        self.assertEqual(
            list(board.colunas.values_list('titulo', 'ordem')),
            [('Salvas', 0), ('Candidatadas', 1), ('Entrevista', 2), ('Oferta', 3), ('Rejeitadas', 4)]
        )

    def test_salvar_de_novo_nao_duplica_colunas(self):
        board = Board.objects.create(titulo='Vagas', dono=self.usuario)
        board.titulo = 'Vagas 2026'
        board.save()

        self.assertEqual(board.colunas.count(), len(Board.COLUNAS_PADRAO))


class CandidaturaTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.usuario = User.objects.create_user(username='ana', password='senha-forte-123')
        cls.board = Board.objects.create(titulo='Vagas', dono=cls.usuario)
        cls.salvas, cls.candidatadas = cls.board.colunas.order_by('ordem')[:2]

    def criar(self, coluna, ordem, **campos):
        return Candidatura.objects.create(
            empresa=campos.pop('empresa', 'ACME'),
            cargo=campos.pop('cargo', 'Dev'),
            coluna=coluna,
            ordem=ordem,
            criado_por=self.usuario,
            **campos
        )

    def test_candidaturas_em_ordem(self):
        c = self.criar(self.salvas, 300)
        a = self.criar(self.salvas, 100)
        b = self.criar(self.salvas, 100)

        self.assertEqual(list(self.salvas.candidaturas_em_ordem()), [a, b, c])

    def test_to_dict(self):
        candidatura = self.criar(
            self.salvas, 100,
            empresa='Initech', cargo='QA', data_candidatura=date(2026, 3, 1)
        )

        dados = candidatura.to_dict()
        self.assertEqual(dados['coluna_id'], self.salvas.id)
        self.assertEqual(dados['ordem'], 100)
        self.assertEqual(dados['data_candidatura'], '2026-03-01')
        self.assertEqual(candidatura.board, self.board)
        self.assertEqual(str(candidatura), 'QA @ Initech')

    def test_loga_mudanca_de_coluna_por_save(self):
        candidatura = self.criar(self.salvas, 100)
        candidatura.coluna = self.candidatadas

        with self.assertLogs('apps.core.signals', level='INFO') as logs:
            candidatura.save()

        self.assertIn(f'para {self.candidatadas.id}', logs.output[0])
