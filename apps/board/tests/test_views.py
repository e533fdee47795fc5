# apps/board/tests/test_views.py

import json
from unittest.mock import AsyncMock, patch

from channels.layers import get_channel_layer
from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from apps.board.exceptions import StorageError
from apps.core.models import Board, Candidatura
from .base import BoardFixturesMixin

User = get_user_model()


class BaseViewTest(BoardFixturesMixin, TestCase):

    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.outro_usuario = User.objects.create_user(username='bruno', password='senha-forte-456')
        cls.outro_board = Board.objects.create(titulo='Board do Bruno', dono=cls.outro_usuario)

    def setUp(self):
        self.client.force_login(self.usuario)
        patcher = patch('apps.board.servicos.notificar_board')
        self.notificar = patcher.start()
        self.addCleanup(patcher.stop)

    def post_json(self, url, dados, **extra):
        return self.client.post(url, data=json.dumps(dados), content_type='application/json', **extra)


class BoardKanbanViewTest(BaseViewTest):

    def test_estado_do_board(self):
        a = self.criar_candidatura(self.salvas, 200)
        b = self.criar_candidatura(self.salvas, 100)

        response = self.client.get(reverse('board:kanban', args=[self.board.id]))

        self.assertEqual(response.status_code, 200)
        dados = response.json()
        self.assertEqual(len(dados['colunas']), 5)
        self.assertEqual([c['id'] for c in dados['colunas'][0]['candidaturas']], [b.id, a.id])

    def test_board_de_outro_usuario(self):
        response = self.client.get(reverse('board:kanban', args=[self.outro_board.id]))
        self.assertEqual(response.status_code, 403)

    def test_board_inexistente(self):
        response = self.client.get(reverse('board:kanban', args=[999999]))
        self.assertEqual(response.status_code, 404)

    def test_anonimo_vai_para_login(self):
        self.client.logout()
        response = self.client.get(reverse('board:kanban', args=[self.board.id]))
        self.assertEqual(response.status_code, 302)
        self.assertIn('/accounts/login/', response['Location'])


class MoverItemViewTest(BaseViewTest):

    def setUp(self):
        super().setUp()
        self.url = reverse('board:mover_item')
        self.a = self.criar_candidatura(self.salvas, 100)
        self.b = self.criar_candidatura(self.salvas, 200)

    def payload(self, **dados):
        base = {
            'item_id': self.a.id,
            'origem_id': self.salvas.id,
            'destino_id': self.entrevista.id,
        }
        base.update(dados)
        return base

    def test_mover_entre_colunas(self):
        response = self.post_json(self.url, self.payload(indice_destino=0))

        self.assertEqual(response.status_code, 200)
        dados = response.json()
        self.assertTrue(dados['success'])
        self.assertFalse(dados['noop'])
        self.assertEqual(dados['write_set'], [
            {'item_id': self.a.id, 'coluna_id': self.entrevista.id, 'ordem': 100},
        ])
        self.assertEqual(dados['colunas'][str(self.salvas.id)], [{'id': self.b.id, 'ordem': 200}])
        self.assertEqual(Candidatura.objects.get(id=self.a.id).coluna_id, self.entrevista.id)
        self.notificar.assert_called_once()

    def test_form_encoded(self):
        response = self.client.post(self.url, {
            'item_id': self.b.id,
            'origem_id': self.salvas.id,
            'destino_id': self.salvas.id,
            'alvo_id': self.a.id,
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [item_id for item_id, _ in self.sequencia(self.salvas)],
            [self.b.id, self.a.id]
        )

    def test_movimento_sem_mudanca(self):
        response = self.post_json(self.url, self.payload(destino_id=self.salvas.id, indice_destino=0))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['noop'])
        self.notificar.assert_not_called()

    def test_htmx_recebe_hx_trigger(self):
        response = self.post_json(self.url, self.payload(), HTTP_HX_REQUEST='true')
        self.assertEqual(response['HX-Trigger'], 'board-atualizado')

    def test_sem_htmx_nao_tem_hx_trigger(self):
        response = self.post_json(self.url, self.payload())
        self.assertNotIn('HX-Trigger', response)

    def test_json_invalido(self):
        response = self.client.post(self.url, data='{item_id: 1', content_type='application/json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['codigo'], 'invalid_move')
        self.assertTrue(response.json()['rollback'])

    def test_campo_ausente(self):
        response = self.post_json(self.url, {'item_id': self.a.id})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])

    def test_candidatura_inexistente(self):
        response = self.post_json(self.url, self.payload(item_id=999999))
        self.assertEqual(response.status_code, 400)

    def test_origem_desatualizada(self):
        response = self.post_json(self.url, self.payload(origem_id=self.oferta.id))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['codigo'], 'invalid_move')
        self.assertEqual(Candidatura.objects.get(id=self.a.id).coluna_id, self.salvas.id)

    def test_coluna_destino_inexistente(self):
        response = self.post_json(self.url, self.payload(destino_id=999999))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['codigo'], 'group_not_found')
        self.assertTrue(response.json()['rollback'])

    def test_coluna_destino_de_outro_board(self):
        coluna_alheia = self.outro_board.colunas.first()
        response = self.post_json(self.url, self.payload(destino_id=coluna_alheia.id))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(Candidatura.objects.get(id=self.a.id).coluna_id, self.salvas.id)

    def test_candidatura_de_outro_usuario(self):
        self.client.force_login(self.outro_usuario)
        response = self.post_json(self.url, self.payload())

        self.assertEqual(response.status_code, 403)
        self.assertTrue(response.json()['rollback'])

    def test_erro_de_armazenamento(self):
        with patch('apps.board.repositorio.RepositorioCandidaturas.apply_write_set',
                   side_effect=StorageError('banco fora')):
            response = self.post_json(self.url, self.payload())

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()['codigo'], 'storage_error')
        self.assertTrue(response.json()['rollback'])

    def test_get_nao_permitido(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 405)


class CriarCandidaturaViewTest(BaseViewTest):

    def setUp(self):
        super().setUp()
        self.url = reverse('board:criar_candidatura', args=[self.board.id])

    def test_criar_no_final(self):
        self.criar_candidatura(self.salvas, 300)

        response = self.post_json(self.url, {
            'coluna_id': self.salvas.id,
            'empresa': 'ACME',
            'cargo': 'Dev Python',
            'data_candidatura': '2026-03-01',
        })

        self.assertEqual(response.status_code, 201)
        item = response.json()['item']
        self.assertEqual(item['ordem'], 400)
        self.assertEqual(item['data_candidatura'], '2026-03-01')
        self.assertEqual(Candidatura.objects.get(id=item['id']).criado_por, self.usuario)

    def test_form_encoded(self):
        response = self.client.post(self.url, {
            'coluna_id': self.oferta.id,
            'empresa': 'Initech',
            'cargo': 'QA',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['item']['ordem'], 100)

    def test_campos_obrigatorios(self):
        response = self.post_json(self.url, {'coluna_id': self.salvas.id, 'empresa': 'ACME'})
        self.assertEqual(response.status_code, 400)

        response = self.post_json(self.url, {'coluna_id': 'abc', 'empresa': 'ACME', 'cargo': 'Dev'})
        self.assertEqual(response.status_code, 400)

    def test_data_invalida(self):
        response = self.post_json(self.url, {
            'coluna_id': self.salvas.id, 'empresa': 'ACME', 'cargo': 'Dev',
            'data_candidatura': '31/02/2026',
        })
        self.assertEqual(response.status_code, 400)

    def test_coluna_de_outro_board(self):
        response = self.post_json(self.url, {
            'coluna_id': self.outro_board.colunas.first().id,
            'empresa': 'ACME',
            'cargo': 'Dev',
        })
        self.assertEqual(response.status_code, 404)

    def test_link_invalido(self):
        response = self.post_json(self.url, {
            'coluna_id': self.salvas.id,
            'empresa': 'ACME',
            'cargo': 'Dev',
            'link': 'javascript:alert(1)',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('link', response.json()['erros'])
        self.assertFalse(Candidatura.objects.exists())

    def test_empresa_longa_demais(self):
        response = self.post_json(self.url, {
            'coluna_id': self.salvas.id,
            'empresa': 'A' * 201,
            'cargo': 'Dev',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['erros']['empresa'][0]['code'], 'max_length')
        self.assertFalse(Candidatura.objects.exists())

    def test_payload_que_nao_e_objeto(self):
        response = self.post_json(self.url, [1, 2, 3])
        self.assertEqual(response.status_code, 400)


class ExcluirCandidaturaViewTest(BaseViewTest):

    def test_excluir(self):
        candidatura = self.criar_candidatura(self.salvas, 100)

        response = self.client.post(reverse('board:excluir_candidatura', args=[candidatura.id]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'success': True, 'item_id': candidatura.id})
        self.assertFalse(Candidatura.objects.filter(id=candidatura.id).exists())

    def test_excluir_de_outro_usuario(self):
        candidatura = self.criar_candidatura(self.salvas, 100)
        self.client.force_login(self.outro_usuario)

        response = self.client.post(reverse('board:excluir_candidatura', args=[candidatura.id]))

        self.assertEqual(response.status_code, 403)
        self.assertTrue(Candidatura.objects.filter(id=candidatura.id).exists())

    def test_excluir_inexistente(self):
        response = self.client.post(reverse('board:excluir_candidatura', args=[999999]))
        self.assertEqual(response.status_code, 404)


class MoverItemComChannelLayerForaTest(BoardFixturesMixin, TestCase):

    def test_movimento_gravado_responde_sucesso(self):
        candidatura = self.criar_candidatura(self.salvas, 100)
        self.client.force_login(self.usuario)

        channel_layer = get_channel_layer()
        with patch.object(channel_layer, 'group_send', AsyncMock(side_effect=ConnectionError('redis fora'))):
            response = self.client.post(
                reverse('board:mover_item'),
                data=json.dumps({
                    'item_id': candidatura.id,
                    'origem_id': self.salvas.id,
                    'destino_id': self.oferta.id,
                }),
                content_type='application/json',
            )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['success'])
        self.assertEqual(response.json()['colunas'][str(self.oferta.id)], [{'id': candidatura.id, 'ordem': 100}])
        self.assertEqual(Candidatura.objects.get(id=candidatura.id).coluna_id, self.oferta.id)
