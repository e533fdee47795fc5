# apps/board/exceptions.py

"""
Erros do motor de reconciliação de posições

Hierarquia:
- EngineError: base para erros que chegam ao chamador
  - InvalidMove: item não está na coluna de origem informada ou payload malformado
  - GroupNotFound: coluna de destino não existe
- StorageError: falha do repositório (conexão, constraint, linhas ausentes)
- NeedsRebalance: sinal interno, nunca sai do motor
"""


class EngineError(Exception):
    """Erro base do motor de reconciliação"""

    codigo = 'engine_error'

    def __init__(self, mensagem, **contexto):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.contexto = contexto

    def to_dict(self):
        return {
            'error': self.mensagem,
            'codigo': self.codigo,
        }


class InvalidMove(EngineError):
    """Item não encontrado na coluna de origem, ou payload de movimentação inválido"""

    codigo = 'invalid_move'


class GroupNotFound(EngineError):
    """Coluna de destino inexistente (estado do cliente desatualizado)"""

    codigo = 'group_not_found'


class StorageError(Exception):
    """Falha ao aplicar um write-set no banco"""

    codigo = 'storage_error'

    def to_dict(self):
        return {
            'error': str(self),
            'codigo': self.codigo,
        }


class NeedsRebalance(Exception):
    """Não existe gap inteiro entre os vizinhos - a coluna precisa ser renumerada"""

    def __init__(self, ordem_anterior=None, ordem_posterior=None):
        super().__init__(
            f"Sem espaço entre as ordens {ordem_anterior} e {ordem_posterior}"
        )
        self.ordem_anterior = ordem_anterior
        self.ordem_posterior = ordem_posterior
