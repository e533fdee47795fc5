# apps/board/apps.py

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class BoardConfig(AppConfig):
    """Configuração da app Board"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.board'
    verbose_name = 'Board - Kanban'

    def ready(self):
        """
        Inicialização da app
        Valida a configuração do gap de ordenação
        """
        from django.conf import settings
        from django.core.exceptions import ImproperlyConfigured
        from .posicoes import GAP

        gap = getattr(settings, 'VAGA_BOARD_ORDEM_GAP', GAP)
        if not isinstance(gap, int) or gap < 2:
            raise ImproperlyConfigured("VAGA_BOARD_ORDEM_GAP deve ser um inteiro >= 2")

        logger.debug(f"🔌 Board App inicializada - gap de ordenação {gap}")
