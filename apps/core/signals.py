# apps/core/signals.py

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from .models import Board, Candidatura

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Board)
def criar_colunas_padrao(sender, instance, created, **kwargs):
    """
    Cria colunas padrão quando um novo board é criado
    APENAS se o board ainda não tem colunas
    """
    if created and not instance.colunas.exists():
        instance.criar_colunas_padrao()


@receiver(pre_save, sender=Candidatura)
def registrar_mudanca_coluna(sender, instance, **kwargs):
    """
    Loga quando uma candidatura muda de coluna por save() individual
    (movimentos do board passam por bulk_update e não disparam sinais)
    """
    if not instance.pk:
        return

    coluna_anterior = sender.objects.filter(pk=instance.pk).values_list('coluna_id', flat=True).first()
    if coluna_anterior is not None and coluna_anterior != instance.coluna_id:
        logger.info(
            f"📋 Candidatura {instance.pk} mudou da coluna {coluna_anterior} "
            f"para {instance.coluna_id}"
        )
