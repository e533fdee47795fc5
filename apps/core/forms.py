# apps/core/forms.py

from django import forms
from .models import Candidatura


class CandidaturaForm(forms.ModelForm):
    """
    Validação dos dados de uma candidatura nova

    Só aceita colunas do board informado. A ordem não vem do cliente:
    é calculada pelo motor na criação.
    """

    class Meta:
        model = Candidatura
        fields = [
            'coluna', 'empresa', 'cargo', 'localizacao', 'link',
            'salario', 'notas', 'data_candidatura',
        ]

    def __init__(self, *args, **kwargs):
        board = kwargs.pop('board')
        super().__init__(*args, **kwargs)

        self.fields['coluna'].queryset = board.colunas.all()
