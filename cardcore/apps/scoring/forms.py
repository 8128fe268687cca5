# cardcore/apps/scoring/forms.py
from __future__ import annotations

from django import forms

from cardcore.apps.core.conf import scorecard_setting


class UnitScoreForm(forms.Form):
    """
    Valida una entrada de score antes de tocar la BD.
    - unit_index en [1, unit_count] de la ronda
    - strokes en [PRIMARY_MIN, PRIMARY_MAX]
    - putts (opcional) en [0, strokes]
    """
    unit_index = forms.IntegerField(label="Hoyo")
    strokes = forms.IntegerField(label="Golpes")
    putts = forms.IntegerField(label="Putts", required=False)
    fairway_hit = forms.NullBooleanField(required=False)
    green_in_regulation = forms.NullBooleanField(required=False)

    def __init__(self, *args, **kwargs):
        self.unit_count: int = kwargs.pop("unit_count")
        super().__init__(*args, **kwargs)

    def clean_unit_index(self):
        idx = self.cleaned_data["unit_index"]
        if not (1 <= idx <= self.unit_count):
            raise forms.ValidationError(f"Hoyo inválido: {idx}. Debe estar entre 1 y {self.unit_count}.")
        return idx

    def clean_strokes(self):
        strokes = self.cleaned_data["strokes"]
        lo = int(scorecard_setting("PRIMARY_MIN"))
        hi = int(scorecard_setting("PRIMARY_MAX"))
        if not (lo <= strokes <= hi):
            raise forms.ValidationError(f"Golpes inválidos: {strokes}. Debe estar entre {lo} y {hi}.")
        return strokes

    def clean(self):
        cleaned = super().clean()
        strokes = cleaned.get("strokes")
        putts = cleaned.get("putts")
        if putts is not None:
            if putts < 0:
                self.add_error("putts", f"Putts inválidos: {putts}. No pueden ser negativos.")
            elif strokes is not None and putts > strokes:
                self.add_error("putts", f"Putts inválidos: {putts}. Deben estar entre 0 y {strokes}.")
        return cleaned
