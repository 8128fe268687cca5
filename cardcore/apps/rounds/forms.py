# cardcore/apps/rounds/forms.py
from __future__ import annotations

from django import forms

from cardcore.apps.core.conf import scorecard_setting
from .models import Round


class RoundConfigForm(forms.ModelForm):
    """Valida la configuración de una ronda nueva (createRound)."""

    class Meta:
        model = Round
        fields = [
            "context_label",
            "played_on",
            "unit_count",
            "environment",
            "target_per_unit",
            "tee_color",
            "slope_rating",
            "course_rating",
            "weather",
            "temperature",
            "wind_speed",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # played_on tiene default en el modelo; en el admin algunos campos pueden venir read-only
        for name in ("played_on", "environment"):
            if name in self.fields:
                self.fields[name].required = False

    def clean_unit_count(self):
        n = self.cleaned_data.get("unit_count")
        max_units = int(scorecard_setting("MAX_UNITS"))
        if n is None or n < 1:
            raise forms.ValidationError("La ronda debe tener al menos 1 hoyo.")
        if n > max_units:
            raise forms.ValidationError(f"Máximo {max_units} hoyos por ronda.")
        return n

    def clean_target_per_unit(self):
        t = self.cleaned_data.get("target_per_unit")
        if t is not None and t <= 0:
            raise forms.ValidationError("El par por hoyo debe ser positivo.")
        return t

    def clean_slope_rating(self):
        s = self.cleaned_data.get("slope_rating")
        if s is not None and not (55 <= s <= 155):
            raise forms.ValidationError("Slope fuera de rango (55-155).")
        return s

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("played_on") is None:
            cleaned.pop("played_on", None)
        if not cleaned.get("environment"):
            cleaned["environment"] = self.instance.environment or Round.ENV_OUTDOOR

        # Indoor: no aplican condiciones de campo
        if cleaned.get("environment") == Round.ENV_INDOOR:
            for name in Round.OUTDOOR_FIELDS:
                if cleaned.get(name) not in (None, ""):
                    self.add_error(name, "Sólo aplica a rondas outdoor.")
        return cleaned

