# cardcore/apps/scoring/models.py
from __future__ import annotations

from django.db import models
from django.contrib.auth.models import User


class UnitScore(models.Model):
    """
    Resultado de un hoyo para un participante.
    Unicidad por (participant, unit_index): volver a cargar el hoyo lo sobrescribe.
    """
    participant = models.ForeignKey(
        "roster.Participant",
        on_delete=models.CASCADE,
        related_name="unit_scores",
    )
    unit_index = models.PositiveSmallIntegerField(help_text="Número de hoyo (1..unit_count de la ronda).")

    strokes = models.PositiveSmallIntegerField()
    putts = models.PositiveSmallIntegerField(null=True, blank=True)
    fairway_hit = models.BooleanField(null=True, blank=True)
    green_in_regulation = models.BooleanField(null=True, blank=True)

    # Quién cargó la fila (organizador o el propio participante)
    entered_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True, blank=True, related_name="entered_unit_scores",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("participant_id", "unit_index")
        constraints = [
            models.UniqueConstraint(fields=("participant", "unit_index"), name="uniq_participant_unit"),
            models.CheckConstraint(condition=models.Q(unit_index__gte=1), name="unit_index_positive"),
            models.CheckConstraint(condition=models.Q(strokes__gte=1), name="strokes_positive"),
            models.CheckConstraint(
                condition=models.Q(putts__isnull=True) | models.Q(putts__lte=models.F("strokes")),
                name="putts_not_over_strokes",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant} · H{self.unit_index} = {self.strokes}"

    def as_dict(self) -> dict:
        return {
            "unit_index": self.unit_index,
            "strokes": self.strokes,
            "putts": self.putts,
            "fairway_hit": self.fairway_hit,
            "green_in_regulation": self.green_in_regulation,
            "entered_by": self.entered_by_id,
        }
