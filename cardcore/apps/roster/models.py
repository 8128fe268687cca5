from __future__ import annotations

from django.db import models
from django.contrib.auth.models import User


class Participant(models.Model):
    """Jugador invitado a una ronda compartida.

    Los campos agregados (total_score, to_par, units_completed, last_score_update)
    sólo los escribe scoring.services.aggregation a partir de los UnitScore.
    Un participante no confirmado no tiene scores.
    """
    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_DECLINED = "declined"
    STATUS_CHOICES = (
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_DECLINED, "Declined"),
    )

    ENTERED_BY_OWNER = "owner"
    ENTERED_BY_PARTICIPANT = "participant"
    ENTERED_BY_CHOICES = (
        (ENTERED_BY_OWNER, "Organizador (pre-carga)"),
        (ENTERED_BY_PARTICIPANT, "Participante"),
    )

    round = models.ForeignKey("rounds.Round", on_delete=models.CASCADE, related_name="participants")
    identity = models.ForeignKey(User, on_delete=models.CASCADE, related_name="round_entries")

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    attested_at = models.DateTimeField(null=True, blank=True)

    scores_entered_by = models.CharField(max_length=12, choices=ENTERED_BY_CHOICES, blank=True, default="")
    scores_confirmed = models.BooleanField(default=False)

    # Agregados
    total_score = models.PositiveIntegerField(default=0)
    to_par = models.IntegerField(null=True, blank=True)
    units_completed = models.PositiveSmallIntegerField(default=0)
    last_score_update = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("round", "identity"),)
        ordering = ("round", "created_at", "id")

    def __str__(self) -> str:
        return f"{self.identity} · {self.round} · {self.status}"

    @property
    def is_confirmed(self) -> bool:
        return self.status == self.STATUS_CONFIRMED

    def totals_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "to_par": self.to_par,
            "units_completed": self.units_completed,
            "last_score_update": self.last_score_update.isoformat() if self.last_score_update else None,
        }
