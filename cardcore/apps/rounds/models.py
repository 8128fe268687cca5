from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone

from cardcore.apps.core.conf import default_target_per_unit


class Round(models.Model):
    """
    Ronda compartida: un organizador, N hoyos (unidades) fijos y un roster.
    unit_count es el denominador de todo el prorrateo; no cambia después de crearse.
    """
    STATUS_ACTIVE = "active"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"
    STATUS_CHOICES = (
        (STATUS_ACTIVE, "Active"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    )

    ENV_OUTDOOR = "outdoor"
    ENV_INDOOR = "indoor"
    ENVIRONMENT_CHOICES = (
        (ENV_OUTDOOR, "Outdoor (campo)"),
        (ENV_INDOOR, "Indoor (simulador)"),
    )

    # Atributos que sólo aplican a rondas en campo
    OUTDOOR_FIELDS = ("tee_color", "slope_rating", "course_rating", "weather", "temperature", "wind_speed")

    organizer = models.ForeignKey(User, on_delete=models.CASCADE, related_name="organized_rounds")
    context_label = models.CharField("Campo", max_length=160)
    played_on = models.DateField(default=timezone.localdate)
    unit_count = models.PositiveSmallIntegerField(help_text="Hoyos de la ronda (1..18).")
    environment = models.CharField(max_length=8, choices=ENVIRONMENT_CHOICES, default=ENV_OUTDOOR)
    target_per_unit = models.DecimalField(
        max_digits=4, decimal_places=2, null=True, blank=True,
        help_text="Par por hoyo. Si está vacío se usa el estimado de settings.",
    )

    # Sólo outdoor
    tee_color = models.CharField(max_length=32, blank=True)
    slope_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    course_rating = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    weather = models.CharField(max_length=64, blank=True)
    temperature = models.IntegerField(null=True, blank=True)
    wind_speed = models.PositiveSmallIntegerField(null=True, blank=True)

    # Publicación (referencia opaca a un post externo)
    post_id = models.CharField(max_length=64, blank=True, default="")
    is_public = models.BooleanField(default=False, help_text="La tarjeta es visible para cualquiera.")

    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-played_on", "-created_at")
        constraints = [
            models.CheckConstraint(
                condition=models.Q(unit_count__gte=1),
                name="round_unit_count_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.context_label} · {self.played_on} · {self.unit_count}h"

    @property
    def effective_target_per_unit(self) -> Decimal:
        if self.target_per_unit is not None:
            return Decimal(self.target_per_unit)
        return default_target_per_unit()

    @property
    def target_total(self) -> Decimal:
        return self.effective_target_per_unit * self.unit_count

    @property
    def is_frozen(self) -> bool:
        return self.status == self.STATUS_CANCELLED
