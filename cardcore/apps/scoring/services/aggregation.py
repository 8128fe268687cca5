# cardcore/apps/scoring/services/aggregation.py
"""
Recalculo de totales de un participante.

Siempre se recalcula desde cero a partir de los UnitScore actuales (nunca por
deltas), dentro de la misma transacción que la escritura que lo dispara.
Así el agregado es función pura del ledger, sin importar el orden en que el
organizador y el participante carguen scores.
"""
from __future__ import annotations

import logging
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, Optional, Union

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from cardcore.apps.core.exceptions import NotFoundError
from cardcore.apps.roster.models import Participant
from ..models import UnitScore

logger = logging.getLogger(__name__)

HALF = Decimal("0.5")


def prorated_target(target_per_unit: Union[Decimal, int, str], units_completed: int, total_score: int) -> int:
    """
    Par prorrateado a los hoyos jugados: target_per_unit * units_completed,
    redondeado al entero más cercano.
    Empate exacto en .5: se elige el vecino más cercano a total_score
    (el que deja la menor desviación absoluta).
    """
    exact = Decimal(str(target_per_unit)) * units_completed
    low = int(exact.to_integral_value(rounding=ROUND_FLOOR))
    frac = exact - low
    if frac < HALF:
        return low
    if frac > HALF:
        return low + 1
    return low + 1 if total_score >= low + 1 else low


def compute_totals(strokes_sum: int, units_completed: int, target_per_unit: Decimal) -> Dict[str, Optional[int]]:
    if units_completed == 0:
        return {"total_score": 0, "units_completed": 0, "prorated_target": None, "to_par": None}
    target = prorated_target(target_per_unit, units_completed, strokes_sum)
    return {
        "total_score": strokes_sum,
        "units_completed": units_completed,
        "prorated_target": target,
        "to_par": strokes_sum - target,
    }


def recompute(participant: Union[Participant, int]) -> Dict[str, Any]:
    """
    Recalcula y persiste total_score / to_par / units_completed / last_score_update.
    Devuelve los totales (incluye prorated_target, que no se persiste).
    """
    if not isinstance(participant, Participant):
        try:
            participant = Participant.objects.select_related("round").get(pk=participant)
        except Participant.DoesNotExist:
            raise NotFoundError("Participante no encontrado.")

    agg = UnitScore.objects.filter(participant_id=participant.pk).aggregate(
        strokes=Coalesce(Sum("strokes"), 0),
        n=Count("id"),
    )
    totals = compute_totals(int(agg["strokes"]), int(agg["n"]), participant.round.effective_target_per_unit)

    now = timezone.now()
    Participant.objects.filter(pk=participant.pk).update(
        total_score=totals["total_score"],
        to_par=totals["to_par"],
        units_completed=totals["units_completed"],
        last_score_update=now,
        updated_at=now,
    )
    # Mantener la instancia en memoria alineada con la fila
    participant.total_score = totals["total_score"]
    participant.to_par = totals["to_par"]
    participant.units_completed = totals["units_completed"]
    participant.last_score_update = now
    participant.updated_at = now

    logger.debug("Totales recalculados participant=%s %s", participant.pk, totals)

    return {
        "participant_id": participant.pk,
        **totals,
        "last_score_update": now.isoformat(),
    }


def persisted_totals(participant: Participant) -> Dict[str, Any]:
    """Totales tal como están guardados, sin recalcular (para escrituras que no cambiaron nada)."""
    to_par = participant.to_par
    return {
        "participant_id": participant.pk,
        "total_score": participant.total_score,
        "units_completed": participant.units_completed,
        "prorated_target": None if to_par is None else participant.total_score - to_par,
        "to_par": to_par,
        "last_score_update": participant.last_score_update.isoformat() if participant.last_score_update else None,
    }
