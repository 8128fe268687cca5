# cardcore/apps/scoring/services/ledger.py
"""
Ledger de scores por hoyo.

Cada escritura (put / delete / lote) es una sola transacción:
autorización → validación → persistencia → recalculo de totales.
La fila del participante se bloquea (select_for_update) mientras dura, de modo
que organizador y participante escribiendo a la vez se serializan sólo sobre
ese participante; no hay bloqueo entre participantes distintos.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from django.db import IntegrityError, transaction

from cardcore.apps.core import access
from cardcore.apps.core.exceptions import NotFoundError, ValidationError, validation_error_from_form
from cardcore.apps.roster.models import Participant
from ..forms import UnitScoreForm
from ..models import UnitScore
from .aggregation import persisted_totals, recompute

logger = logging.getLogger(__name__)

SCORE_FIELDS = ("strokes", "putts", "fairway_hit", "green_in_regulation")

# Resultado por entrada
CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"


# -------------------------------
# Utilidades
# -------------------------------
def _lock_participant(participant_id: Any) -> Participant:
    try:
        return (
            Participant.objects.select_for_update(of=("self",))
            .select_related("round")
            .get(pk=participant_id)
        )
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Participante no encontrado.")


def _validate_entry(participant: Participant, data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Cada score debe ser un objeto.")
    form = UnitScoreForm(data, unit_count=participant.round.unit_count)
    if not form.is_valid():
        raise validation_error_from_form(form, "Score inválido.")
    return form.cleaned_data


def _upsert(participant: Participant, cleaned: Dict[str, Any], origin_id: Any) -> Tuple[UnitScore, str]:
    """Alta o sobrescritura por (participant, unit_index). Sin cambios → no se guarda."""
    values = {k: cleaned.get(k) for k in SCORE_FIELDS}
    existing = UnitScore.objects.filter(participant=participant, unit_index=cleaned["unit_index"]).first()

    if existing is None:
        obj = UnitScore.objects.create(
            participant=participant,
            unit_index=cleaned["unit_index"],
            entered_by_id=origin_id,
            **values,
        )
        return obj, CREATED

    if all(getattr(existing, k) == v for k, v in values.items()) and existing.entered_by_id == origin_id:
        return existing, UNCHANGED

    for k, v in values.items():
        setattr(existing, k, v)
    existing.entered_by_id = origin_id
    existing.save()
    return existing, UPDATED


def _mark_origin(participant: Participant, origin_id: Any) -> None:
    """
    Registra quién originó los scores. Si el propio participante los carga,
    quedan confirmados por él.
    """
    if access.is_self(origin_id, participant):
        updates = {"scores_entered_by": Participant.ENTERED_BY_PARTICIPANT, "scores_confirmed": True}
    else:
        updates = {"scores_entered_by": Participant.ENTERED_BY_OWNER}
    Participant.objects.filter(pk=participant.pk).update(**updates)
    for k, v in updates.items():
        setattr(participant, k, v)


# -------------------------------
# Operaciones
# -------------------------------
def put_unit_score(
    participant_id: Any,
    unit_index: int,
    strokes: int,
    putts: Optional[int] = None,
    fairway_hit: Optional[bool] = None,
    green_in_regulation: Optional[bool] = None,
    *,
    origin_id: Any,
) -> UnitScore:
    """Upsert de un hoyo. Devuelve el UnitScore; score.participant trae los totales nuevos."""
    data = {
        "unit_index": unit_index,
        "strokes": strokes,
        "putts": putts,
        "fairway_hit": fairway_hit,
        "green_in_regulation": green_in_regulation,
    }
    with transaction.atomic():
        participant = _lock_participant(participant_id)
        access.authorize(access.WRITE_SCORE, origin_id, participant.round, participant)
        cleaned = _validate_entry(participant, data)
        score, outcome = _upsert(participant, cleaned, origin_id)
        # Reenviar el mismo score no toca la fila del participante
        if outcome != UNCHANGED:
            _mark_origin(participant, origin_id)
            recompute(participant)
    score.participant = participant
    logger.info(
        "Score %s participant=%s hoyo=%s por=%s", outcome, participant.pk, score.unit_index, origin_id,
    )
    return score


def delete_unit_score(participant_id: Any, unit_index: int, *, caller_id: Any) -> Dict[str, Any]:
    """
    Borra un hoyo y recalcula. Si el hoyo no tenía score es un no-op
    (se devuelven los totales guardados).
    """
    with transaction.atomic():
        participant = _lock_participant(participant_id)
        access.authorize(access.WRITE_SCORE, caller_id, participant.round, participant)
        deleted, _ = UnitScore.objects.filter(participant=participant, unit_index=unit_index).delete()
        totals = recompute(participant) if deleted else persisted_totals(participant)
    logger.info(
        "Score borrado participant=%s hoyo=%s por=%s (filas=%s)", participant.pk, unit_index, caller_id, deleted,
    )
    return totals


def list_unit_scores(participant_id: Any) -> List[UnitScore]:
    try:
        found = Participant.objects.filter(pk=participant_id).exists()
    except (ValueError, TypeError):
        found = False
    if not found:
        raise NotFoundError("Participante no encontrado.")
    return list(UnitScore.objects.filter(participant_id=participant_id).order_by("unit_index"))


def submit_scores(participant_id: Any, entries: Any, *, origin_id: Any) -> Dict[str, Any]:
    """
    Carga por lote. La autorización se evalúa una vez; cada entrada se valida
    y aplica en su propio savepoint: si una falla, las demás quedan aplicadas.
    Devuelve el resultado por entrada y los totales tras un único recalculo.
    """
    if not isinstance(entries, list) or not entries:
        raise ValidationError("scores debe ser una lista no vacía.")

    results: List[Dict[str, Any]] = []
    with transaction.atomic():
        participant = _lock_participant(participant_id)
        access.authorize(access.WRITE_SCORE, origin_id, participant.round, participant)

        touched = False
        for position, data in enumerate(entries):
            unit_index = data.get("unit_index") if isinstance(data, dict) else None
            try:
                cleaned = _validate_entry(participant, data)
                with transaction.atomic():
                    score, outcome = _upsert(participant, cleaned, origin_id)
            except ValidationError as exc:
                results.append({"position": position, "unit_index": unit_index, "ok": False, **exc.as_dict()})
                continue
            except IntegrityError as exc:
                logger.warning("Score rechazado por la BD participant=%s hoyo=%s: %s", participant.pk, unit_index, exc)
                results.append({"position": position, "unit_index": unit_index, "ok": False, "error": "Score rechazado."})
                continue
            touched = touched or outcome != UNCHANGED
            results.append({"position": position, "unit_index": score.unit_index, "ok": True, "status": outcome})

        if touched:
            _mark_origin(participant, origin_id)
            totals = recompute(participant)
        else:
            totals = persisted_totals(participant)

    applied = sum(1 for r in results if r["ok"])
    logger.info(
        "Lote de scores participant=%s por=%s: %s/%s aplicados", participant.pk, origin_id, applied, len(results),
    )
    return {
        "participant_id": participant.pk,
        "results": results,
        "applied": applied,
        "failed": len(results) - applied,
        "totals": totals,
    }
