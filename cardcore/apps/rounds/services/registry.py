# cardcore/apps/rounds/services/registry.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from django.db import transaction
from django.db.models import Prefetch

from cardcore.apps.accounts.identity import get_identity_service
from cardcore.apps.core import access, notifications
from cardcore.apps.core.exceptions import (
    AuthorizationError, NotFoundError, ValidationError, validation_error_from_form,
)
from cardcore.apps.roster.models import Participant
from cardcore.apps.scoring.models import UnitScore
from ..forms import RoundConfigForm
from ..models import Round

logger = logging.getLogger(__name__)

# Transiciones permitidas: destino -> orígenes válidos
TRANSITIONS = {
    Round.STATUS_COMPLETED: (Round.STATUS_ACTIVE,),
    Round.STATUS_CANCELLED: (Round.STATUS_ACTIVE, Round.STATUS_COMPLETED, Round.STATUS_CANCELLED),
}

STATUS_EVENTS = {
    Round.STATUS_COMPLETED: notifications.ROUND_COMPLETED,
    Round.STATUS_CANCELLED: notifications.ROUND_CANCELLED,
}


def get_round(round_id: Any) -> Round:
    try:
        return Round.objects.get(pk=round_id)
    except (Round.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Ronda no encontrada.")


def create(organizer_id: Any, config: Mapping[str, Any]) -> Round:
    """
    Crea una ronda activa. `config`: context_label, unit_count, environment,
    target_per_unit (opcional) y datos de campo opcionales (played_on, tee_color, ...).
    """
    if not get_identity_service().exists(organizer_id):
        raise NotFoundError("Organizador no encontrado.")

    form = RoundConfigForm(dict(config))
    if not form.is_valid():
        raise validation_error_from_form(form, "Configuración de ronda inválida.")

    round_obj: Round = form.save(commit=False)
    round_obj.organizer_id = organizer_id
    round_obj.status = Round.STATUS_ACTIVE
    round_obj.save()
    logger.info(
        "Ronda creada id=%s organizer=%s holes=%s env=%s",
        round_obj.pk, organizer_id, round_obj.unit_count, round_obj.environment,
    )
    return round_obj


def set_status(round_id: Any, caller_id: Any, status: str) -> Round:
    """
    Sólo el organizador.
      - cancelled: desde cualquier estado; final (repetir es no-op)
      - completed: sólo desde active
    Ningún cambio de estado borra datos.
    """
    if status not in TRANSITIONS:
        raise ValidationError(
            "Estado inválido.",
            details={"status": [f"Debe ser uno de: {', '.join(TRANSITIONS)}."]},
        )

    with transaction.atomic():
        try:
            round_obj = Round.objects.select_for_update().get(pk=round_id)
        except (Round.DoesNotExist, ValueError, TypeError):
            raise NotFoundError("Ronda no encontrada.")

        # Cancelar es válido incluso sobre una ronda cancelada; el gate congela el resto
        if not access.is_organizer(caller_id, round_obj):
            raise AuthorizationError(access.DENY_MESSAGES[access.SET_STATUS])
        if round_obj.status == status == Round.STATUS_CANCELLED:
            return round_obj
        if round_obj.status not in TRANSITIONS[status]:
            raise ValidationError(f"Transición inválida: {round_obj.status} → {status}.")

        previous = round_obj.status
        round_obj.status = status
        round_obj.save(update_fields=["status", "updated_at"])

    logger.info("Ronda %s: %s -> %s", round_obj.pk, previous, status)
    notifications.emit(STATUS_EVENTS[status], {"round_id": round_obj.pk, "previous": previous, "status": status})
    return round_obj


def attach_post(round_id: Any, caller_id: Any, post_id: str, *, public: bool = False) -> Round:
    """Vincula la tarjeta a un post externo (referencia opaca, sin integridad referencial)."""
    post_id = str(post_id or "").strip()
    if not post_id:
        raise ValidationError("post_id es obligatorio.")
    if len(post_id) > Round._meta.get_field("post_id").max_length:
        raise ValidationError("post_id demasiado largo.")

    with transaction.atomic():
        round_obj = get_round(round_id)
        access.authorize(access.ATTACH_POST, caller_id, round_obj)
        round_obj.post_id = post_id
        round_obj.is_public = bool(public)
        round_obj.save(update_fields=["post_id", "is_public", "updated_at"])

    notifications.emit(
        notifications.ROUND_PUBLISHED,
        {"round_id": round_obj.pk, "post_id": post_id, "public": round_obj.is_public},
    )
    return round_obj


# -------------------------------
# Vista de lectura (tarjeta)
# -------------------------------
def _round_dict(r: Round) -> Dict[str, Any]:
    data = {
        "id": r.pk,
        "organizer_id": r.organizer_id,
        "context_label": r.context_label,
        "played_on": r.played_on.isoformat() if r.played_on else None,
        "unit_count": r.unit_count,
        "environment": r.environment,
        "target_per_unit": str(r.effective_target_per_unit),
        "target_total": str(r.target_total),
        "status": r.status,
        "post_id": r.post_id or None,
        "is_public": r.is_public,
        "created_at": r.created_at.isoformat() if r.created_at else None,
    }
    if r.environment == Round.ENV_OUTDOOR:
        data["conditions"] = {
            "tee_color": r.tee_color or None,
            "slope_rating": r.slope_rating,
            "course_rating": str(r.course_rating) if r.course_rating is not None else None,
            "weather": r.weather or None,
            "temperature": r.temperature,
            "wind_speed": r.wind_speed,
        }
    return data


def get_scorecard(round_id: Any, caller_id: Optional[Any] = None) -> Dict[str, Any]:
    """
    Tarjeta completa: ronda + participantes (con totales persistidos) + scores por hoyo.
    No recalcula nada: muestra lo que dejó el motor de agregación.
    """
    round_obj = get_round(round_id)
    participants: List[Participant] = list(
        Participant.objects.filter(round=round_obj)
        .prefetch_related(Prefetch("unit_scores", queryset=UnitScore.objects.order_by("unit_index")))
        .order_by("created_at", "id")
    )
    in_roster = any(p.identity_id == caller_id for p in participants)
    access.authorize(access.READ_SCORECARD, caller_id, round_obj, is_participant=in_roster)

    identity = get_identity_service()
    rows: List[Dict[str, Any]] = []
    for p in participants:
        rows.append(
            {
                "id": p.pk,
                "identity_id": p.identity_id,
                "identity": identity.describe(p.identity_id),
                "status": p.status,
                "attested_at": p.attested_at.isoformat() if p.attested_at else None,
                "scores_entered_by": p.scores_entered_by or None,
                "scores_confirmed": p.scores_confirmed,
                "totals": p.totals_dict(),
                "scores": [s.as_dict() for s in p.unit_scores.all()],
            }
        )

    return {"round": _round_dict(round_obj), "participants": rows}
