# cardcore/apps/core/access.py
"""
Matriz de autorización del motor de tarjetas.

Se evalúa al inicio de cada operación que muta estado. Trabaja sobre
cualquier objeto con los atributos que usa (round: organizer_id, status,
is_public; participant: identity_id, status), así que se puede probar sin BD.
"""
from __future__ import annotations

import logging
from typing import Any

from cardcore.apps.rounds.models import Round
from cardcore.apps.roster.models import Participant

from .exceptions import AuthorizationError

logger = logging.getLogger(__name__)

# Acciones
INVITE = "invite"
ATTEST = "attest"
REMOVE = "remove"
WRITE_SCORE = "write_score"        # put / delete de un UnitScore
CONFIRM_SCORES = "confirm_scores"
SET_STATUS = "set_status"
ATTACH_POST = "attach_post"
READ_SCORECARD = "read_scorecard"

ACTIONS = (INVITE, ATTEST, REMOVE, WRITE_SCORE, CONFIRM_SCORES, SET_STATUS, ATTACH_POST, READ_SCORECARD)

# Acciones que sólo puede hacer el organizador
ORGANIZER_ONLY = (INVITE, REMOVE, SET_STATUS, ATTACH_POST)
# Acciones que sólo puede hacer el propio participante (nunca el organizador en su rol)
SELF_ONLY = (ATTEST, CONFIRM_SCORES)

DENY_MESSAGES = {
    INVITE: "Sólo el organizador puede invitar participantes.",
    ATTEST: "Sólo el invitado puede responder su invitación.",
    REMOVE: "Sólo el organizador puede quitar participantes.",
    WRITE_SCORE: "Sólo el organizador o el propio participante (confirmado) pueden cargar scores.",
    CONFIRM_SCORES: "Sólo el participante puede confirmar sus propios scores.",
    SET_STATUS: "Sólo el organizador puede cambiar el estado de la ronda.",
    ATTACH_POST: "Sólo el organizador puede publicar la tarjeta.",
    READ_SCORECARD: "No tienes acceso a esta tarjeta.",
}


def is_organizer(caller_id: Any, round_obj: Any) -> bool:
    return caller_id is not None and caller_id == round_obj.organizer_id


def is_self(caller_id: Any, participant: Any) -> bool:
    return caller_id is not None and participant is not None and caller_id == participant.identity_id


def can(
    action: str,
    caller_id: Any,
    round_obj: Any,
    participant: Any = None,
    *,
    is_participant: bool = False,
) -> bool:
    """
    True si `caller_id` puede ejecutar `action`.
    `is_participant` sólo se usa en READ_SCORECARD (el caller figura en el roster).
    """
    if action not in ACTIONS:
        raise ValueError(f"Acción desconocida: {action}")

    if action == READ_SCORECARD:
        return bool(is_organizer(caller_id, round_obj) or is_participant or getattr(round_obj, "is_public", False))

    # Ronda cancelada: todo congelado
    if round_obj.status == Round.STATUS_CANCELLED:
        return False

    if action in ORGANIZER_ONLY:
        return is_organizer(caller_id, round_obj)

    if action in SELF_ONLY:
        return is_self(caller_id, participant)

    # WRITE_SCORE: organizador (cualquier participante) o el propio; siempre con status confirmado.
    # Rondas COMPLETED siguen aceptando correcciones tardías.
    if participant is None or participant.status != Participant.STATUS_CONFIRMED:
        return False
    return is_organizer(caller_id, round_obj) or is_self(caller_id, participant)


def authorize(
    action: str,
    caller_id: Any,
    round_obj: Any,
    participant: Any = None,
    *,
    is_participant: bool = False,
) -> None:
    if can(action, caller_id, round_obj, participant, is_participant=is_participant):
        return
    logger.info(
        "Acceso denegado: action=%s caller=%s round=%s participant=%s",
        action, caller_id, getattr(round_obj, "pk", None), getattr(participant, "pk", None),
    )
    if round_obj.status == Round.STATUS_CANCELLED and action != READ_SCORECARD:
        raise AuthorizationError("La ronda está cancelada; no admite cambios.")
    raise AuthorizationError(DENY_MESSAGES[action])

