# cardcore/apps/roster/services/roster.py
"""
Roster de una ronda compartida: invitaciones, atestación y confirmación de scores.

Máquina de estados de la atestación:
    pending --attest(confirmed)--> confirmed
    pending --attest(declined)---> declined
Ambos finales: repetir attest devuelve el estado actual sin error ni evento.
"""
from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.utils import timezone

from cardcore.apps.accounts.identity import get_identity_service
from cardcore.apps.core import access, notifications
from cardcore.apps.core.exceptions import NotFoundError, ValidationError
from cardcore.apps.rounds.models import Round
from ..models import Participant

logger = logging.getLogger(__name__)

DECISIONS = (Participant.STATUS_CONFIRMED, Participant.STATUS_DECLINED)


def _get_round(round_id: Any) -> Round:
    try:
        return Round.objects.get(pk=round_id)
    except (Round.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Ronda no encontrada.")


def _get_participant(participant_id: Any) -> Participant:
    try:
        return (
            Participant.objects.select_for_update(of=("self",))
            .select_related("round")
            .get(pk=participant_id)
        )
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Participante no encontrado.")


def _payload(p: Participant, **extra: Any) -> dict:
    return {"round_id": p.round_id, "participant_id": p.pk, "identity_id": p.identity_id, **extra}


def invite(round_id: Any, identity_id: Any, *, caller_id: Any) -> Participant:
    """
    Invita una identidad a la ronda (status pending).
    Re-invitar a quien ya está en el roster devuelve la fila existente.
    """
    with transaction.atomic():
        round_obj = _get_round(round_id)
        access.authorize(access.INVITE, caller_id, round_obj)
        if not get_identity_service().exists(identity_id):
            raise NotFoundError("Identidad no encontrada.", details={"identity_id": identity_id})
        participant, created = Participant.objects.get_or_create(round=round_obj, identity_id=identity_id)

    if created:
        logger.info("Invitado identity=%s a round=%s", identity_id, round_obj.pk)
        notifications.emit(notifications.PARTICIPANT_INVITED, _payload(participant, organizer_id=caller_id))
    return participant


def attest(participant_id: Any, caller_id: Any, decision: str) -> Participant:
    if decision not in DECISIONS:
        raise ValidationError(
            "Decisión inválida.", details={"decision": [f"Debe ser uno de: {', '.join(DECISIONS)}."]}
        )

    with transaction.atomic():
        participant = _get_participant(participant_id)
        access.authorize(access.ATTEST, caller_id, participant.round, participant)
        if participant.status != Participant.STATUS_PENDING:
            # Idempotente: ya respondió (en cualquier sentido)
            return participant
        participant.status = decision
        participant.attested_at = timezone.now()
        participant.save(update_fields=["status", "attested_at", "updated_at"])

    event = (
        notifications.PARTICIPANT_CONFIRMED
        if decision == Participant.STATUS_CONFIRMED
        else notifications.PARTICIPANT_DECLINED
    )
    logger.info("Participante %s -> %s", participant.pk, decision)
    notifications.emit(event, _payload(participant))
    return participant


def confirm_scores(participant_id: Any, caller_id: Any) -> Participant:
    """El participante revisó los scores (p. ej. pre-cargados por el organizador). Flag de un solo sentido."""
    with transaction.atomic():
        participant = _get_participant(participant_id)
        access.authorize(access.CONFIRM_SCORES, caller_id, participant.round, participant)
        if not participant.is_confirmed:
            raise ValidationError("Debes confirmar tu participación antes de confirmar scores.")
        if participant.scores_confirmed:
            return participant
        participant.scores_confirmed = True
        participant.save(update_fields=["scores_confirmed", "updated_at"])

    notifications.emit(notifications.SCORES_CONFIRMED, _payload(participant))
    return participant


def remove(participant_id: Any, caller_id: Any) -> None:
    """Quita al participante (cualquier status). Sus UnitScore se borran en cascada."""
    with transaction.atomic():
        participant = _get_participant(participant_id)
        access.authorize(access.REMOVE, caller_id, participant.round, participant)
        payload = _payload(participant, status=participant.status)
        participant.delete()

    logger.info("Participante %s quitado de round=%s", payload["participant_id"], payload["round_id"])
    notifications.emit(notifications.PARTICIPANT_REMOVED, payload)
