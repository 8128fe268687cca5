# cardcore/apps/core/notifications.py
"""
Despachador de notificaciones del motor (fire-and-forget).

Los consumidores externos (push, e-mail, feed) se conectan a `scorecard_event`.
Un receptor que falla nunca hace fallar la operación que disparó el evento:
se usa send_robust y los errores sólo se registran en el log.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from django.dispatch import Signal

logger = logging.getLogger(__name__)

# Tipos de evento
PARTICIPANT_INVITED = "participant.invited"
PARTICIPANT_CONFIRMED = "participant.confirmed"
PARTICIPANT_DECLINED = "participant.declined"
PARTICIPANT_REMOVED = "participant.removed"
SCORES_CONFIRMED = "scores.confirmed"
ROUND_COMPLETED = "round.completed"
ROUND_CANCELLED = "round.cancelled"
ROUND_PUBLISHED = "round.published"

# Argumentos enviados: event_type, payload
scorecard_event = Signal()


def emit(event_type: str, payload: Dict[str, Any]) -> List[Tuple[Any, Any]]:
    responses = scorecard_event.send_robust(sender=emit, event_type=event_type, payload=payload)
    for receiver, response in responses:
        if isinstance(response, Exception):
            logger.warning(
                "Receptor %r falló procesando %s: %s", receiver, event_type, response,
                exc_info=(type(response), response, response.__traceback__),
            )
    return responses


def log_scorecard_event(sender, event_type: str, payload: Dict[str, Any], **kwargs) -> None:
    logger.info("Evento %s %s", event_type, payload)
