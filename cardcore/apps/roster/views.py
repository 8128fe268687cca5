# cardcore/apps/roster/views.py
from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods, require_POST

from cardcore.apps.core.http import api_login_required, json_errors, read_json
from .models import Participant
from .services import roster


def _participant_dict(p: Participant) -> dict:
    return {
        "id": p.pk,
        "round_id": p.round_id,
        "identity_id": p.identity_id,
        "status": p.status,
        "attested_at": p.attested_at.isoformat() if p.attested_at else None,
        "scores_entered_by": p.scores_entered_by or None,
        "scores_confirmed": p.scores_confirmed,
        "totals": p.totals_dict(),
    }


@require_POST
@api_login_required
@json_errors
def participant_attest(request: HttpRequest, participant_id: int) -> JsonResponse:
    body = read_json(request)
    p = roster.attest(participant_id, request.user.pk, body.get("decision"))
    return JsonResponse(_participant_dict(p))


@require_POST
@api_login_required
@json_errors
def participant_confirm_scores(request: HttpRequest, participant_id: int) -> JsonResponse:
    p = roster.confirm_scores(participant_id, request.user.pk)
    return JsonResponse(_participant_dict(p))


@require_http_methods(["DELETE"])
@api_login_required
@json_errors
def participant_remove(request: HttpRequest, participant_id: int) -> JsonResponse:
    roster.remove(participant_id, request.user.pk)
    return JsonResponse({"ok": True})
