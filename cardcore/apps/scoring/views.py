# cardcore/apps/scoring/views.py
from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_http_methods, require_POST

from cardcore.apps.core.http import api_login_required, json_errors, read_json
from .services import ledger


@require_POST
@api_login_required
@json_errors
def scores_submit(request: HttpRequest, participant_id: int) -> JsonResponse:
    """
    Body: {"scores": [{unit_index, strokes, putts?, fairway_hit?, green_in_regulation?}, ...]}
    Cada entrada se aplica por separado; la respuesta trae el resultado por entrada y los totales.
    """
    body = read_json(request)
    result = ledger.submit_scores(participant_id, body.get("scores"), origin_id=request.user.pk)
    status = 200 if result["failed"] == 0 else 207
    return JsonResponse(result, status=status)


@require_http_methods(["DELETE"])
@api_login_required
@json_errors
def score_delete(request: HttpRequest, participant_id: int, unit_index: int) -> JsonResponse:
    totals = ledger.delete_unit_score(participant_id, unit_index, caller_id=request.user.pk)
    return JsonResponse({"totals": totals})
