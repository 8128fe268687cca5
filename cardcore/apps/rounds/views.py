# cardcore/apps/rounds/views.py
from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from cardcore.apps.core.http import api_login_required, json_errors, read_json
from cardcore.apps.roster.services import roster
from .services import registry


def _round_summary(r) -> dict:
    return {"id": r.pk, "status": r.status, "unit_count": r.unit_count, "post_id": r.post_id or None, "is_public": r.is_public}


@require_GET
@ensure_csrf_cookie
def health(request: HttpRequest) -> JsonResponse:
    # También entrega la cookie csrftoken que los clientes devuelven en X-CSRFToken
    return JsonResponse({"ok": True})


@require_POST
@api_login_required
@json_errors
def round_create(request: HttpRequest) -> JsonResponse:
    r = registry.create(request.user.pk, read_json(request))
    return JsonResponse(_round_summary(r), status=201)


@require_GET
@api_login_required
@json_errors
def round_scorecard(request: HttpRequest, round_id: int) -> JsonResponse:
    return JsonResponse(registry.get_scorecard(round_id, request.user.pk))


@require_POST
@api_login_required
@json_errors
def round_status(request: HttpRequest, round_id: int) -> JsonResponse:
    body = read_json(request)
    r = registry.set_status(round_id, request.user.pk, body.get("status"))
    return JsonResponse(_round_summary(r))


@require_POST
@api_login_required
@json_errors
def round_attach_post(request: HttpRequest, round_id: int) -> JsonResponse:
    body = read_json(request)
    r = registry.attach_post(round_id, request.user.pk, body.get("post_id"), public=bool(body.get("public", False)))
    return JsonResponse(_round_summary(r))


@require_POST
@api_login_required
@json_errors
def round_invite(request: HttpRequest, round_id: int) -> JsonResponse:
    body = read_json(request)
    p = roster.invite(round_id, body.get("identity_id"), caller_id=request.user.pk)
    return JsonResponse({"id": p.pk, "identity_id": p.identity_id, "status": p.status}, status=201)
