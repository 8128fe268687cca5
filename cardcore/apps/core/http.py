# cardcore/apps/core/http.py
from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any, Dict

from django.http import HttpRequest, JsonResponse
from django.views.csrf import csrf_failure as django_csrf_failure

from .exceptions import ScorecardError, ValidationError

logger = logging.getLogger(__name__)


def api_login_required(view_func):
    """Como judge_required, pero respondiendo JSON 401 en vez de redirigir al login."""
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"error": "No autenticado."}, status=401)
        return view_func(request, *args, **kwargs)
    return _wrapped


def json_errors(view_func):
    """Traduce los errores del motor a respuestas JSON con su status_code."""
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except ScorecardError as exc:
            logger.debug("%s %s -> %s: %s", request.method, request.path, exc.status_code, exc.message)
            return JsonResponse(exc.as_dict(), status=exc.status_code)
    return _wrapped


def read_json(request: HttpRequest) -> Dict[str, Any]:
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (TypeError, ValueError):
        raise ValidationError("El cuerpo no es JSON válido.")
    if not isinstance(data, dict):
        raise ValidationError("Se esperaba un objeto JSON.")
    return data


def csrf_failure(request: HttpRequest, reason: str = ""):
    """
    CSRF_FAILURE_VIEW. La API usa sesión, así que los POST/DELETE llevan la
    cabecera X-CSRFToken con el valor de la cookie csrftoken (GET /api/health/ la entrega).
    Fuera de /api/ se usa la página estándar de Django.
    """
    if request.path.startswith("/api/"):
        logger.info("CSRF rechazado %s %s: %s", request.method, request.path, reason)
        return JsonResponse(
            {"error": "Token CSRF ausente o inválido.", "details": {"reason": reason}}, status=403,
        )
    return django_csrf_failure(request, reason=reason)
