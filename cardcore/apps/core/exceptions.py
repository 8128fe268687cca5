# cardcore/apps/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Optional

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied


class ScorecardError(Exception):
    """
    Base de los errores del motor de tarjetas.
    `status_code` es el código HTTP con el que la API lo expone.
    """
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"error": self.message}
        if self.details:
            data["details"] = self.details
        return data


class ValidationError(ScorecardError):
    """Valores fuera de rango; se rechaza antes de persistir nada."""
    status_code = 400


class AuthorizationError(ScorecardError, PermissionDenied):
    status_code = 403


class NotFoundError(ScorecardError, ObjectDoesNotExist):
    status_code = 404


def validation_error_from_form(form, message: str = "Datos inválidos.") -> ValidationError:
    # form.errors es un ErrorDict: {campo: [mensajes]}
    details = {field: [str(e) for e in errs] for field, errs in form.errors.items()}
    return ValidationError(message, details=details)
