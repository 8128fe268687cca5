# cardcore/apps/accounts/identity.py
"""
Servicio de identidad que consume el motor de tarjetas.

Sólo lectura: existencia y metadatos de presentación. El backend se elige con
settings.SCORECARD["IDENTITY_BACKEND"] para poder apuntarlo a otro proveedor.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from django.contrib.auth import get_user_model
from django.utils.module_loading import import_string

from cardcore.apps.core.conf import scorecard_setting


class ProfileIdentity:
    """Identidades = usuarios activos de django.contrib.auth (+ Profile si existe)."""

    def exists(self, identity_id: Any) -> bool:
        User = get_user_model()
        try:
            return User.objects.filter(pk=identity_id, is_active=True).exists()
        except (ValueError, TypeError):
            return False

    def describe(self, identity_id: Any) -> Optional[Dict[str, Any]]:
        User = get_user_model()
        user = User.objects.filter(pk=identity_id).select_related("profile").first()
        if user is None:
            return None
        prof = getattr(user, "profile", None)
        full = user.get_full_name() or user.username
        return {
            "id": user.pk,
            "username": user.username,
            "display_name": (prof.display_name if prof and prof.display_name else full),
            "avatar_url": prof.avatar_url if prof else "",
            "club": prof.club if prof else "",
            "handicap_index": str(prof.handicap_index) if prof and prof.handicap_index is not None else None,
        }


def get_identity_service():
    return import_string(scorecard_setting("IDENTITY_BACKEND"))()
