from __future__ import annotations

from django.contrib import admin

from .models import UnitScore


@admin.register(UnitScore)
class UnitScoreAdmin(admin.ModelAdmin):
    """Sólo lectura: las escrituras pasan por el ledger para mantener los totales."""
    list_display = ("participant", "unit_index", "strokes", "putts", "fairway_hit", "green_in_regulation", "entered_by", "updated_at")
    list_filter = ("participant__round",)
    search_fields = ("participant__identity__username", "participant__round__context_label")
    ordering = ("participant", "unit_index")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
