from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from cardcore.apps.rounds.models import Round
from cardcore.apps.scoring.models import UnitScore
from cardcore.apps.scoring.services.aggregation import recompute
from .models import Participant
from .services import roster


class UnitScoreInline(admin.TabularInline):
    model = UnitScore
    extra = 0
    fields = ("unit_index", "strokes", "putts", "fairway_hit", "green_in_regulation", "entered_by", "updated_at")
    readonly_fields = fields
    can_delete = False
    ordering = ("unit_index",)

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """
    Sólo consulta. Invitación, atestación y scores pasan por los servicios,
    que son los que mantienen el roster y los totales coherentes.
    """
    list_display = (
        "identity",
        "round",
        "status",
        "scores_entered_by",
        "scores_confirmed",
        "total_score",
        "to_par",
        "units_completed",
        "last_score_update",
    )
    list_filter = ("status", "scores_confirmed", "round__status")
    search_fields = ("identity__username", "identity__email", "round__context_label")
    readonly_fields = (
        "round",
        "identity",
        "status",
        "attested_at",
        "scores_entered_by",
        "scores_confirmed",
        "total_score",
        "to_par",
        "units_completed",
        "last_score_update",
        "created_at",
        "updated_at",
    )
    inlines = [UnitScoreInline]
    actions = ["action_recompute_totals"]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        # Ronda cancelada: congelada también para el admin
        if obj is not None and obj.round.is_frozen:
            return False
        return super().has_delete_permission(request, obj)

    def get_deleted_objects(self, objs, request):
        # Los scores se van en cascada con el participante aunque su admin sea de sólo lectura
        deleted, model_count, perms_needed, protected = super().get_deleted_objects(objs, request)
        perms_needed.discard(UnitScore._meta.verbose_name)
        return deleted, model_count, perms_needed, protected

    def delete_model(self, request, obj):
        roster.remove(obj.pk, obj.round.organizer_id)

    def delete_queryset(self, request, queryset):
        for p in queryset.select_related("round").exclude(round__status=Round.STATUS_CANCELLED):
            roster.remove(p.pk, p.round.organizer_id)

    @admin.action(description=_("Recalcular totales desde los scores"))
    def action_recompute_totals(self, request, queryset):
        n = 0
        for p in queryset.select_related("round"):
            recompute(p)
            n += 1
        self.message_user(request, f"{n} participantes recalculados.", level=messages.SUCCESS)
