from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from cardcore.apps.core.exceptions import ScorecardError
from cardcore.apps.roster.models import Participant
from .forms import RoundConfigForm
from .models import Round
from .services import registry


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 0
    fields = ("identity", "status", "scores_confirmed", "total_score", "to_par", "units_completed")
    readonly_fields = ("identity", "status", "scores_confirmed", "total_score", "to_par", "units_completed")
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        # Las invitaciones pasan por el roster
        return False


@admin.register(Round)
class RoundAdmin(admin.ModelAdmin):
    form = RoundConfigForm
    list_display = ("context_label", "organizer", "played_on", "unit_count", "environment", "status", "participants_count")
    list_filter = ("status", "environment")
    search_fields = ("context_label", "organizer__username", "post_id")
    raw_id_fields = ("organizer",)
    fields = (
        "organizer", "context_label", "played_on", "unit_count", "environment", "target_per_unit",
        "tee_color", "slope_rating", "course_rating", "weather", "temperature", "wind_speed",
        "post_id", "is_public", "status", "created_at", "updated_at",
    )
    # unit_count, environment y par definen el prorrateo; status sólo cambia por set_status
    readonly_fields = ("unit_count", "environment", "target_per_unit", "status", "created_at", "updated_at")
    inlines = [ParticipantInline]
    actions = ["action_cancel_rounds"]

    def participants_count(self, obj: Round) -> int:
        return obj.participants.count()
    participants_count.short_description = "Participantes"

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ("status", "created_at", "updated_at")
        return self.readonly_fields

    @admin.action(description=_("Cancelar rondas seleccionadas"))
    def action_cancel_rounds(self, request, queryset):
        done = 0
        for r in queryset.exclude(status=Round.STATUS_CANCELLED):
            try:
                registry.set_status(r.pk, r.organizer_id, Round.STATUS_CANCELLED)
            except ScorecardError as exc:
                self.message_user(request, f"{r}: {exc.message}", level=messages.ERROR)
                continue
            done += 1
        self.message_user(request, f"{done} rondas canceladas.", level=messages.SUCCESS)
