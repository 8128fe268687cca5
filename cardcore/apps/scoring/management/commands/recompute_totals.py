from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from cardcore.apps.roster.models import Participant
from cardcore.apps.scoring.services.aggregation import recompute


class Command(BaseCommand):
    help = "Recalcula los totales de los participantes a partir de sus scores por hoyo."

    def add_arguments(self, parser):
        parser.add_argument("--round", type=int, default=None, help="Sólo los participantes de esta ronda.")
        parser.add_argument("--dry-run", action="store_true", help="Informa diferencias sin guardar.")

    def handle(self, *args, **opts):
        qs = Participant.objects.select_related("round").order_by("round_id", "id")
        if opts["round"] is not None:
            qs = qs.filter(round_id=opts["round"])
            if not qs.exists():
                raise CommandError(f"No hay participantes para la ronda {opts['round']}")

        dry_run: bool = bool(opts["dry_run"])
        drift = 0
        total = 0
        for p in qs:
            before = (p.total_score, p.to_par, p.units_completed)
            if dry_run:
                with transaction.atomic():
                    totals = recompute(p)
                    transaction.set_rollback(True)
            else:
                totals = recompute(p)
            after = (totals["total_score"], totals["to_par"], totals["units_completed"])
            total += 1
            if before != after:
                drift += 1
                self.stdout.write(self.style.WARNING(f"participant={p.pk}: {before} -> {after}"))

        verb = "con diferencias" if dry_run else "corregidos"
        self.stdout.write(self.style.SUCCESS(f"✓ {total} participantes revisados, {drift} {verb}"))
