from __future__ import annotations

import random

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.contrib.auth import get_user_model

from cardcore.apps.accounts.models import Profile
from cardcore.apps.roster.models import Participant
from cardcore.apps.roster.services import roster
from cardcore.apps.rounds.services import registry
from cardcore.apps.scoring.services import ledger


def ensure_demo_user(username: str, email: str, display_name: str = ""):
    User = get_user_model()
    user, created = User.objects.get_or_create(username=username, defaults={"email": email})
    if created or not user.has_usable_password():
        user.set_password("Pass1234!")
        user.save()
    Profile.objects.get_or_create(user=user, defaults={"display_name": display_name or username})
    return user


class Command(BaseCommand):
    help = "Crea una ronda compartida DEMO: organizador, jugadores invitados, atestaciones y scores parciales."

    def add_arguments(self, parser):
        parser.add_argument("--course", type=str, default="Demo Links")
        parser.add_argument("--holes", type=int, default=9)
        parser.add_argument("--par", type=str, default="4", help="Par por hoyo (admite decimales).")
        parser.add_argument("--players", type=int, default=3)
        parser.add_argument("--indoor", action="store_true")
        parser.add_argument("--seed-scores", action="store_true")
        parser.add_argument("--random-seed", type=int, default=None)

    @transaction.atomic
    def handle(self, *args, **opts):
        holes: int = opts["holes"]
        players: int = opts["players"]
        seed_scores: bool = bool(opts["seed_scores"])
        rng = random.Random(opts["random_seed"])

        if players < 1:
            raise CommandError("--players debe ser >= 1")

        # 1) Organizador
        organizer = ensure_demo_user("organizer", "organizer@example.com", "Organizador Demo")

        # 2) Ronda
        config = {
            "context_label": opts["course"],
            "unit_count": holes,
            "environment": "indoor" if opts["indoor"] else "outdoor",
            "target_per_unit": opts["par"],
        }
        r = registry.create(organizer.pk, config)
        self.stdout.write(self.style.SUCCESS(f"✓ Ronda creada: #{r.pk} {r}"))

        # 3) Roster: el organizador también juega
        invited = [organizer]
        for idx in range(1, players + 1):
            invited.append(ensure_demo_user(f"player{idx}", f"player{idx}@example.com", f"Jugador {idx}"))

        participants = []
        for user in invited:
            p = roster.invite(r.pk, user.pk, caller_id=organizer.pk)
            p = roster.attest(p.pk, user.pk, Participant.STATUS_CONFIRMED)
            participants.append((user, p))
        self.stdout.write(self.style.SUCCESS(f"✓ {len(participants)} participantes confirmados"))

        # 4) Scores parciales (el organizador pre-carga la primera mitad, cada jugador el resto)
        if seed_scores:
            half = max(1, holes // 2)
            for user, p in participants:
                pre = [{"unit_index": h, "strokes": rng.randint(3, 7)} for h in range(1, half + 1)]
                ledger.submit_scores(p.pk, pre, origin_id=organizer.pk)
                own = [{"unit_index": h, "strokes": rng.randint(3, 7)} for h in range(half + 1, holes + 1)]
                if own:
                    ledger.submit_scores(p.pk, own, origin_id=user.pk)
            self.stdout.write(self.style.SUCCESS("✓ Scores de demo cargados"))

        self.stdout.write(self.style.SUCCESS(f"Listo. Tarjeta: /api/rounds/{r.pk}/scorecard/"))
