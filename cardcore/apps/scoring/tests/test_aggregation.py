from __future__ import annotations

from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from cardcore.apps.core.tests.helpers import make_user
from cardcore.apps.roster.models import Participant
from cardcore.apps.rounds.models import Round
from cardcore.apps.scoring.models import UnitScore
from cardcore.apps.scoring.services.aggregation import compute_totals, prorated_target, recompute


class ProratedTargetTest(SimpleTestCase):
    def test_whole_numbers(self):
        self.assertEqual(prorated_target(Decimal("4"), 9, 38), 36)
        self.assertEqual(prorated_target(4, 18, 80), 72)

    def test_rounds_to_nearest(self):
        # 4.3 * 3 = 12.9 ; 4.1 * 3 = 12.3
        self.assertEqual(prorated_target(Decimal("4.3"), 3, 10), 13)
        self.assertEqual(prorated_target(Decimal("4.1"), 3, 20), 12)

    def test_exact_half_goes_towards_total(self):
        # 3.5 * 3 = 10.5
        self.assertEqual(prorated_target(Decimal("3.5"), 3, 12), 11)
        self.assertEqual(prorated_target(Decimal("3.5"), 3, 9), 10)
        # 4.25 * 2 = 8.5
        self.assertEqual(prorated_target("4.25", 2, 9), 9)
        self.assertEqual(prorated_target("4.25", 2, 8), 8)


class ComputeTotalsTest(SimpleTestCase):
    def test_half_round_over_par(self):
        self.assertEqual(
            compute_totals(38, 9, Decimal("4")),
            {"total_score": 38, "units_completed": 9, "prorated_target": 36, "to_par": 2},
        )

    def test_under_par(self):
        self.assertEqual(compute_totals(7, 2, Decimal("4"))["to_par"], -1)

    def test_no_units_played(self):
        totals = compute_totals(0, 0, Decimal("4"))
        self.assertEqual(totals["total_score"], 0)
        self.assertEqual(totals["units_completed"], 0)
        self.assertIsNone(totals["to_par"])
        self.assertIsNone(totals["prorated_target"])


class RecomputeTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.organizer = make_user("org")
        cls.player = make_user("player")
        cls.round = Round.objects.create(
            organizer=cls.organizer, context_label="Los Leones", unit_count=9, target_per_unit=Decimal("4"),
        )
        cls.participant = Participant.objects.create(
            round=cls.round, identity=cls.player, status=Participant.STATUS_CONFIRMED,
        )

    def test_recompute_from_rows(self):
        for idx, strokes in enumerate([4, 5, 3], start=1):
            UnitScore.objects.create(participant=self.participant, unit_index=idx, strokes=strokes)

        totals = recompute(self.participant.pk)

        self.assertEqual(totals["total_score"], 12)
        self.assertEqual(totals["units_completed"], 3)
        self.assertEqual(totals["to_par"], 0)
        self.participant.refresh_from_db()
        self.assertEqual(self.participant.total_score, 12)
        self.assertEqual(self.participant.units_completed, 3)
        self.assertEqual(self.participant.to_par, 0)
        self.assertIsNotNone(self.participant.last_score_update)

    def test_recompute_uses_default_target_when_round_has_none(self):
        Round.objects.filter(pk=self.round.pk).update(target_per_unit=None)
        UnitScore.objects.create(participant=self.participant, unit_index=1, strokes=6)

        totals = recompute(self.participant.pk)

        self.assertEqual(totals["prorated_target"], 4)
        self.assertEqual(totals["to_par"], 2)

    def test_recompute_without_scores_resets(self):
        Participant.objects.filter(pk=self.participant.pk).update(total_score=50, to_par=5, units_completed=9)

        recompute(self.participant.pk)

        self.participant.refresh_from_db()
        self.assertEqual(self.participant.total_score, 0)
        self.assertEqual(self.participant.units_completed, 0)
        self.assertIsNone(self.participant.to_par)
