from __future__ import annotations

from django.test import Client, TestCase
from django.urls import reverse

from cardcore.apps.core.tests.helpers import make_user
from cardcore.apps.roster.models import Participant
from cardcore.apps.rounds.models import Round


class ScorecardApiTest(TestCase):
    """Flujo completo por HTTP: crear, invitar, atestar, cargar y leer la tarjeta."""

    @classmethod
    def setUpTestData(cls):
        cls.organizer = make_user("org", display_name="Organizador")
        cls.player = make_user("ana", display_name="Ana")
        cls.stranger = make_user("intruso")

    def post_json(self, url, data=None):
        return self.client.post(url, data=data or {}, content_type="application/json")

    def as_user(self, user):
        self.client.force_login(user)

    def create_round(self, **config):
        self.as_user(self.organizer)
        body = {"context_label": "Club de Golf", "unit_count": 9, "target_per_unit": "4", **config}
        res = self.post_json(reverse("round_create"), body)
        self.assertEqual(res.status_code, 201, res.content)
        return res.json()["id"]

    def add_confirmed_player(self, round_id):
        self.as_user(self.organizer)
        res = self.post_json(reverse("round_invite", args=[round_id]), {"identity_id": self.player.pk})
        self.assertEqual(res.status_code, 201, res.content)
        pid = res.json()["id"]
        self.as_user(self.player)
        res = self.post_json(reverse("participant_attest", args=[pid]), {"decision": "confirmed"})
        self.assertEqual(res.status_code, 200, res.content)
        return pid

    def test_health(self):
        res = self.client.get(reverse("api_health"))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"ok": True})

    def test_anonymous_gets_401(self):
        res = self.post_json(reverse("round_create"), {"context_label": "X", "unit_count": 9})
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["error"], "No autenticado.")

    def test_nine_hole_round_end_to_end(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)

        # El organizador pre-carga los hoyos 1-5
        self.as_user(self.organizer)
        scores = [{"unit_index": i, "strokes": s} for i, s in zip(range(1, 6), [4, 5, 3, 4, 6])]
        res = self.post_json(reverse("participant_scores", args=[pid]), {"scores": scores})
        self.assertEqual(res.status_code, 200, res.content)
        totals = res.json()["totals"]
        self.assertEqual(
            (totals["units_completed"], totals["total_score"], totals["prorated_target"], totals["to_par"]),
            (5, 22, 20, 2),
        )

        # La jugadora carga el hoyo 6
        self.as_user(self.player)
        res = self.post_json(reverse("participant_scores", args=[pid]), {"scores": [{"unit_index": 6, "strokes": 5}]})
        self.assertEqual(res.status_code, 200, res.content)
        totals = res.json()["totals"]
        self.assertEqual(
            (totals["units_completed"], totals["total_score"], totals["prorated_target"], totals["to_par"]),
            (6, 27, 24, 3),
        )

        res = self.client.get(reverse("round_scorecard", args=[round_id]))
        self.assertEqual(res.status_code, 200)
        row = res.json()["participants"][0]
        self.assertEqual(row["scores_entered_by"], Participant.ENTERED_BY_PARTICIPANT)
        self.assertTrue(row["scores_confirmed"])
        self.assertEqual(row["totals"]["to_par"], 3)
        self.assertEqual(len(row["scores"]), 6)

    def test_partial_batch_returns_207(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)

        res = self.post_json(
            reverse("participant_scores", args=[pid]),
            {"scores": [{"unit_index": 1, "strokes": 4}, {"unit_index": 2, "strokes": 99}]},
        )

        self.assertEqual(res.status_code, 207)
        data = res.json()
        self.assertEqual((data["applied"], data["failed"]), (1, 1))
        self.assertFalse(data["results"][1]["ok"])

    def test_delete_score(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)
        self.post_json(
            reverse("participant_scores", args=[pid]),
            {"scores": [{"unit_index": 1, "strokes": 4}, {"unit_index": 2, "strokes": 5}]},
        )

        res = self.client.delete(reverse("participant_score_delete", args=[pid, 2]))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["totals"]["units_completed"], 1)
        self.assertEqual(res.json()["totals"]["total_score"], 4)

    def test_stranger_is_forbidden(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)

        self.as_user(self.stranger)
        res = self.post_json(reverse("participant_scores", args=[pid]), {"scores": [{"unit_index": 1, "strokes": 4}]})
        self.assertEqual(res.status_code, 403)
        self.assertIn("error", res.json())
        self.assertEqual(self.client.get(reverse("round_scorecard", args=[round_id])).status_code, 403)
        self.assertEqual(self.client.delete(reverse("participant_remove", args=[pid])).status_code, 403)

    def test_not_found(self):
        self.as_user(self.organizer)
        res = self.post_json(reverse("participant_attest", args=[99999]), {"decision": "confirmed"})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(self.client.get(reverse("round_scorecard", args=[99999])).status_code, 404)

    def test_invalid_payloads(self):
        round_id = self.create_round()
        res = self.client.post(reverse("round_invite", args=[round_id]), data="{no json", content_type="application/json")
        self.assertEqual(res.status_code, 400)

        res = self.post_json(reverse("round_create"), {"context_label": "X", "unit_count": 25})
        self.assertEqual(res.status_code, 400)
        self.assertIn("unit_count", res.json()["details"])

    def test_wrong_method(self):
        self.as_user(self.organizer)
        self.assertEqual(self.client.get(reverse("round_create")).status_code, 405)

    def test_status_post_and_confirm_scores(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)

        self.as_user(self.organizer)
        self.post_json(reverse("participant_scores", args=[pid]), {"scores": [{"unit_index": 1, "strokes": 5}]})
        res = self.post_json(reverse("round_attach_post", args=[round_id]), {"post_id": "p-77", "public": True})
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["is_public"])

        self.as_user(self.player)
        res = self.post_json(reverse("participant_confirm_scores", args=[pid]))
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["scores_confirmed"])

        self.as_user(self.organizer)
        res = self.post_json(reverse("round_status", args=[round_id]), {"status": "cancelled"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(Round.objects.get(pk=round_id).status, Round.STATUS_CANCELLED)

        res = self.post_json(reverse("participant_scores", args=[pid]), {"scores": [{"unit_index": 2, "strokes": 4}]})
        self.assertEqual(res.status_code, 403)

        # Tarjeta pública: cualquiera la lee
        self.as_user(self.stranger)
        self.assertEqual(self.client.get(reverse("round_scorecard", args=[round_id])).status_code, 200)

    def test_remove_participant(self):
        round_id = self.create_round()
        pid = self.add_confirmed_player(round_id)

        self.as_user(self.organizer)
        res = self.client.delete(reverse("participant_remove", args=[pid]))

        self.assertEqual(res.status_code, 200)
        self.assertFalse(Participant.objects.filter(pk=pid).exists())


class CsrfApiTest(TestCase):
    """Con sesión, las escrituras exigen X-CSRFToken; GET /api/health/ entrega la cookie."""

    @classmethod
    def setUpTestData(cls):
        cls.organizer = make_user("org")

    def setUp(self):
        self.client = Client(enforce_csrf_checks=True)
        self.client.force_login(self.organizer)
        self.body = {"context_label": "Club", "unit_count": 9}

    def test_write_without_token_is_json_403(self):
        res = self.client.post(reverse("round_create"), data=self.body, content_type="application/json")

        self.assertEqual(res.status_code, 403)
        self.assertIn("CSRF", res.json()["error"])
        self.assertFalse(Round.objects.exists())

    def test_write_with_token_from_health(self):
        self.client.get(reverse("api_health"))
        token = self.client.cookies["csrftoken"].value

        res = self.client.post(
            reverse("round_create"), data=self.body, content_type="application/json", HTTP_X_CSRFTOKEN=token,
        )

        self.assertEqual(res.status_code, 201, res.content)
        self.assertTrue(Round.objects.exists())
