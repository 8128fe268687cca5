from django.urls import path

from cardcore.apps.scoring import views as scoring_views
from . import views

urlpatterns = [
    path("<int:participant_id>/", views.participant_remove, name="participant_remove"),
    path("<int:participant_id>/attest/", views.participant_attest, name="participant_attest"),
    path("<int:participant_id>/confirm-scores/", views.participant_confirm_scores, name="participant_confirm_scores"),
    # Ledger de scores del participante
    path("<int:participant_id>/scores/", scoring_views.scores_submit, name="participant_scores"),
    path("<int:participant_id>/scores/<int:unit_index>/", scoring_views.score_delete, name="participant_score_delete"),
]
