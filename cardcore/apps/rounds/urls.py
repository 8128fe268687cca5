from django.urls import path
from . import views

urlpatterns = [
    path("", views.round_create, name="round_create"),
    path("<int:round_id>/scorecard/", views.round_scorecard, name="round_scorecard"),
    path("<int:round_id>/status/", views.round_status, name="round_status"),
    path("<int:round_id>/post/", views.round_attach_post, name="round_attach_post"),
    path("<int:round_id>/participants/", views.round_invite, name="round_invite"),
]
