from django.contrib import admin
from django.urls import path, include

from cardcore.apps.rounds import views as round_views

urlpatterns = [
    path("admin/", admin.site.urls),

    # API healthcheck
    path("api/health/", round_views.health, name="api_health"),

    # Rondas compartidas (registro, estado, tarjeta, invitaciones)
    path("api/rounds/", include("cardcore.apps.rounds.urls")),

    # Participantes (atestación, confirmación, scores)
    path("api/participants/", include("cardcore.apps.roster.urls")),
]
