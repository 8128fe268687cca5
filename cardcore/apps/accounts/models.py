from django.db import models
from django.contrib.auth.models import User


class Profile(models.Model):
    """Datos de presentación de un jugador; el motor sólo los lee (Identity.describe)."""

    user = models.OneToOneField(User, on_delete=models.CASCADE)
    display_name = models.CharField("Nombre visible", max_length=120, blank=True)
    club = models.CharField(max_length=120, blank=True)
    avatar_url = models.URLField(blank=True)
    handicap_index = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)

    def __str__(self):
        return self.display_name or self.user.get_full_name() or self.user.username
