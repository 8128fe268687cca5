from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cardcore.apps.core'

    def ready(self):
        # Receptor de log para los eventos del motor (una sola vez)
        from .notifications import scorecard_event, log_scorecard_event
        scorecard_event.connect(log_scorecard_event, dispatch_uid="core.log_scorecard_event")
