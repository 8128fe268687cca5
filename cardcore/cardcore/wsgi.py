import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cardcore.cardcore.settings")

application = get_wsgi_application()
