"""WSGI entrypoint: telemetry first, then the Django application."""
import os

from django.core.wsgi import get_wsgi_application

from src.core.telemetry import init_telemetry

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "src.core.settings")

init_telemetry(os.getenv("SERVICE_NAME", "product-service"))

application = get_wsgi_application()
