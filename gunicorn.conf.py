import os
import sys

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from src.core.telemetry import init_telemetry  # noqa: E402

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "src.core.settings")

wsgi_app = "src.core.wsgi:application"
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8080")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
accesslog = "-"


def post_fork(server, worker):
    """
    Runs in every worker right after fork, so each worker opens
    its own gRPC channel to the OTel collector.
    """
    server.log.info(f"Worker spawned (pid: {worker.pid}). Initializing telemetry...")
    init_telemetry(os.getenv("SERVICE_NAME", "product-service"))
