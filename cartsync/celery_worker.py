# cartsync/celery_worker.py
from celery import Celery

from cartsync.utils.settings import (
    CATALOG_REFRESH_SECONDS,
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
)

celery_app = Celery(
    "cartsync",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = ("cartsync.tasks.refresh",)

# Konfiguracja beat schedule (0 = wylaczone)
if CATALOG_REFRESH_SECONDS > 0:
    celery_app.conf.beat_schedule = {
        "refresh-catalog-cache": {
            "task": "cartsync.tasks.refresh.refresh_catalog_task",
            "schedule": float(CATALOG_REFRESH_SECONDS),
        },
    }

celery_app.conf.timezone = "UTC"
