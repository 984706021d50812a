# cartsync/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cartsync.db")
CATALOG_API_URL = os.getenv("CATALOG_API_URL", "https://api-dfs2-dm-production.up.railway.app")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", 30))
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
# 0 = bez harmonogramu odswiezania katalogu
CATALOG_REFRESH_SECONDS = int(os.getenv("CATALOG_REFRESH_SECONDS", 0))
STREAM_POLL_SECONDS = float(os.getenv("STREAM_POLL_SECONDS", 15))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# ile strumieni moze naraz czekac na zmiany (osobne watki, poza pula handlerow)
STREAM_MAX_OBSERVERS = int(os.getenv("STREAM_MAX_OBSERVERS", 200))
