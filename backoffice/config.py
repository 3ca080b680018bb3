# backoffice/config.py
import os
from typing import List

API_LOCAL_URL = "http://localhost:5000/api"
API_PRODUCTION_URL = "https://libreria-app-backend.onrender.com/api"


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} doit être un nombre (reçu: {raw!r})")


def resolve_api_base_url() -> str:
    """
    URL de base de l'API librería.
    - APP_ENV=production → LIBRERIA_API_URL, sinon l'URL Render par défaut
    - tout le reste → serveur local (port 5000)
    """
    env = (os.getenv("APP_ENV") or "development").strip().lower()
    if env == "production":
        url = (os.getenv("LIBRERIA_API_URL") or "").strip() or API_PRODUCTION_URL
    else:
        url = API_LOCAL_URL
    return url.rstrip("/")


def api_timeout() -> float:
    return _env_float("API_TIMEOUT", 30.0)


def notice_seconds() -> float:
    return _env_float("NOTICE_SECONDS", 3.0)


def cors_origins() -> List[str]:
    origins_env = os.getenv("CORS_ORIGINS", "")
    return [o.strip() for o in origins_env.split(",") if o.strip()] if origins_env else ["*"]
