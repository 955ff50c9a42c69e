# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de ejecución leídos del entorno y de `.env`.
# --------------------------------------------------------------
"""Configuración de la aplicación; se consulta en cada llamada para permitir overrides."""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_STORAGE_PATH = "./_data"
DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_PAGE_SIZE = 100


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def storage_path() -> str:
    """Directorio donde se guardan `users.json` y `messages.json`."""

    path = os.getenv("STORAGE_PATH", DEFAULT_STORAGE_PATH)
    os.makedirs(path, exist_ok=True)
    return path


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def page_size() -> int:
    return max(1, _int_env("PAGE_SIZE", DEFAULT_PAGE_SIZE))


def max_page_size() -> int:
    return max(1, _int_env("MAX_PAGE_SIZE", DEFAULT_MAX_PAGE_SIZE))
