# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades criptográficas del paquete core.
# --------------------------------------------------------------
"""Inicializa el paquete `core` y documenta sus módulos principales."""

__all__ = [
    "auth",
    "codec",
    "config",
    "crypto_asym",
    "crypto_sym",
    "engine",
    "errors",
    "logger",
    "messages",
    "models",
    "randomness",
    "storage",
    "strategy",
]
