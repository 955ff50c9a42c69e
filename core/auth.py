# --------------------------------------------------------------
# File: auth.py
# Description: Alta y autenticación de usuarios con hashes Argon2id.
# --------------------------------------------------------------
"""Funciones de negocio para registrar usuarios y validar credenciales."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any, Dict, Optional, Tuple

from argon2 import PasswordHasher, exceptions as argon_exc

from core import config
from core.logger import get_logger
from core.storage import db_lock, load_db, save_db

logger = get_logger(__name__)

# Parámetros Argon2id para los hashes de contraseña.
PH = PasswordHasher(time_cost=3, memory_cost=64 * 1024, parallelism=1, hash_len=32)
MIN_PASSWORD_LENGTH = 6

_EMPTY_DB: Dict[str, Any] = {"users": {}}


def _users_path() -> str:
    return os.path.join(config.storage_path(), "users.json")


def register_user(username: str, email: str, password: str) -> Tuple[bool, str]:
    """Registra un usuario nuevo.

    Args:
        username (str): Nombre de usuario único.
        email (str): Correo electrónico único.
        password (str): Contraseña en claro; se guarda solo su hash Argon2id.

    Returns:
        Tuple[bool, str]: Indicador de éxito y mensaje para la interfaz.

    """
    if not username or not email or not password:
        return False, "Usuario, email y contraseña son obligatorios."
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."

    with db_lock:
        path = _users_path()
        db = load_db(path, _EMPTY_DB)
        users = db.setdefault("users", {})
        if username in users:
            return False, "El nombre de usuario ya existe."
        if any(u["email"].lower() == email.lower() for u in users.values()):
            return False, "El email ya está en uso."

        users[username] = {
            "email": email,
            "pwd_hash": PH.hash(password),
            "created_at": datetime.now(UTC).isoformat(),
        }
        save_db(db, path)

    logger.info("Usuario %s registrado", username)
    return True, "Usuario registrado."


def login(username: str, password: str) -> Tuple[bool, str, Dict[str, Any]]:
    """Autentica al usuario y devuelve su contexto de sesión.

    Returns:
        Tuple[bool, str, Dict[str, Any]]: Indicador de éxito, mensaje y contexto
        con `username` y `email`.

    """
    record = load_db(_users_path(), _EMPTY_DB).get("users", {}).get(username)
    if not record:
        return False, "Usuario no encontrado.", {}

    try:
        PH.verify(record["pwd_hash"], password)
    except argon_exc.VerifyMismatchError:
        logger.warning("Contraseña incorrecta para %s", username)
        return False, "Contraseña incorrecta.", {}
    except argon_exc.VerificationError:
        return False, "Error verificando la contraseña.", {}

    return True, "Sesión iniciada.", {"username": username, "email": record["email"]}


def get_user(username: str) -> Optional[Dict[str, Any]]:
    """Perfil público del usuario, sin el hash de la contraseña."""

    record = load_db(_users_path(), _EMPTY_DB).get("users", {}).get(username)
    if record is None:
        return None
    return {"username": username, "email": record["email"], "created_at": record["created_at"]}
