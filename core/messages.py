# --------------------------------------------------------------
# File: messages.py
# Description: Almacén de mensajes cifrados con paginación, búsqueda y propietario.
# --------------------------------------------------------------
"""Repositorio JSON de mensajes cifrados; aplica el control de propiedad."""

from __future__ import annotations

import math
import os
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional, Union

from core import config
from core.errors import AccessDeniedError, MessageNotFoundError
from core.logger import get_logger
from core.models import AlgorithmTag, EncryptedMessage, EncryptionResult, MessagePage
from core.storage import db_lock, load_db, save_db

logger = get_logger(__name__)

_EMPTY_DB: Dict[str, Any] = {"next_id": 1, "messages": {}}


def _messages_path() -> str:
    return os.path.join(config.storage_path(), "messages.json")


def save_message(
    owner: str,
    title: str,
    algorithm: Union[AlgorithmTag, str],
    result: EncryptionResult,
) -> EncryptedMessage:
    """Persiste el resultado de un cifrado asociado a su propietario.

    Args:
        owner (str): Usuario propietario del mensaje.
        title (str): Título visible en los listados.
        algorithm (Union[AlgorithmTag, str]): Algoritmo usado al cifrar.
        result (EncryptionResult): Salida de `engine.encrypt`.

    Returns:
        EncryptedMessage: Registro almacenado con su identificador.

    """

    with db_lock:
        path = _messages_path()
        db = load_db(path, _EMPTY_DB)
        message = EncryptedMessage(
            id=db["next_id"],
            title=title,
            ciphertext=result.ciphertext,
            algorithm=AlgorithmTag.parse(algorithm),
            key=result.key,
            iv_or_nonce=result.iv_or_nonce,
            owner=owner,
            created_at=datetime.now(UTC).isoformat(),
        )
        db["messages"][str(message.id)] = message.model_dump(mode="json")
        db["next_id"] = message.id + 1
        save_db(db, path)

    logger.info("Mensaje %d guardado para %s (%s)", message.id, owner, message.algorithm.value)
    return message


def _find(db: Dict[str, Any], owner: str, message_id: int) -> EncryptedMessage:
    raw = db["messages"].get(str(message_id))
    if raw is None:
        raise MessageNotFoundError(f"Mensaje {message_id} no encontrado.")
    message = EncryptedMessage.model_validate(raw)
    if message.owner != owner:
        logger.warning("Acceso denegado a %s sobre el mensaje %d", owner, message_id)
        raise AccessDeniedError("Acceso denegado.")
    return message


def get_message(owner: str, message_id: int) -> EncryptedMessage:
    """Recupera un mensaje verificando que pertenece a `owner`.

    Raises:
        MessageNotFoundError: Si el identificador no existe.
        AccessDeniedError: Si el mensaje es de otro usuario.

    """

    return _find(load_db(_messages_path(), _EMPTY_DB), owner, message_id)


def list_messages(
    owner: str,
    page: int = 0,
    size: Optional[int] = None,
    search: Optional[str] = None,
) -> MessagePage:
    """Lista los mensajes de `owner`, del más reciente al más antiguo.

    Args:
        owner (str): Usuario propietario.
        page (int): Página empezando en 0.
        size (Optional[int]): Tamaño de página; se acota a `[1, MAX_PAGE_SIZE]`.
        search (Optional[str]): Fragmento del título, sin distinguir mayúsculas.

    Returns:
        MessagePage: Elementos de la página y totales.

    """

    size = config.page_size() if size is None else size
    size = min(max(1, size), config.max_page_size())
    page = max(0, page)
    needle = search.strip().lower() if search else ""

    db = load_db(_messages_path(), _EMPTY_DB)
    owned: List[EncryptedMessage] = [
        EncryptedMessage.model_validate(raw)
        for raw in db["messages"].values()
        if raw["owner"] == owner and needle in raw["title"].lower()
    ]
    owned.sort(key=lambda m: (m.created_at, m.id), reverse=True)

    start = page * size
    return MessagePage(
        items=owned[start : start + size],
        page=page,
        size=size,
        total_items=len(owned),
        total_pages=math.ceil(len(owned) / size),
    )


def delete_message(owner: str, message_id: int) -> None:
    """Elimina un mensaje propio.

    Raises:
        MessageNotFoundError: Si el identificador no existe.
        AccessDeniedError: Si el mensaje es de otro usuario.

    """

    with db_lock:
        path = _messages_path()
        db = load_db(path, _EMPTY_DB)
        _find(db, owner, message_id)
        del db["messages"][str(message_id)]
        save_db(db, path)
    logger.info("Mensaje %d eliminado por %s", message_id, owner)


def count_messages(owner: str) -> int:
    db = load_db(_messages_path(), _EMPTY_DB)
    return sum(1 for raw in db["messages"].values() if raw["owner"] == owner)
