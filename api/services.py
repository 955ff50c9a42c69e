# --------------------------------------------------------------
# File: services.py
# Description: Servicios de mensajes cifrados que combinan motor, almacén e identidad.
# --------------------------------------------------------------
"""Capa de servicios que traduce errores del dominio a resultados explícitos."""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from core import auth, engine, messages
from core.errors import AccessDeniedError, CryptoEngineError, MessageNotFoundError
from core.logger import get_logger
from core.models import AlgorithmTag

logger = get_logger(__name__)


class ServiceResult(BaseModel):
    """Resultado explícito de una operación de servicio.

    Attributes:
        ok (bool): Indica si la operación tuvo éxito.
        status (int): Código de estado equivalente en HTTP.
        data (Optional[Dict[str, Any]]): Carga útil si `ok` es verdadero.
        error (Optional[str]): Mensaje para el usuario si `ok` es falso.
        error_kind (Optional[str]): Categoría del error del motor, si aplica.

    """

    ok: bool
    status: int
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None


def _success(data: Dict[str, Any]) -> ServiceResult:
    return ServiceResult(ok=True, status=200, data=data)


def error_result(exc: Exception) -> ServiceResult:
    """Asigna a cada excepción del dominio su código de estado.

    Args:
        exc (Exception): Error capturado en la capa de servicio.

    Returns:
        ServiceResult: Resultado fallido con estado y categoría.

    """

    if isinstance(exc, CryptoEngineError):
        return ServiceResult(ok=False, status=400, error=exc.message, error_kind=exc.kind.value)
    if isinstance(exc, MessageNotFoundError):
        return ServiceResult(ok=False, status=404, error=str(exc))
    if isinstance(exc, AccessDeniedError):
        return ServiceResult(ok=False, status=403, error=str(exc))
    raise exc


def encrypt_message(
    owner: str,
    title: str,
    message: str,
    key: Optional[str],
    algorithm: str,
) -> ServiceResult:
    """Cifra un texto, lo guarda y devuelve la vista pública más el material de clave.

    Args:
        owner (str): Usuario autenticado.
        title (str): Título del mensaje.
        message (str): Texto en claro; se codifica en UTF-8.
        key (Optional[str]): Clave en Base64 o vacía para generarla.
        algorithm (str): Etiqueta de algoritmo.

    Returns:
        ServiceResult: `data` con el mensaje, la `key` y el `iv_or_nonce`.

    """

    if not title or not title.strip():
        return ServiceResult(ok=False, status=400, error="El título es obligatorio.")
    try:
        tag = AlgorithmTag.parse(algorithm)
        result = engine.encrypt(message.encode("utf-8"), key, tag)
        stored = messages.save_message(owner, title.strip(), tag, result)
    except (CryptoEngineError, MessageNotFoundError, AccessDeniedError) as exc:
        return error_result(exc)

    data = stored.public_view()
    data.update({"key": result.key, "iv_or_nonce": result.iv_or_nonce})
    return _success(data)


def decrypt_message(owner: str, message_id: int, key: str) -> ServiceResult:
    """Descifra un mensaje propio con la clave aportada por el usuario.

    La propiedad se comprueba antes de llamar al motor.
    """

    if not key:
        return ServiceResult(ok=False, status=400, error="La clave es obligatoria.")
    try:
        stored = messages.get_message(owner, message_id)
        plaintext = engine.decrypt(stored.ciphertext, key, stored.iv_or_nonce, stored.algorithm)
    except (CryptoEngineError, MessageNotFoundError, AccessDeniedError) as exc:
        return error_result(exc)

    return _success({"id": message_id, "decrypted_message": plaintext.decode("utf-8", errors="replace")})


def list_user_messages(
    owner: str,
    page: int = 0,
    size: Optional[int] = None,
    search: Optional[str] = None,
) -> ServiceResult:
    """Página de mensajes del usuario, sin material de clave."""

    result = messages.list_messages(owner, page=page, size=size, search=search)
    return _success(
        {
            "content": [m.public_view() for m in result.items],
            "page": result.page,
            "size": result.size,
            "total_elements": result.total_items,
            "total_pages": result.total_pages,
        }
    )


def delete_user_message(owner: str, message_id: int) -> ServiceResult:
    try:
        messages.delete_message(owner, message_id)
    except (MessageNotFoundError, AccessDeniedError) as exc:
        return error_result(exc)
    return _success({"message": "Mensaje eliminado."})


def user_stats(owner: str) -> ServiceResult:
    """Total de mensajes y perfil del usuario."""

    profile = auth.get_user(owner)
    if profile is None:
        return ServiceResult(ok=False, status=404, error="Usuario no encontrado.")
    return _success({"total_messages": messages.count_messages(owner), "user": profile})
