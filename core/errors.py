# --------------------------------------------------------------
# File: errors.py
# Description: Taxonomía de errores del motor de cifrado y de sus colaboradores.
# --------------------------------------------------------------
"""Excepciones tipadas que clasifican cada fallo con un `ErrorKind` explícito."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union


class ErrorKind(str, Enum):
    """Categorías cerradas de error expuestas por el motor."""

    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_KEY_LENGTH = "INVALID_KEY_LENGTH"
    INVALID_IV_LENGTH = "INVALID_IV_LENGTH"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    CIPHER_FAILURE = "CIPHER_FAILURE"


class CryptoEngineError(Exception):
    """Error base del motor criptográfico.

    Attributes:
        kind (ErrorKind): Categoría del fallo; los llamadores deciden con ella,
            nunca con el texto del mensaje.
        algorithm (Optional[str]): Algoritmo implicado, si se conoce.

    """

    kind: ErrorKind = ErrorKind.CIPHER_FAILURE

    def __init__(self, message: str, algorithm: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm


class InvalidFormatError(CryptoEngineError):
    """Un campo Base64 no se ha podido decodificar."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, field: str, algorithm: Optional[str] = None) -> None:
        super().__init__(
            f"Formato inválido en '{field}': se esperaba texto Base64.", algorithm
        )
        self.field = field


class _LengthError(CryptoEngineError):
    """Base común para longitudes de clave o IV fuera de lo permitido."""

    subject = "material"

    def __init__(
        self,
        algorithm: str,
        expected: Union[int, Sequence[int]],
        actual: int,
    ) -> None:
        allowed = (expected,) if isinstance(expected, int) else tuple(expected)
        if len(allowed) == 1:
            requirement = f"exactamente {allowed[0]} bytes"
        else:
            requirement = ", ".join(str(n) for n in allowed[:-1]) + f" o {allowed[-1]} bytes"
        super().__init__(
            f"Longitud de {self.subject} inválida para {algorithm}: se requieren "
            f"{requirement}; la proporcionada tiene {actual} bytes.",
            algorithm,
        )
        self.expected = allowed
        self.actual = actual


class InvalidKeyLengthError(_LengthError):
    """La clave decodificada no tiene un tamaño admitido por el algoritmo."""

    kind = ErrorKind.INVALID_KEY_LENGTH
    subject = "clave"


class InvalidIvLengthError(_LengthError):
    """El IV o nonce decodificado no tiene el tamaño exigido."""

    kind = ErrorKind.INVALID_IV_LENGTH
    subject = "IV/nonce"


class UnsupportedAlgorithmError(CryptoEngineError):
    """Etiqueta de algoritmo desconocida."""

    kind = ErrorKind.UNSUPPORTED_ALGORITHM

    def __init__(self, algorithm: object) -> None:
        super().__init__(f"Algoritmo no soportado: {algorithm!r}.", str(algorithm))


class CipherFailureError(CryptoEngineError):
    """La transformación subyacente rechazó la entrada."""

    kind = ErrorKind.CIPHER_FAILURE


class ProviderNotInitialized(RuntimeError):
    """Se usó el motor antes de ejecutar `init_providers()`."""


class MessageNotFoundError(LookupError):
    """El mensaje solicitado no existe."""


class AccessDeniedError(PermissionError):
    """El mensaje pertenece a otro usuario."""
