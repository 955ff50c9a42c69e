# --------------------------------------------------------------
# File: codec.py
# Description: Frontera Base64 del motor de cifrado.
# --------------------------------------------------------------
"""Codificación y decodificación Base64 estándar con validación estricta."""

import base64
import binascii
from typing import Optional

from core.errors import InvalidFormatError


def encode(data: bytes) -> str:
    """Codifica bytes en Base64 estándar con relleno.

    Args:
        data (bytes): Datos binarios a codificar.

    Returns:
        str: Texto Base64 en ASCII.

    """

    return base64.b64encode(data).decode("ascii")


def decode(text: str, field: str, algorithm: Optional[str] = None) -> bytes:
    """Decodifica texto Base64 rechazando caracteres fuera del alfabeto.

    Args:
        text (str): Texto Base64 recibido en el contrato público.
        field (str): Nombre del campo, usado en el mensaje de error.
        algorithm (Optional[str]): Algoritmo en curso, para contextualizar el error.

    Returns:
        bytes: Datos decodificados.

    Raises:
        InvalidFormatError: Si el texto no es Base64 válido.

    """

    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise InvalidFormatError(field, algorithm) from exc
