# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from core.errors import UnsupportedAlgorithmError


class AlgorithmTag(str, Enum):
    """Conjunto cerrado de algoritmos seleccionables."""

    AES = "AES"
    DES = "DES"
    CHACHA20 = "CHACHA20"
    RSA = "RSA"

    @classmethod
    def parse(cls, value: Union["AlgorithmTag", str]) -> "AlgorithmTag":
        """Convierte una etiqueta libre en `AlgorithmTag` sin distinguir mayúsculas.

        Raises:
            UnsupportedAlgorithmError: Si la etiqueta no pertenece al conjunto.

        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(value)


class EncryptionResult(BaseModel):
    """Resultado inmutable de una operación `encrypt`.

    Attributes:
        ciphertext (str): Datos cifrados en Base64.
        key (str): Clave en Base64; para RSA, la privada en PKCS8.
        iv_or_nonce (Optional[str]): IV o nonce en Base64; `None` para RSA.

    """

    model_config = ConfigDict(frozen=True)

    ciphertext: str
    key: str
    iv_or_nonce: Optional[str] = None


class EncryptedMessage(BaseModel):
    """Registro persistido por el almacén de mensajes."""

    id: int
    title: str
    ciphertext: str
    algorithm: AlgorithmTag
    key: str
    iv_or_nonce: Optional[str] = None
    owner: str
    created_at: str

    def public_view(self) -> dict:
        """Vista sin material de clave, apta para listados."""

        return {
            "id": self.id,
            "title": self.title,
            "ciphertext": self.ciphertext,
            "algorithm": self.algorithm.value,
            "created_at": self.created_at,
        }


class MessagePage(BaseModel):
    """Página de mensajes de un usuario, ordenada del más reciente al más antiguo."""

    items: List[EncryptedMessage]
    page: int
    size: int
    total_items: int
    total_pages: int
