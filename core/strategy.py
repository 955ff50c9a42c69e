# --------------------------------------------------------------
# File: strategy.py
# Description: Interfaz común de las estrategias de cifrado.
# --------------------------------------------------------------
"""Contrato de dos operaciones que implementa cada algoritmo del motor."""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence

from core.errors import InvalidIvLengthError, InvalidKeyLengthError


class CipherOutput(NamedTuple):
    """Bytes crudos producidos por `encrypt`; el motor los codifica en Base64."""

    ciphertext: bytes
    key: bytes
    iv: Optional[bytes]


class CipherStrategy(ABC):
    """Estrategia de cifrado para un `AlgorithmTag` concreto.

    Las subclases declaran `name`, los tamaños de clave admitidos y el tamaño
    del IV (`None` si el algoritmo no usa IV).
    """

    name: str = ""
    key_sizes: Sequence[int] = ()
    iv_size: Optional[int] = None
    # `False` si `encrypt` ignora la clave del llamador.
    uses_key: bool = True

    @abstractmethod
    def encrypt(self, plaintext: bytes, key: Optional[bytes] = None) -> CipherOutput:
        """Cifra `plaintext`, generando la clave si no se proporciona."""

    @abstractmethod
    def decrypt(self, ciphertext: bytes, key: bytes, iv: Optional[bytes] = None) -> bytes:
        """Recupera el texto en claro a partir del material devuelto por `encrypt`."""

    def check_key(self, key: bytes) -> None:
        if len(key) not in self.key_sizes:
            raise InvalidKeyLengthError(self.name, self.key_sizes, len(key))

    def check_iv(self, iv: Optional[bytes]) -> bytes:
        actual = 0 if iv is None else len(iv)
        if actual != self.iv_size:
            raise InvalidIvLengthError(self.name, self.iv_size, actual)
        return iv
