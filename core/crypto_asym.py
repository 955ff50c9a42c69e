# --------------------------------------------------------------
# File: crypto_asym.py
# Description: Estrategia RSA con relleno PKCS#1 v1.5 y claves PKCS8.
# --------------------------------------------------------------
"""Cifrado asimétrico RSA-2048 con un par de claves nuevo en cada cifrado."""

from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from core.errors import CipherFailureError
from core.strategy import CipherOutput, CipherStrategy

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
# PKCS#1 v1.5 reserva 11 bytes de relleno por bloque.
RSA_MAX_PLAINTEXT = RSA_KEY_SIZE // 8 - 11
PKCS1V15_MIN_PADDING = 8


def rsa_generate_private_key() -> rsa.RSAPrivateKey:
    """Genera una clave privada RSA de 2048 bits con exponente 65537."""

    return rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )


def rsa_private_to_pkcs8(private_key: rsa.RSAPrivateKey) -> bytes:
    """Serializa la clave privada en PKCS8 DER sin cifrar."""

    return private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


class Rsa(CipherStrategy):
    """RSA con PKCS#1 v1.5.

    `encrypt` ignora cualquier clave recibida y devuelve la mitad privada del
    par recién generado, por lo que el motor ni siquiera decodifica esa clave.
    `decrypt` no valida la clave antes de analizarla: un fallo de análisis, una
    clave ajena o un ciphertext alterado terminan en `CipherFailureError`.
    """

    name = "RSA"
    uses_key = False

    def encrypt(self, plaintext: bytes, key: Optional[bytes] = None) -> CipherOutput:
        """Cifra con la clave pública de un par RSA-2048 nuevo.

        Args:
            plaintext (bytes): Como máximo 245 bytes.
            key (Optional[bytes]): Ignorada.

        Returns:
            CipherOutput: Ciphertext, clave privada PKCS8 y `iv=None`.

        Raises:
            CipherFailureError: Si el texto excede el tamaño del módulo.

        """

        if len(plaintext) > RSA_MAX_PLAINTEXT:
            raise CipherFailureError(
                f"El texto para RSA admite como máximo {RSA_MAX_PLAINTEXT} bytes; "
                f"se recibieron {len(plaintext)} bytes.",
                self.name,
            )
        private_key = rsa_generate_private_key()
        try:
            ciphertext = private_key.public_key().encrypt(plaintext, padding.PKCS1v15())
        except ValueError as exc:
            raise CipherFailureError(f"El cifrado RSA falló: {exc}", self.name) from exc
        return CipherOutput(ciphertext, rsa_private_to_pkcs8(private_key), None)

    def decrypt(self, ciphertext: bytes, key: bytes, iv: Optional[bytes] = None) -> bytes:
        """Descifra con la clave privada PKCS8 proporcionada; `iv` se ignora.

        El relleno PKCS#1 v1.5 se comprueba de forma explícita: un bloque que no
        tenga la forma `00 02 PS 00 M` (PS de al menos 8 bytes no nulos) se
        rechaza en lugar de devolver bytes aleatorios.

        Raises:
            CipherFailureError: Si la clave no es RSA PKCS8, el ciphertext no
                mide lo que el módulo o el relleno no es válido.

        """

        try:
            private_key = serialization.load_der_private_key(key, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise CipherFailureError(
                "La clave privada RSA no es un PKCS8 válido.", self.name
            ) from exc
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise CipherFailureError("La clave PKCS8 no es una clave RSA.", self.name)

        numbers = private_key.private_numbers()
        modulus = numbers.public_numbers.n
        size = (private_key.key_size + 7) // 8
        value = int.from_bytes(ciphertext, "big")
        if len(ciphertext) != size or value >= modulus:
            raise CipherFailureError(
                "No se pudo descifrar con RSA: clave o datos incorrectos.", self.name
            )

        block = pow(value, numbers.d, modulus).to_bytes(size, "big")
        return pkcs1v15_unpad(block, self.name)


def pkcs1v15_unpad(block: bytes, algorithm: str = "RSA") -> bytes:
    """Retira el relleno de cifrado PKCS#1 v1.5 (tipo 2) de un bloque RSA.

    Args:
        block (bytes): Bloque descifrado con la longitud del módulo.
        algorithm (str): Nombre del algoritmo para el error.

    Returns:
        bytes: Mensaje contenido en el bloque.

    Raises:
        CipherFailureError: Si el bloque no cumple `00 02 PS(>=8) 00 M`.

    """

    separator = block.find(b"\x00", 2)
    if block[:2] != b"\x00\x02" or separator < 2 + PKCS1V15_MIN_PADDING:
        raise CipherFailureError(
            "No se pudo descifrar con RSA: clave o datos incorrectos.", algorithm
        )
    return block[separator + 1 :]
