# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Estrategias simétricas AES-CBC, DES-CBC y ChaCha20.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico con validación estricta de claves e IV."""

from abc import abstractmethod
from typing import Optional

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from core.errors import CipherFailureError
from core.randomness import generate_iv, generate_key
from core.strategy import CipherOutput, CipherStrategy

# El contador inicial de bloque de ChaCha20 (RFC 7539) va delante del nonce.
CHACHA20_INITIAL_COUNTER = (0).to_bytes(4, "little")


class _CbcStrategy(CipherStrategy):
    """Cifrado por bloques en modo CBC con relleno PKCS#7."""

    default_key_size: int = 0
    block_bits: int = 0

    @abstractmethod
    def _algorithm(self, key: bytes):
        """Devuelve el algoritmo de bloque de `cryptography` para `key`."""

    def encrypt(self, plaintext: bytes, key: Optional[bytes] = None) -> CipherOutput:
        """Cifra con una clave dada o generada y un IV siempre nuevo.

        Args:
            plaintext (bytes): Datos en claro.
            key (Optional[bytes]): Clave del llamador; `None` genera una nueva.

        Returns:
            CipherOutput: Ciphertext, clave utilizada e IV.

        Raises:
            InvalidKeyLengthError: Si la clave no tiene un tamaño admitido.

        """

        if key is None:
            key = generate_key(self.default_key_size)
        else:
            self.check_key(key)
        iv = generate_iv(self.iv_size)

        padder = padding.PKCS7(self.block_bits).padder()
        padded = padder.update(plaintext) + padder.finalize()
        encryptor = Cipher(self._algorithm(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return CipherOutput(ciphertext, key, iv)

    def decrypt(self, ciphertext: bytes, key: bytes, iv: Optional[bytes] = None) -> bytes:
        """Descifra y retira el relleno PKCS#7.

        Raises:
            InvalidKeyLengthError: Si la clave no tiene un tamaño admitido.
            InvalidIvLengthError: Si el IV no mide exactamente `iv_size`.
            CipherFailureError: Si el relleno o la longitud del bloque no cuadran.

        """

        self.check_key(key)
        iv = self.check_iv(iv)

        try:
            decryptor = Cipher(self._algorithm(key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(self.block_bits).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            # Mensaje constante: no se indica qué byte falló.
            raise CipherFailureError(
                f"No se pudo descifrar con {self.name}: clave, IV o datos incorrectos.",
                self.name,
            ) from exc


class AesCbc(_CbcStrategy):
    """AES en modo CBC; clave de 128, 192 o 256 bits."""

    name = "AES"
    key_sizes = (16, 24, 32)
    default_key_size = 32
    iv_size = 16
    block_bits = 128

    def _algorithm(self, key: bytes):
        return algorithms.AES(key)


class DesCbc(_CbcStrategy):
    """DES en modo CBC con clave de 8 bytes.

    Se mantiene solo por compatibilidad con la interfaz heredada. La clave se
    triplica (K1=K2=K3) para TripleDES, lo que equivale a DES simple.
    """

    name = "DES"
    key_sizes = (8,)
    default_key_size = 8
    iv_size = 8
    block_bits = 64

    def _algorithm(self, key: bytes):
        return TripleDES(key * 3)


class ChaCha20(CipherStrategy):
    """ChaCha20 IETF (nonce de 96 bits) sin autenticación.

    El texto cifrado mide lo mismo que el claro. Un ciphertext alterado se
    descifra a bytes distintos sin señalar error.
    """

    name = "CHACHA20"
    key_sizes = (32,)
    iv_size = 12

    def _apply_keystream(self, data: bytes, key: bytes, nonce: bytes) -> bytes:
        algorithm = algorithms.ChaCha20(key, CHACHA20_INITIAL_COUNTER + nonce)
        encryptor = Cipher(algorithm, mode=None).encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def encrypt(self, plaintext: bytes, key: Optional[bytes] = None) -> CipherOutput:
        if key is None:
            key = generate_key(32)
        else:
            self.check_key(key)
        nonce = generate_iv(self.iv_size)
        return CipherOutput(self._apply_keystream(plaintext, key, nonce), key, nonce)

    def decrypt(self, ciphertext: bytes, key: bytes, iv: Optional[bytes] = None) -> bytes:
        self.check_key(key)
        nonce = self.check_iv(iv)
        return self._apply_keystream(ciphertext, key, nonce)
