# --------------------------------------------------------------
# File: randomness.py
# Description: Fuente de aleatoriedad criptográfica compartida por el proceso.
# --------------------------------------------------------------
"""Generación de claves, IV y nonces a partir del CSPRNG del sistema operativo."""

import os


def random_bytes(length: int) -> bytes:
    """Devuelve `length` bytes aleatorios del CSPRNG del sistema.

    `os.urandom` es seguro entre hilos y no comparte secuencia entre llamadas.

    Args:
        length (int): Número de bytes solicitados.

    Returns:
        bytes: Material aleatorio independiente en cada llamada.

    """

    if length <= 0:
        raise ValueError("La longitud solicitada debe ser positiva.")
    return os.urandom(length)


def generate_key(length: int) -> bytes:
    """Genera una clave simétrica nueva de `length` bytes."""

    return random_bytes(length)


def generate_iv(length: int) -> bytes:
    """Genera un IV o nonce nuevo; nunca se deriva de la clave."""

    return random_bytes(length)
