# --------------------------------------------------------------
# File: engine.py
# Description: Fachada pública del motor de cifrado y despachador de algoritmos.
# --------------------------------------------------------------
"""Motor de cifrado: Base64 en la frontera, estrategias por algoritmo en el interior.

Uso típico::

    from core import engine

    engine.init_providers()          # una sola vez, al arrancar el proceso
    result = engine.encrypt(b"hola", None, "AES")
    engine.decrypt(result.ciphertext, result.key, result.iv_or_nonce, "AES")

"""

import threading
from typing import Dict, Optional, Union

import cryptography
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends.openssl import backend as openssl_backend
from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from core import codec, randomness
from core.crypto_asym import Rsa
from core.crypto_sym import AesCbc, ChaCha20, DesCbc
from core.errors import CryptoEngineError, ProviderNotInitialized, UnsupportedAlgorithmError
from core.logger import get_logger
from core.models import AlgorithmTag, EncryptionResult
from core.strategy import CipherStrategy

logger = get_logger(__name__)

STRATEGIES: Dict[AlgorithmTag, CipherStrategy] = {
    AlgorithmTag.AES: AesCbc(),
    AlgorithmTag.DES: DesCbc(),
    AlgorithmTag.CHACHA20: ChaCha20(),
    AlgorithmTag.RSA: Rsa(),
}

_init_lock = threading.Lock()
_initialized = False


def init_providers() -> None:
    """Comprueba una única vez que el backend soporta todas las primitivas.

    Debe completarse antes del primer `encrypt`/`decrypt`. Las llamadas
    posteriores no repiten la comprobación.

    Raises:
        RuntimeError: Si alguna primitiva no está disponible en el backend.

    """

    global _initialized
    with _init_lock:
        if _initialized:
            return
        probes = {
            "AES-CBC": lambda: Cipher(algorithms.AES(bytes(32)), modes.CBC(bytes(16))),
            "DES-CBC": lambda: Cipher(TripleDES(bytes(24)), modes.CBC(bytes(8))),
            "ChaCha20": lambda: Cipher(algorithms.ChaCha20(bytes(32), bytes(16)), mode=None),
        }
        for name, build in probes.items():
            try:
                encryptor = build().encryptor()
                encryptor.update(bytes(16))
                encryptor.finalize()
            except UnsupportedAlgorithm as exc:
                raise RuntimeError(f"El backend criptográfico no soporta {name}.") from exc
        logger.info(
            "Proveedores listos: cryptography %s sobre %s",
            cryptography.__version__,
            openssl_backend.openssl_version_text(),
        )
        _initialized = True


def _require_initialized() -> None:
    if not _initialized:
        raise ProviderNotInitialized(
            "init_providers() debe ejecutarse antes de usar el motor de cifrado."
        )


def get_strategy(algorithm: Union[AlgorithmTag, str]) -> CipherStrategy:
    """Devuelve la estrategia asociada a la etiqueta.

    Raises:
        UnsupportedAlgorithmError: Si la etiqueta es desconocida.

    """

    tag = AlgorithmTag.parse(algorithm)
    try:
        return STRATEGIES[tag]
    except KeyError:
        raise UnsupportedAlgorithmError(algorithm) from None


def generate_key_text(algorithm: Union[AlgorithmTag, str]) -> Optional[str]:
    """Genera una clave aleatoria en Base64 del mayor tamaño admitido.

    Returns:
        Optional[str]: La clave, o `None` si el algoritmo no acepta clave.

    """

    strategy = get_strategy(algorithm)
    if not strategy.uses_key:
        return None
    return codec.encode(randomness.generate_key(max(strategy.key_sizes)))


def encrypt(
    plaintext: bytes,
    key: Optional[str],
    algorithm: Union[AlgorithmTag, str],
) -> EncryptionResult:
    """Cifra `plaintext` con el algoritmo indicado.

    Args:
        plaintext (bytes): Datos en claro.
        key (Optional[str]): Clave en Base64; `None` o vacía para generarla.
            RSA la ignora sin decodificarla.
        algorithm (Union[AlgorithmTag, str]): Algoritmo seleccionado.

    Returns:
        EncryptionResult: Ciphertext, clave e IV/nonce en Base64.

    Raises:
        CryptoEngineError: Con el `ErrorKind` correspondiente al fallo.

    """

    _require_initialized()
    strategy = get_strategy(algorithm)
    key_bytes = None
    if key and strategy.uses_key:
        key_bytes = codec.decode(key, "key", strategy.name)

    try:
        output = strategy.encrypt(plaintext, key_bytes)
    except CryptoEngineError as exc:
        logger.warning("encrypt %s rechazado: %s", strategy.name, exc.kind.value)
        raise
    logger.debug(
        "encrypt %s: %d bytes en claro -> %d bytes cifrados",
        strategy.name,
        len(plaintext),
        len(output.ciphertext),
    )
    return EncryptionResult(
        ciphertext=codec.encode(output.ciphertext),
        key=codec.encode(output.key),
        iv_or_nonce=codec.encode(output.iv) if output.iv is not None else None,
    )


def decrypt(
    ciphertext: str,
    key: str,
    iv_or_nonce: Optional[str],
    algorithm: Union[AlgorithmTag, str],
) -> bytes:
    """Descifra el material producido por `encrypt`.

    Args:
        ciphertext (str): Datos cifrados en Base64.
        key (str): Clave en Base64 (privada PKCS8 para RSA).
        iv_or_nonce (Optional[str]): IV o nonce en Base64; `None` para RSA.
        algorithm (Union[AlgorithmTag, str]): Algoritmo con el que se cifró.

    Returns:
        bytes: Texto en claro original.

    Raises:
        CryptoEngineError: Con el `ErrorKind` correspondiente al fallo.

    """

    _require_initialized()
    strategy = get_strategy(algorithm)
    key_bytes = codec.decode(key or "", "key", strategy.name)
    iv_bytes = None
    if iv_or_nonce is not None and strategy.iv_size is not None:
        iv_bytes = codec.decode(iv_or_nonce, "iv_or_nonce", strategy.name)
    data = codec.decode(ciphertext, "ciphertext", strategy.name)

    try:
        plaintext = strategy.decrypt(data, key_bytes, iv_bytes)
    except CryptoEngineError as exc:
        logger.warning("decrypt %s rechazado: %s", strategy.name, exc.kind.value)
        raise
    logger.debug("decrypt %s: %d bytes recuperados", strategy.name, len(plaintext))
    return plaintext
