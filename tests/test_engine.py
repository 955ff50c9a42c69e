# --------------------------------------------------------------
# File: test_engine.py
# Description: Pruebas de la fachada Base64 del motor y del despachador.
# --------------------------------------------------------------

import base64
import os

import pytest

from core import codec, engine
from core.errors import (
    CipherFailureError,
    ErrorKind,
    InvalidFormatError,
    InvalidIvLengthError,
    InvalidKeyLengthError,
    ProviderNotInitialized,
    UnsupportedAlgorithmError,
)
from core.models import AlgorithmTag


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("algorithm", list(AlgorithmTag))
@pytest.mark.parametrize("plaintext", [b"", b"a", b"x" * 16, b"y" * 17, "¡hola, mundo!".encode()])
def test_roundtrip_every_algorithm(algorithm, plaintext):
    """Comprueba el invariante central: decrypt(encrypt(p)) == p.

    Returns:
        None: Las aserciones comparan byte a byte.
    """
    result = engine.encrypt(plaintext, None, algorithm)
    recovered = engine.decrypt(result.ciphertext, result.key, result.iv_or_nonce, algorithm)
    assert recovered == plaintext


@pytest.mark.parametrize("key_size", [16, 24, 32])
def test_roundtrip_with_supplied_aes_key(key_size):
    key = _b64(os.urandom(key_size))
    result = engine.encrypt(b"texto", key, "AES")
    assert result.key == key
    assert engine.decrypt(result.ciphertext, key, result.iv_or_nonce, "AES") == b"texto"


@pytest.mark.parametrize("algorithm, size", [("AES", 32), ("DES", 8), ("CHACHA20", 32)])
def test_key_autogeneration_sizes(algorithm, size):
    assert len(codec.decode(engine.encrypt(b"p", None, algorithm).key, "key")) == size


def test_empty_key_text_means_absent():
    result = engine.encrypt(b"p", "", "AES")
    assert len(codec.decode(result.key, "key")) == 32


def test_hello_world_aes_scenario():
    result = engine.encrypt(b"hello world", None, AlgorithmTag.AES)
    assert len(codec.decode(result.iv_or_nonce, "iv")) == 16
    assert len(codec.decode(result.key, "key")) == 32
    ct_len = len(codec.decode(result.ciphertext, "ciphertext"))
    assert ct_len > 0 and ct_len % 16 == 0
    assert engine.decrypt(result.ciphertext, result.key, result.iv_or_nonce, "AES") == b"hello world"


def test_aes_rejects_10_byte_key():
    with pytest.raises(InvalidKeyLengthError) as info:
        engine.encrypt(b"x", _b64(bytes(10)), "AES")
    assert info.value.kind is ErrorKind.INVALID_KEY_LENGTH
    assert info.value.algorithm == "AES"
    assert "10 bytes" in str(info.value)
    assert "16, 24 o 32 bytes" in str(info.value)


def test_des_rejects_7_byte_key():
    with pytest.raises(InvalidKeyLengthError) as info:
        engine.encrypt(b"x", _b64(bytes(7)), "DES")
    assert "7 bytes" in str(info.value)


def test_chacha20_rejects_16_byte_nonce():
    result = engine.encrypt(b"x", None, "CHACHA20")
    with pytest.raises(InvalidIvLengthError) as info:
        engine.decrypt(result.ciphertext, result.key, _b64(bytes(16)), "CHACHA20")
    assert info.value.kind is ErrorKind.INVALID_IV_LENGTH
    assert info.value.actual == 16


def test_symmetric_decrypt_without_iv_fails():
    result = engine.encrypt(b"x", None, "DES")
    with pytest.raises(InvalidIvLengthError):
        engine.decrypt(result.ciphertext, result.key, None, "DES")


def test_invalid_base64_key_is_invalid_format():
    with pytest.raises(InvalidFormatError) as info:
        engine.encrypt(b"x", "not-base64!!", "AES")
    assert info.value.kind is ErrorKind.INVALID_FORMAT
    assert info.value.field == "key"


@pytest.mark.parametrize("field", ["ciphertext", "key", "iv_or_nonce"])
def test_decrypt_names_the_field_that_failed(field):
    result = engine.encrypt(b"x", None, "AES")
    args = {"ciphertext": result.ciphertext, "key": result.key, "iv_or_nonce": result.iv_or_nonce}
    args[field] = "@@@"
    with pytest.raises(InvalidFormatError) as info:
        engine.decrypt(args["ciphertext"], args["key"], args["iv_or_nonce"], "AES")
    assert info.value.field == field


@pytest.mark.parametrize("algorithm", ["BLOWFISH", "", "rsa-oaep", 42])
def test_unknown_algorithm(algorithm):
    with pytest.raises(UnsupportedAlgorithmError) as info:
        engine.encrypt(b"x", None, algorithm)
    assert info.value.kind is ErrorKind.UNSUPPORTED_ALGORITHM


def test_algorithm_tag_is_case_insensitive():
    result = engine.encrypt(b"x", None, "chacha20")
    assert engine.decrypt(result.ciphertext, result.key, result.iv_or_nonce, "ChaCha20") == b"x"


@pytest.mark.parametrize("algorithm", ["AES", "DES"])
def test_tampered_cbc_ciphertext_never_returns_original(algorithm):
    plaintext = b"texto suficientemente largo para varios bloques"
    result = engine.encrypt(plaintext, None, algorithm)
    raw = bytearray(codec.decode(result.ciphertext, "ciphertext"))
    raw[-1] ^= 0x80
    try:
        recovered = engine.decrypt(codec.encode(bytes(raw)), result.key, result.iv_or_nonce, algorithm)
    except CipherFailureError as exc:
        assert exc.kind is ErrorKind.CIPHER_FAILURE
    else:
        assert recovered != plaintext


def test_wrong_aes_key_never_returns_original():
    plaintext = b"secreto"
    result = engine.encrypt(plaintext, None, "AES")
    other_key = _b64(os.urandom(32))
    try:
        recovered = engine.decrypt(result.ciphertext, other_key, result.iv_or_nonce, "AES")
    except CipherFailureError:
        return
    assert recovered != plaintext


def test_chacha20_tamper_changes_output_at_position():
    plaintext = b"integridad fuera del motor"
    result = engine.encrypt(plaintext, None, "CHACHA20")
    raw = bytearray(codec.decode(result.ciphertext, "ciphertext"))
    raw[3] ^= 0xFF
    recovered = engine.decrypt(codec.encode(bytes(raw)), result.key, result.iv_or_nonce, "CHACHA20")
    assert recovered[3] != plaintext[3]


@pytest.mark.parametrize("algorithm", ["AES", "CHACHA20"])
def test_nonce_uniqueness_fixed_key(algorithm):
    key = _b64(os.urandom(32))
    ivs = {engine.encrypt(b"x", key, algorithm).iv_or_nonce for _ in range(1000)}
    assert len(ivs) == 1000


def test_rsa_freshness_and_no_iv():
    supplied = _b64(os.urandom(32))
    first = engine.encrypt(b"same message", supplied, "RSA")
    second = engine.encrypt(b"same message", supplied, "RSA")
    assert first.iv_or_nonce is None and second.iv_or_nonce is None
    assert first.ciphertext != second.ciphertext
    assert first.key != second.key
    for result in (first, second):
        assert engine.decrypt(result.ciphertext, result.key, None, "RSA") == b"same message"


def test_rsa_ignores_iv_argument_on_decrypt():
    result = engine.encrypt(b"m", None, "RSA")
    assert engine.decrypt(result.ciphertext, result.key, "no-es-base64!!", "RSA") == b"m"


def test_rsa_malformed_key_is_cipher_failure():
    result = engine.encrypt(b"m", None, "RSA")
    with pytest.raises(CipherFailureError):
        engine.decrypt(result.ciphertext, _b64(b"definitivamente no es PKCS8"), None, "RSA")


def test_rsa_oversized_plaintext_is_cipher_failure():
    with pytest.raises(CipherFailureError):
        engine.encrypt(bytes(300), None, "RSA")


def test_rsa_encrypt_does_not_decode_supplied_key():
    result = engine.encrypt(b"same message", "not-base64!!", "RSA")
    assert engine.decrypt(result.ciphertext, result.key, None, "RSA") == b"same message"


def test_rsa_wrong_key_is_cipher_failure():
    first = engine.encrypt(b"mensaje secreto", None, "RSA")
    second = engine.encrypt(b"otro mensaje", None, "RSA")
    with pytest.raises(CipherFailureError) as info:
        engine.decrypt(first.ciphertext, second.key, None, "RSA")
    assert info.value.kind is ErrorKind.CIPHER_FAILURE


def test_rsa_tampered_ciphertext_is_cipher_failure():
    result = engine.encrypt(b"mensaje secreto", None, "RSA")
    raw = bytearray(base64.b64decode(result.ciphertext))
    raw[100] ^= 0x01
    with pytest.raises(CipherFailureError):
        engine.decrypt(_b64(bytes(raw)), result.key, None, "RSA")


@pytest.mark.parametrize("algorithm, size", [("AES", 32), ("DES", 8), ("CHACHA20", 32)])
def test_generate_key_text_uses_largest_size(algorithm, size):
    key = engine.generate_key_text(algorithm)
    assert len(base64.b64decode(key)) == size
    result = engine.encrypt(b"clave generada", key, algorithm)
    assert result.key == key
    assert engine.decrypt(result.ciphertext, key, result.iv_or_nonce, algorithm) == b"clave generada"


def test_generate_key_text_is_none_for_rsa():
    assert engine.generate_key_text("RSA") is None


def test_result_is_immutable():
    result = engine.encrypt(b"x", None, "AES")
    with pytest.raises(Exception):
        result.key = "otra"


def test_init_providers_is_idempotent():
    engine.init_providers()
    engine.init_providers()
    assert engine.encrypt(b"x", None, "DES").iv_or_nonce is not None


def test_engine_refuses_before_initialization(monkeypatch):
    monkeypatch.setattr(engine, "_initialized", False)
    with pytest.raises(ProviderNotInitialized):
        engine.encrypt(b"x", None, "AES")
    with pytest.raises(ProviderNotInitialized):
        engine.decrypt("", "", None, "AES")
