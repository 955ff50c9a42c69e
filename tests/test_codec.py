# --------------------------------------------------------------
# File: test_codec.py
# Description: Pruebas de la frontera Base64.
# --------------------------------------------------------------

import pytest

from core import codec
from core.errors import ErrorKind, InvalidFormatError


def test_encode_decode_roundtrip():
    data = bytes(range(256))
    assert codec.decode(codec.encode(data), "ciphertext") == data


def test_decode_empty_text_is_empty_bytes():
    assert codec.decode("", "ciphertext") == b""


@pytest.mark.parametrize("text", ["not-base64!!", "abc", "ñandú==", "QUJD\x00"])
def test_decode_rejects_invalid_text(text):
    """Comprueba que el texto no Base64 falle nombrando el campo.

    Returns:
        None: Se espera `InvalidFormatError` con el campo indicado.
    """
    with pytest.raises(InvalidFormatError) as info:
        codec.decode(text, "key", "AES")
    assert info.value.kind is ErrorKind.INVALID_FORMAT
    assert info.value.field == "key"
    assert "key" in str(info.value)
