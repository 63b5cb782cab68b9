# -*- coding: utf-8 -*-
"""
RU: Утилиты: RNG через HKDF-микширование, сравнение в константное время,
строгий base64 без padding и приведение секретов к bytes.
"""
from __future__ import annotations

import base64
import hmac
import logging
import os
import re
import secrets
from typing import Final, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from passkdf.core.exceptions import InvalidParameterError

_LOGGER: Final = logging.getLogger(__name__)

_MAX_RANDOM_BYTES: Final[int] = 10 * 1024 * 1024
_RNG_INFO: Final[bytes] = b"PASSKDF-UTILS-RNG-v1"
_B64_RAW_ALPHABET: Final = re.compile(r"[A-Za-z0-9+/]*")


def generate_random_bytes(n: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Uses dual-source XOR (os.urandom + secrets.token_bytes) mixed via
    HKDF-SHA256.

    Args:
        n: number of bytes to generate (1..10MiB).

    Returns:
        Random bytes of requested length.

    Raises:
        ValueError: if n is out of range or the output is degenerate.
    """
    if not isinstance(n, int) or n <= 0 or n > _MAX_RANDOM_BYTES:
        raise ValueError("Requested random size must be in 1..10MiB")

    src1 = os.urandom(n)
    src2 = secrets.token_bytes(n)
    ikm = bytes(a ^ b for a, b in zip(src1, src2))
    hkdf = HKDF(algorithm=hashes.SHA256(), length=n, salt=src2[:16], info=_RNG_INFO)
    out = hkdf.derive(ikm)

    # Repetition count sanity check
    if n >= 8 and all(b == out[0] for b in out):
        raise ValueError("Degenerate RNG output (all bytes equal)")

    _LOGGER.debug("Generated %d random bytes", n)
    return out


def secure_compare(a: Union[bytes, bytearray], b: Union[bytes, bytearray]) -> bool:
    """
    Constant-time bytes comparison.

    Returns:
        True if sequences have equal length and content.
    """
    return hmac.compare_digest(bytes(a), bytes(b))


def b64_encode_raw(data: bytes) -> str:
    """Standard-alphabet base64 with the ``=`` padding stripped."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def b64_decode_raw(text: str) -> bytes:
    """
    Strictly decode unpadded standard base64.

    Rejects padding, whitespace, characters outside the standard alphabet,
    impossible lengths and non-zero trailing bits.

    Raises:
        ValueError: on any deviation from the canonical encoding.
    """
    if not _B64_RAW_ALPHABET.fullmatch(text) or len(text) % 4 == 1:
        raise ValueError("Invalid unpadded base64")
    padded = text + "=" * (-len(text) % 4)
    data = base64.b64decode(padded.encode("ascii"), validate=True)
    if b64_encode_raw(data) != text:
        raise ValueError("Non-canonical base64 trailing bits")
    return data


def coerce_input(value: Union[str, bytes, bytearray], name: str = "secret") -> bytes:
    """
    Normalize a secret to bytes (``str`` is UTF-8 encoded).

    Raises:
        InvalidParameterError: for any other type.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise InvalidParameterError(name, "must be str, bytes or bytearray")


__all__ = [
    "generate_random_bytes",
    "secure_compare",
    "b64_encode_raw",
    "b64_decode_raw",
    "coerce_input",
]
