# -*- coding: utf-8 -*-
"""
RU: Протокол (DI-контракт) для адаптеров KDF и тип источника случайности.

EN: Structural contract shared by the KDF adapters, plus the injectable
secure random source type.

Design notes:
- Protocol is @runtime_checkable to allow isinstance checks in tests.
- Adapters implement it structurally; there is no common base class.
"""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

BytesLike = Union[bytes, bytearray]
SecretInput = Union[str, bytes, bytearray]

# Returns exactly ``n`` cryptographically secure random bytes.
RandomSource = Callable[[int], bytes]


@runtime_checkable
class KDFProtocol(Protocol):
    """
    Password KDF holding its own parameters, salt and derived hash.

    Lifecycle:
        fresh (from config) --generate()--> complete --to_string()--> stored
        stored --parse()--> complete --verify()--> bool
    """

    def set_salt(self, salt: BytesLike) -> None:
        """
        Use an explicit salt instead of a lazily generated one.

        Args:
            salt: salt bytes; the configured salt length follows it.
        """
        ...

    def generate(self, secret: SecretInput) -> None:
        """
        Derive and store the hash of ``secret``.

        Draws a random salt first when none is set. Repeated calls reuse the
        salt and overwrite the hash.

        Raises:
            KeyDerivationError: primitive rejected the parameters.
        """
        ...

    def verify(self, secret: SecretInput) -> bool:
        """
        Constant-time check of ``secret`` against the stored hash.

        Returns:
            True only when the recomputed hash equals the stored one.
        """
        ...

    def key(self) -> bytes:
        """Stored hash bytes (empty before the first derivation)."""
        ...

    def to_string(self) -> str:
        """Self-describing encoding of parameters, salt and hash."""
        ...


__all__ = [
    "BytesLike",
    "SecretInput",
    "RandomSource",
    "KDFProtocol",
]
