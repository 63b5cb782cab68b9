"""
Argon2id: memory-hard password KDF (PHC winner 2015).

Адаптер владеет своей конфигурацией, солью и производным хэшем и умеет
кодировать их в самоописывающую строку::

    $argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>

Salt and hash are unpadded standard base64. ``v`` is the version of the
Argon2 primitive compiled into argon2-cffi; strings produced by a different
primitive version are rejected instead of being misinterpreted.

Example:
    >>> kdf = Argon2idKDF()
    >>> kdf.generate(b"hello, world!")
    >>> stored = kdf.to_string()
    >>> Argon2idKDF.decode(stored).verify(b"hello, world!")
    True

References:
- RFC 9106: Argon2 Memory-Hard Function
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Final, Optional

from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from passkdf.config import (
    ARGON2ID_DEFAULT_SALT_LENGTH,
    UINT8_MAX,
    UINT32_MAX,
    Argon2idConfig,
)
from passkdf.core.exceptions import (
    IncompatibleVersionError,
    InvalidBase64Error,
    KeyDerivationError,
    MalformedEncodingError,
)
from passkdf.core.protocols import BytesLike, RandomSource, SecretInput
from passkdf.core.types import AlgorithmType, algorithm_name
from passkdf.utils import (
    b64_decode_raw,
    b64_encode_raw,
    coerce_input,
    generate_random_bytes,
    secure_compare,
)

_LOGGER: Final = logging.getLogger(__name__)

ALGORITHM_ID: Final[str] = algorithm_name(AlgorithmType.ARGON2ID)
PREFIX: Final[str] = f"${ALGORITHM_ID}$"

_FIELD_COUNT: Final[int] = 6
_VERSION_RE: Final = re.compile(r"v=([+-]?[0-9]+)")
_PARAMS_RE: Final = re.compile(r"m=([0-9]+),t=([0-9]+),p=([0-9]+)")


class Argon2idKDF:
    """
    Argon2id key derivation with lazy salt and string encoding.

    Default Parameters:
    - memory_cost: 65536 KiB (64 MiB)
    - time_cost: 3
    - parallelism: 4
    - salt: 16 bytes (random, generated on first derivation)
    - key: 32 bytes

    Args:
        config: parameters; zero fields are replaced by defaults.
        random_source: ``n -> bytes`` secure random capability.
    """

    __slots__ = ("_config", "_hash", "_random_source")

    algorithm = AlgorithmType.ARGON2ID

    def __init__(
        self,
        config: Optional[Argon2idConfig] = None,
        *,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        self._config = (config or Argon2idConfig()).with_defaults()
        self._hash = b""
        self._random_source: RandomSource = random_source or generate_random_bytes

    # --- state ---

    @property
    def config(self) -> Argon2idConfig:
        """Copy of the effective configuration."""
        return replace(self._config)

    @property
    def salt(self) -> bytes:
        return self._config.salt

    @property
    def is_complete(self) -> bool:
        """True once a hash has been derived or decoded."""
        return bool(self._hash)

    def set_salt(self, salt: BytesLike) -> None:
        self._config.salt = bytes(salt)
        if self._config.salt:
            self._config.salt_length = len(self._config.salt)

    # --- derivation ---

    def _derive(self, secret: bytes) -> bytes:
        cfg = self._config
        try:
            return hash_secret_raw(
                secret=secret,
                salt=cfg.salt,
                time_cost=cfg.time_cost,
                memory_cost=cfg.memory_cost,
                parallelism=cfg.parallelism,
                hash_len=cfg.key_length,
                type=Type.ID,
                version=ARGON2_VERSION,
            )
        except Exception as exc:
            _LOGGER.error("Argon2id derivation failed: %s", exc.__class__.__name__)
            raise KeyDerivationError(
                "Argon2id derivation failed", algorithm=ALGORITHM_ID
            ) from exc

    def generate(self, secret: SecretInput) -> None:
        data = coerce_input(secret)
        if not self._config.salt:
            self._config.salt = self._random_source(self._config.salt_length)
            self._config.salt_length = len(self._config.salt)

        self._hash = self._derive(data)
        _LOGGER.debug(
            "Argon2id: derived %d-byte key (m=%d, t=%d, p=%d)",
            self._config.key_length,
            self._config.memory_cost,
            self._config.time_cost,
            self._config.parallelism,
        )

    def verify(self, secret: SecretInput) -> bool:
        data = coerce_input(secret)
        if not self._hash:
            _LOGGER.debug("Argon2id: verify called before a hash exists")
            return False
        return secure_compare(self._hash, self._derive(data))

    def key(self) -> bytes:
        return self._hash

    # --- encoding ---

    def to_string(self) -> str:
        cfg = self._config
        return (
            f"{PREFIX}v={ARGON2_VERSION}"
            f"$m={cfg.memory_cost},t={cfg.time_cost},p={cfg.parallelism}"
            f"${b64_encode_raw(cfg.salt)}${b64_encode_raw(self._hash)}"
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        cfg = self._config
        return (
            f"{self.__class__.__name__}(m={cfg.memory_cost}, t={cfg.time_cost}, "
            f"p={cfg.parallelism}, key_length={cfg.key_length}, "
            f"complete={self.is_complete})"
        )

    @classmethod
    def decode(
        cls,
        encoded: str,
        *,
        random_source: Optional[RandomSource] = None,
    ) -> "Argon2idKDF":
        """
        Rebuild a complete instance from its string encoding.

        Salt and key lengths come from the decoded bytes, not from the
        string's parameters.

        Raises:
            MalformedEncodingError: wrong field count or parameter syntax.
            IncompatibleVersionError: ``v`` differs from ARGON2_VERSION.
            InvalidBase64Error: salt or hash is not strict unpadded base64.
        """
        fields = encoded.split("$")
        if len(fields) != _FIELD_COUNT or fields[0] or fields[1] != ALGORITHM_ID:
            raise MalformedEncodingError(
                "invalid encoded format",
                algorithm=ALGORITHM_ID,
                context={"fields": len(fields)},
            )

        match = _VERSION_RE.fullmatch(fields[2])
        if match is None:
            raise MalformedEncodingError(
                "cannot scan version field", algorithm=ALGORITHM_ID
            )
        version = int(match.group(1))
        if version != ARGON2_VERSION:
            _LOGGER.warning(
                "Argon2id: rejecting encoded version %d (runtime %d)",
                version,
                ARGON2_VERSION,
            )
            raise IncompatibleVersionError(ALGORITHM_ID, ARGON2_VERSION, version)

        match = _PARAMS_RE.fullmatch(fields[3])
        if match is None:
            raise MalformedEncodingError(
                "cannot scan parameter field", algorithm=ALGORITHM_ID
            )
        memory_cost, time_cost, parallelism = (int(g) for g in match.groups())
        if not (memory_cost and time_cost and parallelism):
            raise MalformedEncodingError(
                "cost parameters must be positive", algorithm=ALGORITHM_ID
            )
        if memory_cost > UINT32_MAX or time_cost > UINT32_MAX:
            raise MalformedEncodingError(
                "memory or time cost out of range", algorithm=ALGORITHM_ID
            )
        if parallelism > UINT8_MAX:
            raise MalformedEncodingError(
                "parallelism out of range", algorithm=ALGORITHM_ID
            )

        try:
            salt = b64_decode_raw(fields[4])
        except ValueError as exc:
            raise InvalidBase64Error(ALGORITHM_ID, "salt") from exc
        try:
            digest = b64_decode_raw(fields[5])
        except ValueError as exc:
            raise InvalidBase64Error(ALGORITHM_ID, "hash") from exc

        kdf = cls.__new__(cls)
        kdf._config = Argon2idConfig(
            memory_cost=memory_cost,
            time_cost=time_cost,
            parallelism=parallelism,
            salt_length=len(salt) or ARGON2ID_DEFAULT_SALT_LENGTH,
            key_length=len(digest),
            salt=salt,
        )
        kdf._hash = digest
        kdf._random_source = random_source or generate_random_bytes

        _LOGGER.debug(
            "Argon2id: decoded (m=%d, t=%d, p=%d)", memory_cost, time_cost, parallelism
        )
        return kdf


__all__ = ["Argon2idKDF", "ALGORITHM_ID", "PREFIX"]
