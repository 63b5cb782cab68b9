# -*- coding: utf-8 -*-
"""
RU: Конфигурация параметров KDF с безопасными значениями по умолчанию и профилями.
EN: KDF parameter configuration with safe defaults and device profiles.

Zero-valued numeric fields mean "use the default"; defaults are applied once,
when an adapter is constructed, through ``with_defaults()``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Final

from passkdf.core.exceptions import InvalidParameterError
from passkdf.core.types import DigestKind

# Argon2id defaults
ARGON2ID_DEFAULT_MEMORY_COST: Final[int] = 64 * 1024  # KiB (64 MiB)
ARGON2ID_DEFAULT_TIME_COST: Final[int] = 3
ARGON2ID_DEFAULT_PARALLELISM: Final[int] = 4
ARGON2ID_DEFAULT_SALT_LENGTH: Final[int] = 16
ARGON2ID_DEFAULT_KEY_LENGTH: Final[int] = 32

# PBKDF2 defaults
PBKDF2_DEFAULT_ITERATIONS: Final[int] = 300_000
PBKDF2_DEFAULT_SALT_LENGTH: Final[int] = 16
PBKDF2_DEFAULT_KEY_LENGTH: Final[int] = 32
PBKDF2_DEFAULT_DIGEST: Final[DigestKind] = DigestKind.SHA3_384

UINT8_MAX: Final[int] = 0xFF
UINT32_MAX: Final[int] = 0xFFFF_FFFF


def _check_range(name: str, value: int, upper: int, algorithm: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(name, "must be an integer", algorithm=algorithm)
    if value < 0 or value > upper:
        raise InvalidParameterError(
            name, f"must be between 0 and {upper}", algorithm=algorithm
        )


class Argon2Profile(str, Enum):
    """Predefined Argon2id parameter profiles for different device capabilities."""

    # Desktop/laptop systems (default)
    DESKTOP = "desktop"

    # High-performance servers
    SERVER = "server"


@dataclass
class Argon2idConfig:
    """
    Argon2id configuration parameters.

    Attributes:
        memory_cost: Memory usage in KiB.
        time_cost: Number of passes over memory.
        parallelism: Number of lanes (fits in one byte).
        salt_length: Salt length in bytes when the salt is generated.
        key_length: Derived key length in bytes.
        salt: Explicit salt; empty means "generate on first derivation".

    Examples:
        >>> Argon2idConfig().with_defaults().memory_cost
        65536
        >>> Argon2idConfig(time_cost=5).with_defaults().time_cost
        5
    """

    memory_cost: int = 0
    time_cost: int = 0
    parallelism: int = 0
    salt_length: int = 0
    key_length: int = 0
    salt: bytes = field(default=b"", repr=False)

    def with_defaults(self) -> "Argon2idConfig":
        """
        Return a validated copy with zero fields replaced by defaults.

        Raises:
            InvalidParameterError: negative or overflowing values.
        """
        _check_range("memory_cost", self.memory_cost, UINT32_MAX, "argon2id")
        _check_range("time_cost", self.time_cost, UINT32_MAX, "argon2id")
        _check_range("parallelism", self.parallelism, UINT8_MAX, "argon2id")
        _check_range("salt_length", self.salt_length, UINT32_MAX, "argon2id")
        _check_range("key_length", self.key_length, UINT32_MAX, "argon2id")

        salt = bytes(self.salt)
        salt_length = self.salt_length or ARGON2ID_DEFAULT_SALT_LENGTH
        if salt:
            salt_length = len(salt)

        return replace(
            self,
            memory_cost=self.memory_cost or ARGON2ID_DEFAULT_MEMORY_COST,
            time_cost=self.time_cost or ARGON2ID_DEFAULT_TIME_COST,
            parallelism=self.parallelism or ARGON2ID_DEFAULT_PARALLELISM,
            salt_length=salt_length,
            key_length=self.key_length or ARGON2ID_DEFAULT_KEY_LENGTH,
            salt=salt,
        )

    @staticmethod
    def from_profile(profile: Argon2Profile) -> "Argon2idConfig":
        """
        Create configuration from predefined profile.

        Examples:
            >>> Argon2idConfig.from_profile(Argon2Profile.SERVER).memory_cost
            131072
        """
        return replace(_PROFILE_PARAMS[profile])


@dataclass
class Pbkdf2Config:
    """
    PBKDF2-HMAC configuration parameters.

    Attributes:
        iterations: HMAC iteration count.
        salt_length: Salt length in bytes when the salt is generated.
        key_length: Derived key length in bytes.
        digest: Underlying HMAC digest.
        salt: Explicit salt; empty means "generate on first derivation".
    """

    iterations: int = 0
    salt_length: int = 0
    key_length: int = 0
    digest: DigestKind = DigestKind.UNKNOWN
    salt: bytes = field(default=b"", repr=False)

    def with_defaults(self) -> "Pbkdf2Config":
        """
        Return a validated copy with zero fields replaced by defaults.

        An unknown digest also falls back to the default digest.

        Raises:
            InvalidParameterError: negative or overflowing values.
        """
        _check_range("iterations", self.iterations, UINT32_MAX, "pbkdf2")
        _check_range("salt_length", self.salt_length, UINT32_MAX, "pbkdf2")
        _check_range("key_length", self.key_length, UINT32_MAX, "pbkdf2")

        digest = PBKDF2_DEFAULT_DIGEST
        if self.digest in tuple(DigestKind) and self.digest != DigestKind.UNKNOWN:
            digest = DigestKind(self.digest)

        salt = bytes(self.salt)
        salt_length = self.salt_length or PBKDF2_DEFAULT_SALT_LENGTH
        if salt:
            salt_length = len(salt)

        return replace(
            self,
            iterations=self.iterations or PBKDF2_DEFAULT_ITERATIONS,
            salt_length=salt_length,
            key_length=self.key_length or PBKDF2_DEFAULT_KEY_LENGTH,
            digest=digest,
            salt=salt,
        )


@dataclass
class Config:
    """Per-algorithm configurations handed to the KDF factory."""

    argon2id: Argon2idConfig = field(default_factory=Argon2idConfig)
    pbkdf2: Pbkdf2Config = field(default_factory=Pbkdf2Config)


def default_argon2id_config() -> Argon2idConfig:
    """Fully populated Argon2id configuration with the baseline defaults."""
    return Argon2idConfig().with_defaults()


def default_pbkdf2_config() -> Pbkdf2Config:
    """Fully populated PBKDF2 configuration with the baseline defaults."""
    return Pbkdf2Config().with_defaults()


# Predefined profiles
_PROFILE_PARAMS: Final[dict[Argon2Profile, Argon2idConfig]] = {
    # Desktop: balanced security/performance
    Argon2Profile.DESKTOP: Argon2idConfig(
        memory_cost=ARGON2ID_DEFAULT_MEMORY_COST,
        time_cost=ARGON2ID_DEFAULT_TIME_COST,
        parallelism=ARGON2ID_DEFAULT_PARALLELISM,
        salt_length=ARGON2ID_DEFAULT_SALT_LENGTH,
        key_length=ARGON2ID_DEFAULT_KEY_LENGTH,
    ),
    # Server: maximum security for high-value targets
    Argon2Profile.SERVER: Argon2idConfig(
        memory_cost=128 * 1024,  # 128 MiB
        time_cost=5,
        parallelism=8,
        salt_length=ARGON2ID_DEFAULT_SALT_LENGTH,
        key_length=ARGON2ID_DEFAULT_KEY_LENGTH,
    ),
}


__all__ = [
    "ARGON2ID_DEFAULT_MEMORY_COST",
    "ARGON2ID_DEFAULT_TIME_COST",
    "ARGON2ID_DEFAULT_PARALLELISM",
    "ARGON2ID_DEFAULT_SALT_LENGTH",
    "ARGON2ID_DEFAULT_KEY_LENGTH",
    "PBKDF2_DEFAULT_ITERATIONS",
    "PBKDF2_DEFAULT_SALT_LENGTH",
    "PBKDF2_DEFAULT_KEY_LENGTH",
    "PBKDF2_DEFAULT_DIGEST",
    "UINT8_MAX",
    "UINT32_MAX",
    "Argon2Profile",
    "Argon2idConfig",
    "Pbkdf2Config",
    "Config",
    "default_argon2id_config",
    "default_pbkdf2_config",
]
