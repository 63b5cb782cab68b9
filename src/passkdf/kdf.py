# -*- coding: utf-8 -*-
"""
RU: Фабрика и диспетчер KDF: создание адаптера по типу алгоритма и разбор
закодированной строки по её префиксу.

EN: Stateless KDF factory and dispatcher. ``new()`` builds an adapter from a
typed configuration; ``parse()`` sniffs the literal prefix of an encoded
string and delegates to the matching adapter's decoder. New algorithms are
added by extending the two tables below.

Example:
    >>> kdf = new(AlgorithmType.ARGON2ID)
    >>> kdf.generate("hello, world!")
    >>> stored = kdf.to_string()
    >>> parse(stored).verify("hello, world!")
    True
"""
from __future__ import annotations

import logging
from typing import Callable, Final, Optional, Union

from passkdf.algorithms.argon2id import PREFIX as ARGON2ID_PREFIX
from passkdf.algorithms.argon2id import Argon2idKDF
from passkdf.algorithms.pbkdf2 import PREFIX as PBKDF2_PREFIX
from passkdf.algorithms.pbkdf2 import Pbkdf2KDF
from passkdf.config import Argon2idConfig, Config, Pbkdf2Config
from passkdf.core.exceptions import (
    CryptoError,
    InvalidParameterError,
    UnrecognizedEncodingError,
    UnsupportedAlgorithmError,
)
from passkdf.core.protocols import KDFProtocol, RandomSource, SecretInput
from passkdf.core.types import AlgorithmType, algorithm_name

_LOGGER: Final = logging.getLogger(__name__)

AnyConfig = Union[Config, Argon2idConfig, Pbkdf2Config]

# Literal prefix -> decoder. Prefixes are matched case-sensitively.
DECODERS: Final[dict[str, Callable[[str], KDFProtocol]]] = {
    ARGON2ID_PREFIX: Argon2idKDF.decode,
    PBKDF2_PREFIX: Pbkdf2KDF.decode,
}

_PREFIX_TYPES: Final[dict[str, AlgorithmType]] = {
    ARGON2ID_PREFIX: AlgorithmType.ARGON2ID,
    PBKDF2_PREFIX: AlgorithmType.PBKDF2,
}


def _new_argon2id(config: Config, random_source: Optional[RandomSource]) -> KDFProtocol:
    return Argon2idKDF(config.argon2id, random_source=random_source)


def _new_pbkdf2(config: Config, random_source: Optional[RandomSource]) -> KDFProtocol:
    return Pbkdf2KDF(config.pbkdf2, random_source=random_source)


CONSTRUCTORS: Final[
    dict[AlgorithmType, Callable[[Config, Optional[RandomSource]], KDFProtocol]]
] = {
    AlgorithmType.ARGON2ID: _new_argon2id,
    AlgorithmType.PBKDF2: _new_pbkdf2,
}


def _as_config(kdf_type: AlgorithmType, config: Optional[AnyConfig]) -> Config:
    if config is None:
        return Config()
    if isinstance(config, Config):
        return config
    if isinstance(config, Argon2idConfig) and kdf_type == AlgorithmType.ARGON2ID:
        return Config(argon2id=config)
    if isinstance(config, Pbkdf2Config) and kdf_type == AlgorithmType.PBKDF2:
        return Config(pbkdf2=config)
    raise InvalidParameterError(
        "config",
        f"{type(config).__name__} does not configure {algorithm_name(kdf_type)}",
        algorithm=algorithm_name(kdf_type),
    )


def new(
    kdf_type: AlgorithmType,
    config: Optional[AnyConfig] = None,
    *,
    random_source: Optional[RandomSource] = None,
) -> KDFProtocol:
    """
    Create a fresh KDF adapter.

    Args:
        kdf_type: algorithm to use.
        config: aggregate ``Config``, the matching per-algorithm config, or
            None for defaults.
        random_source: optional ``n -> bytes`` secure random capability.

    Returns:
        Adapter without a derived hash.

    Raises:
        UnsupportedAlgorithmError: ``kdf_type`` has no constructor.
        InvalidParameterError: config does not match ``kdf_type`` or is out
            of range.
    """
    constructor = CONSTRUCTORS.get(kdf_type) if isinstance(kdf_type, int) else None
    if constructor is None:
        label = (
            algorithm_name(kdf_type) if isinstance(kdf_type, int) else str(kdf_type)
        )
        raise UnsupportedAlgorithmError(label, "unknown kdf type given")

    kdf = constructor(_as_config(kdf_type, config), random_source)
    _LOGGER.debug("Created KDF instance: %s", algorithm_name(kdf_type))
    return kdf


def identify(encoded: str) -> AlgorithmType:
    """Algorithm named by the encoding's prefix, ``UNKNOWN`` if none matches."""
    for prefix, kdf_type in _PREFIX_TYPES.items():
        if encoded.startswith(prefix):
            return kdf_type
    return AlgorithmType.UNKNOWN


def parse(encoded: str) -> KDFProtocol:
    """
    Rebuild a complete KDF adapter from an encoded string.

    Raises:
        UnrecognizedEncodingError: no known prefix.
        MalformedEncodingError, IncompatibleVersionError, InvalidBase64Error:
            propagated from the adapter's decoder.
    """
    for prefix, decoder in DECODERS.items():
        if encoded.startswith(prefix):
            return decoder(encoded)

    _LOGGER.warning("Cannot parse encoded secret: unknown format")
    raise UnrecognizedEncodingError()


def verify(encoded: str, secret: SecretInput) -> bool:
    """Parse ``encoded`` and check ``secret`` against it."""
    return parse(encoded).verify(secret)


def needs_rehash(
    encoded: str,
    kdf_type: AlgorithmType,
    config: Optional[AnyConfig] = None,
) -> bool:
    """
    Check whether a stored secret falls short of the current policy.

    Policy:
    - Different algorithm or undecodable string => True.
    - Argon2id: memory/time/parallelism, salt or key length below policy.
    - PBKDF2: iterations, salt or key length below policy, or other digest.
    """
    try:
        stored = parse(encoded)
    except CryptoError as exc:
        _LOGGER.debug("needs_rehash: undecodable (%s)", exc.__class__.__name__)
        return True

    if identify(encoded) != kdf_type:
        return True

    policy = _as_config(kdf_type, config)
    if isinstance(stored, Argon2idKDF):
        want_a = policy.argon2id.with_defaults()
        have_a = stored.config
        return (
            have_a.memory_cost < want_a.memory_cost
            or have_a.time_cost < want_a.time_cost
            or have_a.parallelism < want_a.parallelism
            or have_a.salt_length < want_a.salt_length
            or have_a.key_length < want_a.key_length
        )
    if isinstance(stored, Pbkdf2KDF):
        want_p = policy.pbkdf2.with_defaults()
        have_p = stored.config
        return (
            have_p.iterations < want_p.iterations
            or have_p.salt_length < want_p.salt_length
            or have_p.key_length < want_p.key_length
            or have_p.digest != want_p.digest
        )
    return True


__all__ = [
    "DECODERS",
    "CONSTRUCTORS",
    "new",
    "identify",
    "parse",
    "verify",
    "needs_rehash",
]
