"""
passkdf: password key derivation with self-describing encoded secrets.

Единая точка импорта: фабрика KDF, адаптеры Argon2id/PBKDF2, конфигурация,
перечисления и исключения.

Example:
    from passkdf import AlgorithmType, new, parse

    kdf = new(AlgorithmType.ARGON2ID)
    kdf.generate("hello, world!")
    stored = kdf.to_string()        # $argon2id$v=19$m=65536,t=3,p=4$...$...

    parse(stored).verify("hello, world!")   # True
"""

from passkdf.algorithms import Argon2idKDF, Pbkdf2KDF
from passkdf.config import (
    Argon2idConfig,
    Argon2Profile,
    Config,
    Pbkdf2Config,
    default_argon2id_config,
    default_pbkdf2_config,
)
from passkdf.core.exceptions import (
    AlgorithmError,
    CryptoError,
    EncodingError,
    IncompatibleVersionError,
    InvalidBase64Error,
    InvalidParameterError,
    KeyDerivationError,
    MalformedEncodingError,
    UnrecognizedEncodingError,
    UnsupportedAlgorithmError,
    ValidationError,
)
from passkdf.core.protocols import KDFProtocol, RandomSource
from passkdf.core.types import (
    AlgorithmType,
    DigestKind,
    algorithm_name,
    digest_name,
    parse_algorithm,
    parse_digest,
)
from passkdf.kdf import identify, needs_rehash, new, parse, verify

__version__ = "1.0.0"

__all__ = [
    # Factory / dispatcher
    "new",
    "parse",
    "identify",
    "verify",
    "needs_rehash",
    # Adapters
    "KDFProtocol",
    "RandomSource",
    "Argon2idKDF",
    "Pbkdf2KDF",
    # Configuration
    "Config",
    "Argon2idConfig",
    "Argon2Profile",
    "Pbkdf2Config",
    "default_argon2id_config",
    "default_pbkdf2_config",
    # Enums
    "AlgorithmType",
    "DigestKind",
    "algorithm_name",
    "digest_name",
    "parse_algorithm",
    "parse_digest",
    # Exceptions
    "CryptoError",
    "AlgorithmError",
    "UnsupportedAlgorithmError",
    "KeyDerivationError",
    "EncodingError",
    "UnrecognizedEncodingError",
    "MalformedEncodingError",
    "IncompatibleVersionError",
    "InvalidBase64Error",
    "ValidationError",
    "InvalidParameterError",
]
