"""Core contracts of passkdf: exceptions, enum types and the KDF protocol."""

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

__all__ = [
    "AlgorithmError",
    "CryptoError",
    "EncodingError",
    "IncompatibleVersionError",
    "InvalidBase64Error",
    "InvalidParameterError",
    "KeyDerivationError",
    "MalformedEncodingError",
    "UnrecognizedEncodingError",
    "UnsupportedAlgorithmError",
    "ValidationError",
    "KDFProtocol",
    "RandomSource",
    "AlgorithmType",
    "DigestKind",
    "algorithm_name",
    "digest_name",
    "parse_algorithm",
    "parse_digest",
]
