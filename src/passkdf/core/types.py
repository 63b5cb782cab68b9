# -*- coding: utf-8 -*-
"""
RU: Перечисления алгоритмов KDF и дайджестов PBKDF2 с каноническими токенами.

EN: KDF algorithm and PBKDF2 digest enumerations with their canonical
lowercase tokens. Lookups in both directions are total: out-of-range values
render as ``"unknown"`` and unknown tokens parse to ``UNKNOWN``.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Final, Sequence, Union


class AlgorithmType(IntEnum):
    """Top-level key derivation algorithm; also the leading token of an encoding."""

    UNKNOWN = 0
    PBKDF2 = 1
    ARGON2ID = 2

    def __str__(self) -> str:
        return algorithm_name(self)


class DigestKind(IntEnum):
    """Underlying HMAC digest of PBKDF2."""

    UNKNOWN = 0
    SHA256 = 1
    SHA512 = 2
    SHA3_256 = 3
    SHA3_384 = 4
    SHA3_512 = 5

    def __str__(self) -> str:
        return digest_name(self)


_ALGORITHM_NAMES: Final[tuple[str, ...]] = ("unknown", "pbkdf2", "argon2id")

_DIGEST_NAMES: Final[tuple[str, ...]] = (
    "unknown",
    "sha-256",
    "sha-512",
    "sha3-256",
    "sha3-384",
    "sha3-512",
)


def _lookup_name(table: Sequence[str], value: Union[int, IntEnum]) -> str:
    index = int(value)
    if index < 0 or index >= len(table):
        index = 0
    return table[index]


def _lookup_index(table: Sequence[str], token: str) -> int:
    for index, name in enumerate(table):
        if name == token:
            return index
    return 0


def algorithm_name(kind: Union[int, AlgorithmType]) -> str:
    """
    Canonical token of an algorithm type.

    Example:
        >>> algorithm_name(AlgorithmType.ARGON2ID)
        'argon2id'
        >>> algorithm_name(42)
        'unknown'
    """
    return _lookup_name(_ALGORITHM_NAMES, kind)


def parse_algorithm(token: str) -> AlgorithmType:
    """Exact, case-sensitive token lookup; unknown tokens give ``UNKNOWN``."""
    return AlgorithmType(_lookup_index(_ALGORITHM_NAMES, token))


def digest_name(kind: Union[int, DigestKind]) -> str:
    """
    Canonical token of a PBKDF2 digest.

    Example:
        >>> digest_name(DigestKind.SHA3_384)
        'sha3-384'
    """
    return _lookup_name(_DIGEST_NAMES, kind)


def parse_digest(token: str) -> DigestKind:
    """Exact, case-sensitive token lookup; unknown tokens give ``UNKNOWN``."""
    return DigestKind(_lookup_index(_DIGEST_NAMES, token))


__all__ = [
    "AlgorithmType",
    "DigestKind",
    "algorithm_name",
    "parse_algorithm",
    "digest_name",
    "parse_digest",
]
