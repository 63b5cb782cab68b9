# -*- coding: utf-8 -*-
"""
Тесты фабрики и диспетчера KDF: new(), parse(), identify(), verify(),
needs_rehash(), а также сквозные сценарии с параметрами по умолчанию.
"""
from __future__ import annotations

import logging
import re

import pytest

from passkdf import kdf as K
from passkdf.algorithms.argon2id import Argon2idKDF
from passkdf.algorithms.pbkdf2 import Pbkdf2KDF
from passkdf.config import Argon2idConfig, Config, Pbkdf2Config
from passkdf.core.exceptions import (
    IncompatibleVersionError,
    InvalidParameterError,
    MalformedEncodingError,
    UnrecognizedEncodingError,
    UnsupportedAlgorithmError,
)
from passkdf.core.types import AlgorithmType, DigestKind

SALT16 = "A" * 22
HASH32 = "A" * 43

ARGON2ID_DEFAULT = f"$argon2id$v=19$m=65536,t=3,p=4${SALT16}${HASH32}"
PBKDF2_DEFAULT = f"$pbkdf2$t=300000,s=sha3-384${SALT16}${HASH32}"


@pytest.fixture
def fast_argon2id() -> Argon2idConfig:
    return Argon2idConfig(memory_cost=1024, time_cost=1, parallelism=1)


@pytest.fixture
def fast_pbkdf2() -> Pbkdf2Config:
    return Pbkdf2Config(iterations=1000)


# ---------------------------------------------------------------------------
# new()
# ---------------------------------------------------------------------------


def test_new_dispatches_by_type(
    fast_argon2id: Argon2idConfig, fast_pbkdf2: Pbkdf2Config
) -> None:
    assert isinstance(K.new(AlgorithmType.ARGON2ID, fast_argon2id), Argon2idKDF)
    assert isinstance(K.new(AlgorithmType.PBKDF2, fast_pbkdf2), Pbkdf2KDF)


def test_new_with_aggregate_config(fast_pbkdf2: Pbkdf2Config) -> None:
    cfg = Config(pbkdf2=fast_pbkdf2)
    kdf = K.new(AlgorithmType.PBKDF2, cfg)
    assert isinstance(kdf, Pbkdf2KDF)
    assert kdf.config.iterations == 1000
    assert kdf.digest is DigestKind.SHA3_384


def test_new_without_config_uses_defaults() -> None:
    kdf = K.new(AlgorithmType.ARGON2ID)
    assert isinstance(kdf, Argon2idKDF)
    assert kdf.config.memory_cost == 65536
    assert kdf.key() == b""


@pytest.mark.parametrize("kdf_type", [AlgorithmType.UNKNOWN, 99, "argon2id", [2]])
def test_new_unknown_type(kdf_type: AlgorithmType) -> None:
    with pytest.raises(UnsupportedAlgorithmError) as exc_info:
        K.new(kdf_type)
    assert exc_info.value.reason == "unknown kdf type given"


def test_new_mismatched_config() -> None:
    with pytest.raises(InvalidParameterError) as exc_info:
        K.new(AlgorithmType.ARGON2ID, Pbkdf2Config())
    assert exc_info.value.parameter == "config"


def test_new_passes_random_source(fast_pbkdf2: Pbkdf2Config) -> None:
    kdf = K.new(AlgorithmType.PBKDF2, fast_pbkdf2, random_source=lambda n: b"\x01" * n)
    kdf.generate(b"pw")
    assert kdf.to_string().split("$")[3] == "AQEBAQEBAQEBAQEBAQEBAQ"


# ---------------------------------------------------------------------------
# identify() / parse() / verify()
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "encoded, expected",
    [
        (ARGON2ID_DEFAULT, AlgorithmType.ARGON2ID),
        (PBKDF2_DEFAULT, AlgorithmType.PBKDF2),
        ("$ARGON2ID$v=19", AlgorithmType.UNKNOWN),
        ("$argon2i$v=19", AlgorithmType.UNKNOWN),
        ("", AlgorithmType.UNKNOWN),
    ],
)
def test_identify(encoded: str, expected: AlgorithmType) -> None:
    assert K.identify(encoded) is expected


def test_parse_dispatches_by_prefix() -> None:
    assert isinstance(K.parse(ARGON2ID_DEFAULT), Argon2idKDF)
    assert isinstance(K.parse(PBKDF2_DEFAULT), Pbkdf2KDF)


@pytest.mark.parametrize(
    "encoded",
    ["", "hello", "$ARGON2ID$v=19$m=1,t=1,p=1$AAAA$AAAA", "$scrypt$ln=16$AAAA$AAAA"],
)
def test_parse_unrecognized(encoded: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="passkdf.kdf"):
        with pytest.raises(UnrecognizedEncodingError):
            K.parse(encoded)
    assert any("unknown format" in r.getMessage() for r in caplog.records)


def test_parse_propagates_decoder_errors() -> None:
    with pytest.raises(IncompatibleVersionError):
        K.parse(ARGON2ID_DEFAULT.replace("v=19", "v=16"))
    with pytest.raises(MalformedEncodingError):
        K.parse("$pbkdf2$garbage")


def test_round_trip_through_factory(
    fast_argon2id: Argon2idConfig, fast_pbkdf2: Pbkdf2Config
) -> None:
    for kdf_type, cfg in (
        (AlgorithmType.ARGON2ID, fast_argon2id),
        (AlgorithmType.PBKDF2, fast_pbkdf2),
    ):
        kdf = K.new(kdf_type, cfg)
        kdf.generate("correct horse")
        stored = kdf.to_string()

        assert K.identify(stored) is kdf_type
        assert K.verify(stored, "correct horse") is True
        assert K.verify(stored, "battery staple") is False


# ---------------------------------------------------------------------------
# needs_rehash()
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "encoded, kdf_type, expected",
    [
        (ARGON2ID_DEFAULT, AlgorithmType.ARGON2ID, False),
        (ARGON2ID_DEFAULT.replace("m=65536", "m=1024"), AlgorithmType.ARGON2ID, True),
        (ARGON2ID_DEFAULT.replace("t=3", "t=5"), AlgorithmType.ARGON2ID, False),
        (ARGON2ID_DEFAULT.replace("p=4", "p=1"), AlgorithmType.ARGON2ID, True),
        (ARGON2ID_DEFAULT.replace(SALT16, "A" * 11), AlgorithmType.ARGON2ID, True),
        (ARGON2ID_DEFAULT, AlgorithmType.PBKDF2, True),
        (PBKDF2_DEFAULT, AlgorithmType.PBKDF2, False),
        (PBKDF2_DEFAULT.replace("t=300000", "t=1000"), AlgorithmType.PBKDF2, True),
        (PBKDF2_DEFAULT.replace("sha3-384", "sha-256"), AlgorithmType.PBKDF2, True),
        (PBKDF2_DEFAULT.replace("sha3-384", "md5"), AlgorithmType.PBKDF2, True),
        (PBKDF2_DEFAULT, AlgorithmType.ARGON2ID, True),
        ("not an encoding", AlgorithmType.ARGON2ID, True),
        (ARGON2ID_DEFAULT.replace("v=19", "v=16"), AlgorithmType.ARGON2ID, True),
    ],
)
def test_needs_rehash_default_policy(
    encoded: str, kdf_type: AlgorithmType, expected: bool
) -> None:
    assert K.needs_rehash(encoded, kdf_type) is expected


def test_needs_rehash_custom_policy() -> None:
    stronger = Argon2idConfig(memory_cost=131072)
    assert K.needs_rehash(ARGON2ID_DEFAULT, AlgorithmType.ARGON2ID, stronger) is True

    sha256_policy = Pbkdf2Config(digest=DigestKind.SHA256)
    encoded = PBKDF2_DEFAULT.replace("sha3-384", "sha-256")
    assert K.needs_rehash(encoded, AlgorithmType.PBKDF2, sha256_policy) is False


# ---------------------------------------------------------------------------
# Default-parameter scenarios
# ---------------------------------------------------------------------------


@pytest.mark.slow
def test_argon2id_default_scenario() -> None:
    kdf = K.new(AlgorithmType.ARGON2ID)
    kdf.generate("hello, world!")
    encoded = kdf.to_string()

    assert re.match(
        r"^\$argon2id\$v=19\$m=65536,t=3,p=4\$[A-Za-z0-9+/]{22}\$[A-Za-z0-9+/]{43}$",
        encoded,
    )
    parsed = K.parse(encoded)
    assert parsed.verify("hello, world!") is True
    assert parsed.verify("hello, world") is False


@pytest.mark.slow
def test_pbkdf2_default_scenario() -> None:
    cfg = Pbkdf2Config(iterations=1_000_000, salt_length=16, key_length=32)
    kdf = K.new(AlgorithmType.PBKDF2, cfg)
    kdf.generate("hello, world!")
    encoded = kdf.to_string()

    assert re.match(
        r"^\$pbkdf2\$t=1000000,s=sha3-384\$[A-Za-z0-9+/]{22}\$[A-Za-z0-9+/]{43}$",
        encoded,
    )
    parsed = K.parse(encoded)
    assert parsed.verify("hello, world!") is True
    assert parsed.verify("hello, world") is False
