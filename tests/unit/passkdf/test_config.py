# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from passkdf.config import (
    ARGON2ID_DEFAULT_KEY_LENGTH,
    ARGON2ID_DEFAULT_MEMORY_COST,
    ARGON2ID_DEFAULT_PARALLELISM,
    ARGON2ID_DEFAULT_SALT_LENGTH,
    ARGON2ID_DEFAULT_TIME_COST,
    PBKDF2_DEFAULT_ITERATIONS,
    Argon2idConfig,
    Argon2Profile,
    Config,
    Pbkdf2Config,
    default_argon2id_config,
    default_pbkdf2_config,
)
from passkdf.core.exceptions import InvalidParameterError
from passkdf.core.types import DigestKind


def test_argon2id_defaults_match_baseline() -> None:
    cfg = default_argon2id_config()
    assert cfg.memory_cost == 64 * 1024 == ARGON2ID_DEFAULT_MEMORY_COST
    assert cfg.time_cost == 3 == ARGON2ID_DEFAULT_TIME_COST
    assert cfg.parallelism == 4 == ARGON2ID_DEFAULT_PARALLELISM
    assert cfg.salt_length == 16 == ARGON2ID_DEFAULT_SALT_LENGTH
    assert cfg.key_length == 32 == ARGON2ID_DEFAULT_KEY_LENGTH
    assert cfg.salt == b""


def test_pbkdf2_defaults_match_baseline() -> None:
    cfg = default_pbkdf2_config()
    assert cfg.iterations == 300_000 == PBKDF2_DEFAULT_ITERATIONS
    assert cfg.salt_length == 16
    assert cfg.key_length == 32
    assert cfg.digest is DigestKind.SHA3_384


def test_argon2id_only_zero_fields_replaced() -> None:
    cfg = Argon2idConfig(memory_cost=128 * 1024, time_cost=0, parallelism=8).with_defaults()
    assert cfg.memory_cost == 128 * 1024
    assert cfg.time_cost == ARGON2ID_DEFAULT_TIME_COST
    assert cfg.parallelism == 8


def test_with_defaults_returns_copy() -> None:
    original = Argon2idConfig()
    defaulted = original.with_defaults()
    assert original.memory_cost == 0
    assert defaulted is not original


@pytest.mark.parametrize("cls", [Argon2idConfig, Pbkdf2Config])
def test_explicit_salt_sets_salt_length(cls: type) -> None:
    cfg = cls(salt_length=16, salt=b"0123456789").with_defaults()
    assert cfg.salt == b"0123456789"
    assert cfg.salt_length == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"memory_cost": -1},
        {"time_cost": 2**32},
        {"parallelism": 256},
        {"salt_length": -16},
        {"key_length": 1.5},
    ],
)
def test_argon2id_out_of_range_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError) as exc_info:
        Argon2idConfig(**kwargs).with_defaults()
    assert exc_info.value.parameter == next(iter(kwargs))


def test_argon2id_upper_bounds_accepted() -> None:
    cfg = Argon2idConfig(parallelism=255, time_cost=2**32 - 1).with_defaults()
    assert cfg.parallelism == 255
    assert cfg.time_cost == 2**32 - 1


@pytest.mark.parametrize("kwargs", [{"iterations": -5}, {"key_length": 2**32}])
def test_pbkdf2_out_of_range_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError):
        Pbkdf2Config(**kwargs).with_defaults()


@pytest.mark.parametrize(
    "digest, expected",
    [
        (DigestKind.UNKNOWN, DigestKind.SHA3_384),
        (DigestKind.SHA256, DigestKind.SHA256),
        (DigestKind.SHA3_512, DigestKind.SHA3_512),
        (2, DigestKind.SHA512),
        (9, DigestKind.SHA3_384),
    ],
)
def test_pbkdf2_digest_defaulting(digest: DigestKind, expected: DigestKind) -> None:
    cfg = Pbkdf2Config(digest=digest).with_defaults()
    assert cfg.digest is expected


def test_profiles() -> None:
    desktop = Argon2idConfig.from_profile(Argon2Profile.DESKTOP)
    server = Argon2idConfig.from_profile(Argon2Profile.SERVER)

    assert desktop == default_argon2id_config()
    assert (server.memory_cost, server.time_cost, server.parallelism) == (131072, 5, 8)


def test_profile_returns_independent_copy() -> None:
    cfg = Argon2idConfig.from_profile(Argon2Profile.DESKTOP)
    cfg.memory_cost = 8
    assert Argon2idConfig.from_profile(Argon2Profile.DESKTOP).memory_cost == 65536


def test_aggregate_config_independent_instances() -> None:
    a = Config()
    b = Config()
    a.argon2id.time_cost = 9
    assert b.argon2id.time_cost == 0
