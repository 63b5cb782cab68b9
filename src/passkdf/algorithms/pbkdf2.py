"""
PBKDF2-HMAC: iterative password KDF with a selectable digest.

Encoded form (no primitive version field)::

    $pbkdf2$t=300000,s=sha3-384$<salt>$<hash>

Поддерживаемые дайджесты: sha-256, sha-512, sha3-256, sha3-384 (default),
sha3-512. Неизвестный токен дайджеста при разборе не является ошибкой:
экземпляр создаётся с ``DigestKind.UNKNOWN`` и никогда не проходит verify().

References:
- NIST SP 800-132: Recommendation for Password-Based Key Derivation
- RFC 8018: PKCS #5 v2.1
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Final, Optional, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from passkdf.config import PBKDF2_DEFAULT_SALT_LENGTH, UINT32_MAX, Pbkdf2Config
from passkdf.core.exceptions import (
    InvalidBase64Error,
    KeyDerivationError,
    MalformedEncodingError,
    UnsupportedAlgorithmError,
)
from passkdf.core.protocols import BytesLike, RandomSource, SecretInput
from passkdf.core.types import (
    AlgorithmType,
    DigestKind,
    algorithm_name,
    digest_name,
    parse_digest,
)
from passkdf.utils import (
    b64_decode_raw,
    b64_encode_raw,
    coerce_input,
    generate_random_bytes,
    secure_compare,
)

_LOGGER: Final = logging.getLogger(__name__)

ALGORITHM_ID: Final[str] = algorithm_name(AlgorithmType.PBKDF2)
PREFIX: Final[str] = f"${ALGORITHM_ID}$"

_FIELD_COUNT: Final[int] = 5
_PARAMS_RE: Final = re.compile(r"t=([0-9]+),s=(\S+)")

DIGESTS: Final[dict[DigestKind, Type[hashes.HashAlgorithm]]] = {
    DigestKind.SHA256: hashes.SHA256,
    DigestKind.SHA512: hashes.SHA512,
    DigestKind.SHA3_256: hashes.SHA3_256,
    DigestKind.SHA3_384: hashes.SHA3_384,
    DigestKind.SHA3_512: hashes.SHA3_512,
}


class Pbkdf2KDF:
    """
    PBKDF2-HMAC key derivation with lazy salt and string encoding.

    Default Parameters:
    - iterations: 300,000
    - digest: SHA3-384
    - salt: 16 bytes (random, generated on first derivation)
    - key: 32 bytes

    Args:
        config: parameters; zero fields and an unknown digest are replaced
            by defaults.
        random_source: ``n -> bytes`` secure random capability.
    """

    __slots__ = ("_config", "_hash", "_hash_algorithm", "_random_source")

    algorithm = AlgorithmType.PBKDF2

    def __init__(
        self,
        config: Optional[Pbkdf2Config] = None,
        *,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        self._config = (config or Pbkdf2Config()).with_defaults()
        self._hash = b""
        self._hash_algorithm = DIGESTS.get(self._config.digest)
        self._random_source: RandomSource = random_source or generate_random_bytes

    # --- state ---

    @property
    def config(self) -> Pbkdf2Config:
        """Copy of the effective configuration."""
        return replace(self._config)

    @property
    def digest(self) -> DigestKind:
        return self._config.digest

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
        if self._hash_algorithm is None:
            raise UnsupportedAlgorithmError(
                ALGORITHM_ID, f"unknown digest '{digest_name(self._config.digest)}'"
            )
        cfg = self._config
        try:
            kdf = PBKDF2HMAC(
                algorithm=self._hash_algorithm(),
                length=cfg.key_length,
                salt=cfg.salt,
                iterations=cfg.iterations,
            )
            return kdf.derive(secret)
        except Exception as exc:
            _LOGGER.error("PBKDF2 derivation failed: %s", exc.__class__.__name__)
            raise KeyDerivationError(
                "PBKDF2 derivation failed", algorithm=ALGORITHM_ID
            ) from exc

    def generate(self, secret: SecretInput) -> None:
        data = coerce_input(secret)
        if not self._config.salt:
            self._config.salt = self._random_source(self._config.salt_length)
            self._config.salt_length = len(self._config.salt)

        self._hash = self._derive(data)
        _LOGGER.debug(
            "PBKDF2: derived %d-byte key (iterations=%d, digest=%s)",
            self._config.key_length,
            self._config.iterations,
            digest_name(self._config.digest),
        )

    def verify(self, secret: SecretInput) -> bool:
        data = coerce_input(secret)
        if not self._hash:
            _LOGGER.debug("PBKDF2: verify called before a hash exists")
            return False
        if self._hash_algorithm is None:
            _LOGGER.warning("PBKDF2: cannot verify with unknown digest")
            return False
        return secure_compare(self._hash, self._derive(data))

    def key(self) -> bytes:
        return self._hash

    # --- encoding ---

    def to_string(self) -> str:
        cfg = self._config
        return (
            f"{PREFIX}t={cfg.iterations},s={digest_name(cfg.digest)}"
            f"${b64_encode_raw(cfg.salt)}${b64_encode_raw(self._hash)}"
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        cfg = self._config
        return (
            f"{self.__class__.__name__}(iterations={cfg.iterations}, "
            f"digest={digest_name(cfg.digest)}, key_length={cfg.key_length}, "
            f"complete={self.is_complete})"
        )

    @classmethod
    def decode(
        cls,
        encoded: str,
        *,
        random_source: Optional[RandomSource] = None,
    ) -> "Pbkdf2KDF":
        """
        Rebuild a complete instance from its string encoding.

        Raises:
            MalformedEncodingError: wrong field count or parameter syntax.
            InvalidBase64Error: salt or hash is not strict unpadded base64.
        """
        fields = encoded.split("$")
        if len(fields) != _FIELD_COUNT or fields[0] or fields[1] != ALGORITHM_ID:
            raise MalformedEncodingError(
                "invalid encoded format",
                algorithm=ALGORITHM_ID,
                context={"fields": len(fields)},
            )

        match = _PARAMS_RE.fullmatch(fields[2])
        if match is None:
            raise MalformedEncodingError(
                "cannot scan parameter field", algorithm=ALGORITHM_ID
            )
        iterations = int(match.group(1))
        if iterations == 0 or iterations > UINT32_MAX:
            raise MalformedEncodingError(
                "iterations out of range", algorithm=ALGORITHM_ID
            )
        digest = parse_digest(match.group(2))
        if digest is DigestKind.UNKNOWN:
            _LOGGER.warning("PBKDF2: decoded unknown digest token")

        try:
            salt = b64_decode_raw(fields[3])
        except ValueError as exc:
            raise InvalidBase64Error(ALGORITHM_ID, "salt") from exc
        try:
            derived = b64_decode_raw(fields[4])
        except ValueError as exc:
            raise InvalidBase64Error(ALGORITHM_ID, "hash") from exc

        kdf = cls.__new__(cls)
        kdf._config = Pbkdf2Config(
            iterations=iterations,
            salt_length=len(salt) or PBKDF2_DEFAULT_SALT_LENGTH,
            key_length=len(derived),
            digest=digest,
            salt=salt,
        )
        kdf._hash = derived
        kdf._hash_algorithm = DIGESTS.get(digest)
        kdf._random_source = random_source or generate_random_bytes

        _LOGGER.debug(
            "PBKDF2: decoded (iterations=%d, digest=%s)", iterations, digest_name(digest)
        )
        return kdf


__all__ = ["Pbkdf2KDF", "DIGESTS", "ALGORITHM_ID", "PREFIX"]
