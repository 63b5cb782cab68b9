"""KDF adapters: Argon2id (memory-hard) and PBKDF2-HMAC (iterative)."""

from passkdf.algorithms.argon2id import Argon2idKDF
from passkdf.algorithms.pbkdf2 import Pbkdf2KDF

__all__ = ["Argon2idKDF", "Pbkdf2KDF"]
