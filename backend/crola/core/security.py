"""
Password hashing for local accounts.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>`` with the
salt and digest base64 encoded, so the iteration count can be raised later
without invalidating existing accounts.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from typing import NamedTuple

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 600_000
SALT_BYTES = 16


class PasswordHash(NamedTuple):
    iterations: int
    salt: bytes
    digest: bytes

    def encode(self) -> str:
        salt = base64.b64encode(self.salt).decode("ascii")
        digest = base64.b64encode(self.digest).decode("ascii")
        return "$".join([ALGORITHM, str(self.iterations), salt, digest])

    @classmethod
    def decode(cls, stored: str) -> PasswordHash:
        """
        Parse a stored hash.

        Raises:
            ValueError: If the value is not a PBKDF2-SHA256 hash in the stored format
        """
        algorithm, sep, rest = stored.partition("$")
        if not sep or algorithm != ALGORITHM:
            raise ValueError("Unsupported password hash")
        iterations, salt, digest = rest.split("$")
        return cls(
            iterations=int(iterations),
            salt=base64.b64decode(salt, validate=True),
            digest=base64.b64decode(digest, validate=True),
        )


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash a password with a fresh random salt."""
    salt = secrets.token_bytes(SALT_BYTES)
    return PasswordHash(iterations, salt, _derive(password, salt, iterations)).encode()


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match."""
    try:
        parsed = PasswordHash.decode(stored_hash)
    except (ValueError, TypeError):
        return False
    if parsed.iterations < 1 or not parsed.salt:
        return False
    return hmac.compare_digest(_derive(password, parsed.salt, parsed.iterations), parsed.digest)
