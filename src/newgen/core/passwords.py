"""Password hashing behind a small pluggable interface.

The API only needs two operations: hash(secret) -> digest and
verify(secret, digest) -> bool. The default scheme is passlib's
pbkdf2_sha256; a plaintext scheme exists for databases that still hold
legacy unhashed rows.
"""

from __future__ import annotations

import hmac
from typing import Protocol

from passlib.hash import pbkdf2_sha256

SUPPORTED_SCHEMES = ("pbkdf2_sha256", "plaintext")


class PasswordHasher(Protocol):
    """Interface for password storage schemes."""

    def hash(self, secret: str) -> str: ...

    def verify(self, secret: str, digest: str) -> bool: ...


class Pbkdf2Hasher:
    """Salted PBKDF2-SHA256 digests via passlib."""

    def hash(self, secret: str) -> str:
        return pbkdf2_sha256.hash(secret)

    def verify(self, secret: str, digest: str) -> bool:
        # Malformed digests (e.g. legacy plaintext rows) never match
        try:
            return pbkdf2_sha256.verify(secret, digest)
        except ValueError:
            return False


class PlaintextHasher:
    """Stores secrets as given. Only for legacy data."""

    def hash(self, secret: str) -> str:
        return secret

    def verify(self, secret: str, digest: str) -> bool:
        return hmac.compare_digest(secret.encode(), digest.encode())


def get_hasher(scheme: str) -> PasswordHasher:
    """Build the hasher for a configured scheme name.

    Raises:
        ValueError: If the scheme is not supported
    """
    if scheme == "pbkdf2_sha256":
        return Pbkdf2Hasher()
    if scheme == "plaintext":
        return PlaintextHasher()
    raise ValueError(
        f"Unsupported password scheme '{scheme}'. Expected one of: {', '.join(SUPPORTED_SCHEMES)}"
    )
