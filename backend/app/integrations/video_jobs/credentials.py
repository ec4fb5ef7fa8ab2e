"""Password hashing shared by the proxy client and the trusted backend."""

import hashlib
import hmac


def hash_password(password: str) -> str:
    """Return the SHA-256 hex digest sent in place of the plain password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def password_hash_matches(candidate: str | None, expected: str) -> bool:
    """Compare a caller-supplied hash against the expected one in constant time."""
    if not candidate:
        return False
    return hmac.compare_digest(candidate.lower().encode("utf-8"), expected.lower().encode("utf-8"))
