"""Security helpers."""

import hashlib
import secrets
from secrets import token_urlsafe

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

password_hasher = PasswordHasher()

SLUG_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_session_token() -> str:
    """Generate an opaque session token.

    Returns
    -------
    str
        New random token suitable for a cookie value.
    """
    return f"sess_{token_urlsafe(32)}"


def generate_slug(length: int = 8) -> str:
    """Generate a public tracking-link slug.

    Parameters
    ----------
    length : int, default=8
        Number of characters.

    Returns
    -------
    str
        Lower-case alphanumeric slug.
    """
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def lookup_hash(token: str) -> str:
    """Compute a fast, non-secret hash for DB lookup.

    Parameters
    ----------
    token : str
        Raw token.

    Returns
    -------
    str
        Hex-encoded SHA-256 digest.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def hash_secret(secret: str) -> str:
    """Hash a password or token for storage.

    Parameters
    ----------
    secret : str
        Raw value.

    Returns
    -------
    str
        Argon2 hash.
    """
    return password_hasher.hash(secret)


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Verify a password or token against its hash.

    Parameters
    ----------
    secret : str
        Raw value.
    secret_hash : str
        Stored argon2 hash.

    Returns
    -------
    bool
        Whether the value matches.
    """
    try:
        return password_hasher.verify(secret_hash, secret)
    except (VerificationError, InvalidHashError):
        return False
