"""
Password hashing for local accounts.

bcrypt with a per-hash random salt. bcrypt only looks at the first 72
bytes of its input, so longer passwords are rejected by the service
before they get here.
"""

from typing import Optional

import bcrypt

BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a plaintext password and return the encoded bcrypt string."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False for accounts without a password (federated-only users)
    and for hashes bcrypt cannot parse.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
