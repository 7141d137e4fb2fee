"""Password hashing with the ``bcrypt`` library (>=4.0).

Hashes are stored as utf-8 strings in users.password_hash.
"""

import bcrypt

_ROUNDS = 12


def hash_password(plain: str) -> str:
    hashed: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a password; a malformed stored hash never verifies."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
