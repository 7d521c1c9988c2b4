"""Owner password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of a password and recent releases
refuse longer input, so both hashing and checking cut the UTF-8 encoding to
that length.
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_secret(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True if *plain_password* matches the stored hash; a malformed hash never matches."""
    try:
        return bcrypt.checkpw(_secret(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
