"""Password hashing.

Digests are bcrypt strings (``$2b$<cost>$<salt><hash>``), so the salt and
cost travel with the stored value and ``verify_password`` needs nothing
else.  The raw password is never stored or logged.
"""

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, digest: str) -> bool:
    """Check ``password`` against a stored digest in constant time.

    A malformed or empty digest never verifies.
    """
    if not password or not digest:
        return False
    try:
        return bcrypt.checkpw(_encode(password), digest.encode("utf-8"))
    except ValueError:
        return False
