# proshop/security.py
import hashlib
import hmac
import os

_ITERATIONS = 100_000
_ALGO = "sha256"


def hash_password(password: str, salt: bytes = None) -> str:
    """Salted PBKDF2 hash, encoded as ``pbkdf2_sha256$iterations$salt$digest``."""
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac(_ALGO, password.encode(), salt, _ITERATIONS)
    return f"pbkdf2_{_ALGO}${_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations, salt_hex, digest_hex = password_hash.split("$")
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac(_ALGO, password.encode(), salt, rounds)
    return hmac.compare_digest(digest.hex(), digest_hex)
