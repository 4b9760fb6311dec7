"""
Password verifier: salted PBKDF2-HMAC stored as
"algorithm$iterations$salt_hex$hash_hex".
"""

import hashlib
import hmac
import secrets

PASSWORD_HASH_ALGORITHM = "sha256"
PASSWORD_HASH_SEPARATOR = "$"
PASSWORD_SALT_BYTES = 16


class PasswordHasher:
    def __init__(self, iterations: int = 200_000):
        self._iterations = iterations

    def hash(self, plaintext: str) -> str:
        salt = secrets.token_bytes(PASSWORD_SALT_BYTES)
        derived = hashlib.pbkdf2_hmac(
            PASSWORD_HASH_ALGORITHM,
            plaintext.encode("utf-8"),
            salt,
            self._iterations,
        )
        return PASSWORD_HASH_SEPARATOR.join(
            [
                PASSWORD_HASH_ALGORITHM,
                str(self._iterations),
                salt.hex(),
                derived.hex(),
            ]
        )

    def verify(self, plaintext: str, stored: str) -> bool:
        try:
            algo, iterations_str, salt_hex, hash_hex = stored.split(
                PASSWORD_HASH_SEPARATOR
            )
            iterations = int(iterations_str)
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(hash_hex)
        except (AttributeError, ValueError):
            return False

        candidate = hashlib.pbkdf2_hmac(
            algo,
            plaintext.encode("utf-8"),
            salt,
            iterations,
        )
        return hmac.compare_digest(candidate, expected)
