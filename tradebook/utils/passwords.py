"""
tradebook/utils/passwords.py

bcrypt hashing primitive used by the session layer.

bcrypt only looks at the first 72 bytes of its input. Rather than silently
truncating (two different long passwords would then collide) we reject
anything longer, measured in UTF-8 bytes, not characters.
"""

import logging

import bcrypt

from tradebook.config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    Salted one-way hash + verify.

    The cost factor is fixed for the lifetime of the process. Existing hashes
    made with another cost still verify, since bcrypt stores the cost inside
    the digest.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds
        # Throwaway digest at the configured cost, for equal-time misses.
        # Built here so no sign-in ever pays for it.
        self.dummy_hash = self.hash("not-a-real-password")

    @staticmethod
    def _encode(password: str) -> bytes:
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password exceeds bcrypt's limit of {BCRYPT_MAX_BYTES} bytes")
        return encoded

    def hash(self, password: str) -> str:
        """Return a fresh salted bcrypt digest for password."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Constant-time check of password against a stored digest.
        Over-long passwords and corrupt digests simply fail to verify.
        """
        try:
            candidate = self._encode(password)
        except ValueError:
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt digest")
            return False
