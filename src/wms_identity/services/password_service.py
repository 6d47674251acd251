"""bcrypt hashing for the password history.

Credentials arrive in plaintext. Once the history policy accepts one, only
its bcrypt hash is kept. bcrypt reads at most 72 bytes, so every password is
first reduced to the base64 form of its SHA-256 digest (44 bytes); long
passwords are accepted and differ beyond their 72nd byte.
"""

import base64
import hashlib

import bcrypt

from wms_identity.domain.user.exceptions import InvalidArgumentError

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
BCRYPT_HASH_LENGTH = 60


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class PasswordHashingService:
    """Hash passwords and check candidates against stored hashes.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("pw1")
    >>> service.verify("pw1", stored)
    True
    >>> service.verify("pw2", stored)
    False
    """

    def __init__(self, rounds: int = 12):
        """
        Parameters
        ----------
        rounds
            bcrypt work factor (log2 of the iterations). Tests use the
            minimum of 4.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash of ``password``.

        Raises
        ------
        InvalidArgumentError
            For an empty password.
        """
        if not password:
            msg = "Password cannot be empty"
            raise InvalidArgumentError(msg)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")

    def verify(self, password: str, stored_hash: str) -> bool:
        """True if ``password`` hashes to ``stored_hash``; False for malformed hashes."""
        try:
            return bcrypt.checkpw(_prehash(password), stored_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @staticmethod
    def is_hash(value: str) -> bool:
        """Check whether a stored value is a bcrypt hash."""
        return value.startswith(BCRYPT_PREFIXES) and len(value) == BCRYPT_HASH_LENGTH
