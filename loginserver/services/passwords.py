"""
Password hashing with bcrypt.

bcrypt is deliberately slow, so every request that checks a password spends
real CPU time. :class:`PasswordHasher` caps how many hashes run at once;
requests beyond the cap wait for a free slot instead of piling onto the
worker threads.
"""

import logging
import secrets
import threading

import bcrypt
from flask import Flask, current_app

from ..exceptions import HashingFailure

logger = logging.getLogger(__name__)

SALT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72
"""bcrypt only looks at the first 72 bytes of its input."""


def is_acceptable(password: str) -> bool:
    """Determine whether bcrypt can hash ``password`` without truncating."""
    return 0 < len(password.encode('utf-8')) <= MAX_PASSWORD_BYTES


class PasswordHasher(object):
    """Hashes and verifies passwords; safe to share between threads."""

    def __init__(self, rounds: int = SALT_ROUNDS,
                 concurrency: int = 4) -> None:
        """Set the work factor and the number of concurrent hashes."""
        self._rounds = rounds
        self._slots = threading.BoundedSemaphore(concurrency)
        # Checked against when the account does not exist, so that a missing
        # account costs as much as a wrong password.
        self._decoy = self.hash(secrets.token_hex(16))

    @property
    def rounds(self) -> int:
        """The bcrypt work factor."""
        return self._rounds

    def hash(self, password: str) -> str:
        """
        Generate a salted bcrypt hash of a password.

        Raises
        ------
        :class:`.HashingFailure`
            bcrypt could not produce a hash (e.g. the password is too long,
            or the process is out of memory).

        """
        with self._slots:
            try:
                salt = bcrypt.gensalt(rounds=self._rounds)
                hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
            except (ValueError, MemoryError) as e:
                raise HashingFailure(f'Could not hash password: {e}') from e
        return hashed.decode('ascii')

    def verify(self, password: str, hashed: str) -> bool:
        """
        Check a password against a bcrypt hash.

        Returns ``False`` when the password does not match. A password that
        bcrypt would truncate never matches.

        Raises
        ------
        :class:`.HashingFailure`
            The stored hash is not a valid bcrypt hash, or bcrypt failed.

        """
        if not is_acceptable(password):
            return False
        with self._slots:
            try:
                return bool(bcrypt.checkpw(password.encode('utf-8'),
                                           hashed.encode('ascii')))
            except (ValueError, MemoryError) as e:
                logger.error('Could not check password against stored hash')
                raise HashingFailure(f'Could not check password: {e}') from e

    def spend(self, password: str) -> None:
        """Verify against a throwaway hash, and discard the result."""
        self.verify(password, self._decoy)


def init_app(app: Flask) -> None:
    """Build the application's :class:`PasswordHasher` from its config."""
    app.config.setdefault('BCRYPT_ROUNDS', SALT_ROUNDS)
    app.config.setdefault('HASHING_CONCURRENCY', 4)
    app.extensions['passwords'] = PasswordHasher(
        rounds=int(app.config['BCRYPT_ROUNDS']),
        concurrency=int(app.config['HASHING_CONCURRENCY'])
    )


def current_hasher() -> PasswordHasher:
    """Get the :class:`PasswordHasher` of the current application."""
    hasher: PasswordHasher = current_app.extensions['passwords']
    return hasher
