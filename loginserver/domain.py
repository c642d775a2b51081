"""Defines the core data structures for the login server."""

from typing import Any, Dict, NamedTuple, Optional
from datetime import datetime

MALE = 'male'
FEMALE = 'female'
SEXES = (MALE, FEMALE)
"""Recognized values of the ``sex`` selector for new characters."""


class Account(NamedTuple):
    """A login identity with a single password hash."""

    account_id: str
    """Externally supplied, immutable identifier."""

    password_hash: str
    """Output of :class:`.PasswordHasher`; never the clear password."""

    primary_character_name: str
    """Character created with the account; used for single-token login."""

    created_at: Optional[datetime] = None


class Character(NamedTuple):
    """A named gameplay entity owned by exactly one :class:`.Account`."""

    name: str
    """Unique, lowercase name."""

    owner_account_id: str
    document: Dict[str, Any]
    """Full gameplay state. Opaque to the login server."""

    version: int = 1
    """Incremented on every write; used for compare-and-swap updates."""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Token(NamedTuple):
    """Short-lived credential handed to the game server."""

    name: str
    """Name of the character that the bearer may log in as."""

    expire: int
    """Absolute expiry, in milliseconds since the epoch."""

    token: str
    """Hex-encoded HMAC-SHA256 over ``name`` and ``expire``."""

    def to_dict(self) -> Dict[str, Any]:
        """Generate the wire representation of the token."""
        return {'name': self.name, 'expire': self.expire, 'token': self.token}
