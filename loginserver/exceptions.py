"""Exceptions."""


class InvalidInput(ValueError):
    """Request data is missing or malformed."""


class MissingFields(InvalidInput):
    """One or more required fields were not provided."""


class Conflict(RuntimeError):
    """The requested identifier is already in use."""


class AccountExists(Conflict):
    """An account with the requested identifier already exists."""


class NameTaken(Conflict):
    """A character with the requested name already exists."""


class DuplicateKey(RuntimeError):
    """A store rejected a row because a unique key is already taken."""


class AuthenticationFailed(RuntimeError):
    """Failed to authenticate account with provided credentials."""


class NoSuchAccount(AuthenticationFailed):
    """Account does not exist."""


class PasswordAuthenticationFailed(AuthenticationFailed):
    """Password is not correct."""


class CharacterNotOwned(RuntimeError):
    """The character does not belong to the authenticated account."""


class NoSuchCharacter(RuntimeError):
    """Character does not exist."""


class HashingFailure(RuntimeError):
    """Could not compute or check a password hash."""


class StoreFailure(IOError):
    """Could not read from or write to the database."""


class ConcurrentUpdateConflict(RuntimeError):
    """A document update kept losing the race against other writers."""


class InvalidToken(ValueError):
    """Token is malformed or cannot be trusted."""


class ExpiredToken(InvalidToken):
    """Token lifetime has elapsed."""


class BadSignature(InvalidToken):
    """Token signature does not match its contents."""
