"""
Character document store.

Each character row carries an opaque JSON document with the full gameplay
state, plus an integer ``version`` that is incremented on every write. Names
are stored and compared in lowercase.

Callers that need to change a document based on its current contents must use
:func:`atomic_update`. It reads the document and its version, applies a
transformation, and writes the result back only if nobody else wrote in the
meantime (``UPDATE ... WHERE name = ? AND version = ?``). A lost race is
retried with exponential backoff (via :func:`retry.api.retry_call`); a caller
that keeps losing gets a :class:`.ConcurrentUpdateConflict` rather than a
silently dropped update.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from flask import current_app
from pytz import UTC
from retry.api import retry_call
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..domain import Character
from ..exceptions import ConcurrentUpdateConflict, DuplicateKey, \
    NoSuchAccount, NoSuchCharacter, StoreFailure
from .database import transaction
from .database.models import DBAccount, DBCharacter

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
Transformation = Callable[[Document], Document]

MAX_ATTEMPTS = 5
BACKOFF = 0.05


def _to_domain(db_character: DBCharacter) -> Character:
    return Character(
        name=db_character.name,
        owner_account_id=db_character.account,
        document=db_character.data,
        version=db_character.version,
        created_at=db_character.created_at,
        updated_at=db_character.updated_at
    )


def find_character(name: str) -> Optional[Character]:
    """
    Retrieve a character by name (case-insensitive).

    Raises
    ------
    :class:`.StoreFailure`
        When there is a problem querying the database.

    """
    try:
        with transaction() as session:
            db_character = session.query(DBCharacter) \
                .filter(DBCharacter.name == name.lower()) \
                .first()
            if db_character is None:
                return None
            return _to_domain(db_character)
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not query database: {e}') from e


def load_document(name: str) -> Document:
    """
    Get the gameplay document of a character.

    Raises
    ------
    :class:`.NoSuchCharacter`
    :class:`.StoreFailure`

    """
    character = find_character(name)
    if character is None:
        raise NoSuchCharacter(f'No character named {name}')
    return character.document


def insert_character(name: str, owner_account_id: str,
                     document: Document) -> Character:
    """
    Create a new character owned by an existing account.

    Parameters
    ----------
    name : str
        Lowercased before it is stored.
    owner_account_id : str
        The account must already exist (or have been inserted earlier in the
        same :func:`.transaction`).
    document : dict

    Raises
    ------
    :class:`.NoSuchAccount`
        The owner account does not exist.
    :class:`.DuplicateKey`
        The name is already taken. Nothing is written.
    :class:`.StoreFailure`
        When there is some other problem talking to the database.

    """
    try:
        with transaction() as session:
            owner = session.query(DBAccount.id) \
                .filter(DBAccount.account == owner_account_id) \
                .first()
            if owner is None:
                raise NoSuchAccount(f'No account {owner_account_id}')
            db_character = DBCharacter(
                account=owner_account_id,
                name=name.lower(),
                data=document,
                version=1
            )
            session.add(db_character)
            session.flush()
            character = _to_domain(db_character)
    except IntegrityError as e:
        logger.debug('Character %s already exists', name.lower())
        raise DuplicateKey(f'Character {name.lower()} already exists') from e
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not create character: {e}') from e
    return character


def replace_document(name: str, document: Document) -> Character:
    """
    Overwrite the document of a character, whatever its current version.

    Use :func:`atomic_update` instead when the new document is derived from
    the old one.

    Raises
    ------
    :class:`.NoSuchCharacter`
        No row matched ``name``.
    :class:`.StoreFailure`

    """
    try:
        with transaction() as session:
            result = session.execute(
                update(DBCharacter)
                .where(DBCharacter.name == name.lower())
                .values(data=document, version=DBCharacter.version + 1,
                        updated_at=datetime.now(tz=UTC))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NoSuchCharacter(f'No character named {name}')
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not update character: {e}') from e
    character = find_character(name)
    if character is None:
        raise NoSuchCharacter(f'No character named {name}')
    return character


def list_characters(owner_account_id: str) -> List[str]:
    """
    Get the names of all characters owned by an account.

    Names are returned in creation order, although callers should not rely
    on it.

    Raises
    ------
    :class:`.StoreFailure`

    """
    try:
        with transaction() as session:
            rows = session.query(DBCharacter.name) \
                .filter(DBCharacter.account == owner_account_id) \
                .order_by(DBCharacter.id) \
                .all()
            return [row.name for row in rows]
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not query database: {e}') from e


class _LostRace(RuntimeError):
    """Another writer bumped the version between our read and our write."""


def _compare_and_swap(name: str, version: int, document: Document,
                      updated_at: datetime) -> bool:
    """Write ``document`` only if the row is still at ``version``."""
    try:
        with transaction() as session:
            result = session.execute(
                update(DBCharacter)
                .where(DBCharacter.name == name)
                .where(DBCharacter.version == version)
                .values(data=document, version=version + 1,
                        updated_at=updated_at)
                .execution_options(synchronize_session=False)
            )
            return bool(result.rowcount == 1)
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not update character: {e}') from e


def _read_transform_write(name: str, transform: Transformation) -> Character:
    current = find_character(name)
    if current is None:
        raise NoSuchCharacter(f'No character named {name}')
    document = transform(copy.deepcopy(current.document))
    written_at = datetime.now(tz=UTC)
    if not _compare_and_swap(name, current.version, document, written_at):
        logger.info('Lost update race on %s at version %i', name,
                    current.version)
        raise _LostRace(f'{name} changed since version {current.version}')
    return current._replace(document=document, version=current.version + 1,
                            updated_at=written_at)


def atomic_update(name: str, transform: Transformation,
                  max_attempts: Optional[int] = None,
                  backoff: Optional[float] = None) -> Character:
    """
    Apply ``transform`` to a character document without losing updates.

    Parameters
    ----------
    name : str
        Character name (case-insensitive).
    transform : callable
        Receives a private copy of the current document and returns the new
        document. It may be called more than once, so it must not have side
        effects.
    max_attempts : int
        Read-transform-write cycles to try before giving up. Defaults to
        the ``UPDATE_MAX_ATTEMPTS`` config value.
    backoff : float
        Seconds to wait after the first lost race; doubled (with jitter)
        after each subsequent one. Defaults to ``UPDATE_BACKOFF``.

    Returns
    -------
    :class:`.Character`
        The character as written.

    Raises
    ------
    :class:`.NoSuchCharacter`
    :class:`.ConcurrentUpdateConflict`
        Every attempt lost the race against another writer.
    :class:`.StoreFailure`

    """
    if max_attempts is None:
        max_attempts = int(current_app.config.get('UPDATE_MAX_ATTEMPTS',
                                                  MAX_ATTEMPTS))
    if backoff is None:
        backoff = float(current_app.config.get('UPDATE_BACKOFF', BACKOFF))
    name = name.lower()
    try:
        return retry_call(_read_transform_write, fargs=[name, transform],
                          exceptions=_LostRace, tries=max_attempts,
                          delay=backoff, backoff=2, jitter=(0, backoff),
                          logger=logger)
    except _LostRace as e:
        logger.error('Giving up on update to %s after %i attempts',
                     name, max_attempts)
        raise ConcurrentUpdateConflict(
            f'Could not update {name} after {max_attempts} attempts'
        ) from e
