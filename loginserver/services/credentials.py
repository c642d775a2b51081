"""
Credential store: account identifier, password hash, primary character.

Rows are only ever inserted. There is no update or delete here; removing an
account is a data-retention job that happens directly in the database (and
cascades to the account's characters).
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..domain import Account
from ..exceptions import DuplicateKey, StoreFailure
from .database import transaction
from .database.models import DBAccount

logger = logging.getLogger(__name__)


def _to_domain(db_account: DBAccount) -> Account:
    return Account(
        account_id=db_account.account,
        password_hash=db_account.hash,
        primary_character_name=db_account.definition,
        created_at=db_account.created_at
    )


def find_account(account_id: str) -> Optional[Account]:
    """
    Retrieve an account by its identifier.

    Parameters
    ----------
    account_id : str
        Compared exactly; identifiers are case-sensitive.

    Returns
    -------
    :class:`.Account` or None

    Raises
    ------
    :class:`.StoreFailure`
        When there is a problem querying the database.

    """
    try:
        with transaction() as session:
            db_account = session.query(DBAccount) \
                .filter(DBAccount.account == account_id) \
                .first()
            if db_account is None:
                return None
            return _to_domain(db_account)
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not query database: {e}') from e


def insert_account(account_id: str, password_hash: str,
                   primary_character_name: str) -> Account:
    """
    Create a new account row.

    May be called inside an enclosing :func:`.transaction`, in which case the
    row is only committed together with the rest of that unit of work.

    Raises
    ------
    :class:`.DuplicateKey`
        An account with ``account_id`` already exists. Nothing is written.
    :class:`.StoreFailure`
        When there is some other problem talking to the database.

    """
    try:
        with transaction() as session:
            db_account = DBAccount(
                account=account_id,
                hash=password_hash,
                definition=primary_character_name
            )
            session.add(db_account)
            session.flush()
            account = _to_domain(db_account)
    except IntegrityError as e:
        logger.debug('Account %s already exists', account_id)
        raise DuplicateKey(f'Account {account_id} already exists') from e
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not create account: {e}') from e
    return account
