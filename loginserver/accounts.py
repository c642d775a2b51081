"""
Account and character workflows.

Each workflow is a short, linear sequence of steps. The first step that fails
raises, and nothing after it runs; nothing is retried here. Credentials are
always checked by :func:`authenticate`: first that the account exists, then
that the password matches its hash.

The password hasher and the token issuer are passed in explicitly. In the
web application they come from :func:`.passwords.current_hasher` and
:func:`.tokens.current_issuer`.
"""

import logging
import re
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .domain import Account, Character, Token, SEXES
from .exceptions import AccountExists, CharacterNotOwned, DuplicateKey, \
    InvalidInput, MissingFields, NameTaken, NoSuchAccount, \
    PasswordAuthenticationFailed, StoreFailure
from .process import blueprint
from .services import characters, credentials
from .services.database import transaction
from .services.passwords import PasswordHasher, is_acceptable
from .services.tokens import TokenIssuer

logger = logging.getLogger(__name__)

ACCOUNT_CHARACTER_NAME = re.compile(r'[a-z]+')
"""Names chosen at account creation: lowercase letters only."""

CHARACTER_NAME = re.compile(r'[A-Za-z]+')
"""Names of additional characters; stored lowercase."""


def _require(**fields: Optional[str]) -> None:
    missing = sorted(key for key, value in fields.items() if not value)
    if missing:
        raise MissingFields(f'Missing fields: {", ".join(missing)}')


def _check_new_character(name: str, sex: str, pattern: 're.Pattern') -> None:
    if not pattern.fullmatch(name):
        raise InvalidInput(f'Invalid character name: {name!r}')
    if sex not in SEXES:
        raise InvalidInput(f'Invalid sex: {sex!r}')


def create_account(account_id: str, password: str, name: str, sex: str,
                   hasher: PasswordHasher) -> Account:
    """
    Create an account together with its first character.

    Both rows are written in a single transaction: either the account and its
    character exist afterwards, or neither does.

    Parameters
    ----------
    account_id : str
    password : str
        Plain password; only its bcrypt hash is stored.
    name : str
        Name of the first character; lowercase letters only.
    sex : str
        One of :data:`.domain.SEXES`.
    hasher : :class:`.PasswordHasher`

    Returns
    -------
    :class:`.Account`

    Raises
    ------
    :class:`.InvalidInput`
    :class:`.AccountExists`
    :class:`.NameTaken`
    :class:`.HashingFailure`
    :class:`.StoreFailure`

    """
    _require(account=account_id, password=password, name=name, sex=sex)
    _check_new_character(name, sex, ACCOUNT_CHARACTER_NAME)
    if not is_acceptable(password):
        raise InvalidInput('Password is too long')

    if credentials.find_account(account_id) is not None:
        raise AccountExists(f'Account {account_id} already exists')
    if characters.find_character(name) is not None:
        raise NameTaken(f'Character {name} already exists')

    password_hash = hasher.hash(password)
    document = blueprint.generate(name, sex)

    try:
        with transaction():
            try:
                account = credentials.insert_account(account_id, password_hash,
                                                     name.lower())
            except DuplicateKey as e:
                raise AccountExists(
                    f'Account {account_id} already exists'
                ) from e
            try:
                characters.insert_character(name, account_id, document)
            except DuplicateKey as e:
                raise NameTaken(f'Character {name} already exists') from e
    except SQLAlchemyError as e:
        raise StoreFailure(f'Could not create account: {e}') from e
    logger.info('Created account %s with character %s', account_id,
                name.lower())
    return account


def authenticate(account_id: str, password: str,
                 hasher: PasswordHasher) -> Account:
    """
    Check an account identifier and password.

    Raises
    ------
    :class:`.NoSuchAccount`
    :class:`.PasswordAuthenticationFailed`
        Both are :class:`.AuthenticationFailed`.
    :class:`.HashingFailure`
    :class:`.StoreFailure`

    """
    account = credentials.find_account(account_id)
    if account is None:
        hasher.spend(password)
        logger.debug('No such account: %s', account_id)
        raise NoSuchAccount('Invalid account or password')
    if not hasher.verify(password, account.password_hash):
        logger.debug('Wrong password for account: %s', account_id)
        raise PasswordAuthenticationFailed('Invalid account or password')
    return account


def create_character(account_id: str, password: str, name: str, sex: str,
                     hasher: PasswordHasher) -> Character:
    """
    Add a character to an existing account.

    Raises
    ------
    :class:`.InvalidInput`
    :class:`.AuthenticationFailed`
    :class:`.NameTaken`
        The name is taken, whatever its case.
    :class:`.HashingFailure`
    :class:`.StoreFailure`

    """
    _require(account=account_id, password=password, name=name, sex=sex)
    _check_new_character(name, sex, CHARACTER_NAME)
    account = authenticate(account_id, password, hasher)

    if characters.find_character(name) is not None:
        raise NameTaken(f'Character {name.lower()} already exists')
    document = blueprint.generate(name, sex)
    try:
        character = characters.insert_character(name, account.account_id,
                                                 document)
    except DuplicateKey as e:
        raise NameTaken(f'Character {name.lower()} already exists') from e
    logger.info('Created character %s for account %s', character.name,
                account.account_id)
    return character


def list_owned_characters(account_id: str, password: str,
                          hasher: PasswordHasher) -> List[str]:
    """Authenticate, then get the names of the account's characters."""
    account = authenticate(account_id, password, hasher)
    return characters.list_characters(account.account_id)


def issue_account_token(account_id: str, password: str,
                        hasher: PasswordHasher, issuer: TokenIssuer) -> Token:
    """Authenticate, then mint a token for the account's first character."""
    account = authenticate(account_id, password, hasher)
    logger.info('Issuing token for account %s', account_id)
    return issuer.issue(account.primary_character_name)


def issue_character_token(account_id: str, password: str, name: str,
                          hasher: PasswordHasher,
                          issuer: TokenIssuer) -> Token:
    """
    Authenticate, then mint a token for one of the account's characters.

    Raises
    ------
    :class:`.AuthenticationFailed`
    :class:`.CharacterNotOwned`
        ``name`` (compared case-insensitively) is not one of the account's
        characters. No token is issued.
    :class:`.HashingFailure`
    :class:`.StoreFailure`

    """
    account = authenticate(account_id, password, hasher)
    owned = [owned_name.lower() for owned_name
             in characters.list_characters(account.account_id)]
    if name.lower() not in owned:
        logger.info('Account %s asked for character %s, which it does not own',
                    account_id, name)
        raise CharacterNotOwned(f'{name} does not belong to {account_id}')
    logger.info('Issuing token for character %s', name.lower())
    return issuer.issue(name.lower())
