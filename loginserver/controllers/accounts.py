"""
Handles account creation and login requests.

Login responses carry a freshly minted token (base64, see
:mod:`loginserver.services.tokens`) and the address of the game server. The
same 401 is returned whether the account is unknown or the password is wrong,
so callers cannot tell which account identifiers exist.
"""

import logging
from typing import Mapping

from flask import current_app

from .. import accounts, status
from ..domain import Token
from ..exceptions import AuthenticationFailed, CharacterNotOwned, Conflict, \
    HashingFailure, InvalidInput, StoreFailure
from ..services import passwords, tokens
from .util import Response, get_param, ACCOUNT_KEYS, PASSWORD_KEYS, \
    NAME_KEYS, SEX_KEYS

logger = logging.getLogger(__name__)

INVALID_PASSWORD = {'error': 'INVALID_PASSWORD'}
MISSING_CREDENTIALS = {'error': 'MISSING_CREDENTIALS'}
MISSING_FIELDS = {'error': 'MISSING_FIELDS'}
NOT_OWNED = {'error': 'CHARACTER_DOES_NOT_BELONG_TO_ACCOUNT'}
INTERNAL_ERROR = {'error': 'INTERNAL_ERROR'}


def _login_data(token: Token) -> dict:
    return {
        'token': tokens.encode(token),
        'host': current_app.config['EXTERNAL_HOST']
    }


def create_account(params: Mapping) -> Response:
    """
    Create an account and its first character.

    Parameters
    ----------
    params : dict
        Query parameters: ``accountId``, ``password``, ``characterName`` and
        ``sex``.

    Returns
    -------
    None
        Responses to this request have no body.
    int
        201 when created, 400 for bad input, 409 when the account or the
        character name is taken, 500 otherwise.
    dict
        Extra headers to add to the response.

    """
    try:
        accounts.create_account(get_param(params, ACCOUNT_KEYS),
                                get_param(params, PASSWORD_KEYS),
                                get_param(params, NAME_KEYS),
                                get_param(params, SEX_KEYS),
                                passwords.current_hasher())
    except InvalidInput as e:
        logger.debug('Rejected account request: %s', e)
        return None, status.HTTP_400_BAD_REQUEST, {}
    except Conflict as e:
        logger.info('Account request conflicts: %s', e)
        return None, status.HTTP_409_CONFLICT, {}
    except (HashingFailure, StoreFailure) as e:
        logger.error('Could not create account: %s', e)
        return None, status.HTTP_500_INTERNAL_SERVER_ERROR, {}
    return None, status.HTTP_201_CREATED, {}


def login(params: Mapping) -> Response:
    """Issue a token for the primary character of an account."""
    account_id = get_param(params, ACCOUNT_KEYS)
    password = get_param(params, PASSWORD_KEYS)
    if not account_id or not password:
        return None, status.HTTP_401_UNAUTHORIZED, {}
    try:
        token = accounts.issue_account_token(account_id, password,
                                             passwords.current_hasher(),
                                             tokens.current_issuer())
    except AuthenticationFailed:
        return None, status.HTTP_401_UNAUTHORIZED, {}
    except (HashingFailure, StoreFailure) as e:
        logger.error('Could not log in %s: %s', account_id, e)
        return None, status.HTTP_500_INTERNAL_SERVER_ERROR, {}
    return _login_data(token), status.HTTP_200_OK, {}


def list_characters(params: Mapping) -> Response:
    """List the characters of an account."""
    account_id = get_param(params, ACCOUNT_KEYS)
    password = get_param(params, PASSWORD_KEYS)
    if not account_id or not password:
        return MISSING_CREDENTIALS, status.HTTP_400_BAD_REQUEST, {}
    try:
        names = accounts.list_owned_characters(account_id, password,
                                               passwords.current_hasher())
    except AuthenticationFailed:
        return INVALID_PASSWORD, status.HTTP_401_UNAUTHORIZED, {}
    except (HashingFailure, StoreFailure) as e:
        logger.error('Could not list characters of %s: %s', account_id, e)
        return INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR, {}
    response_data = {
        'accountId': account_id,
        'characters': [{'name': name} for name in names]
    }
    return response_data, status.HTTP_200_OK, {}


def login_character(params: Mapping) -> Response:
    """
    Issue a token for a specific character of an account.

    Parameters
    ----------
    params : dict
        Query parameters: ``accountId``, ``password`` and ``characterName``.

    Returns
    -------
    dict
        ``token`` and ``host`` on success; otherwise an ``error`` code.
    int
        200, or 400, 401, 403 (character belongs to someone else) or 500.
    dict
        Extra headers to add to the response.

    """
    account_id = get_param(params, ACCOUNT_KEYS)
    password = get_param(params, PASSWORD_KEYS)
    name = get_param(params, NAME_KEYS)
    if not account_id or not password or not name:
        return MISSING_FIELDS, status.HTTP_400_BAD_REQUEST, {}
    try:
        token = accounts.issue_character_token(account_id, password, name,
                                               passwords.current_hasher(),
                                               tokens.current_issuer())
    except AuthenticationFailed:
        return INVALID_PASSWORD, status.HTTP_401_UNAUTHORIZED, {}
    except CharacterNotOwned:
        return NOT_OWNED, status.HTTP_403_FORBIDDEN, {}
    except (HashingFailure, StoreFailure) as e:
        logger.error('Could not log in %s as %s: %s', account_id, name, e)
        return INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR, {}
    return _login_data(token), status.HTTP_200_OK, {}
