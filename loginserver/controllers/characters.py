"""Handles requests to add characters to an existing account."""

import logging
from typing import Any

from .. import accounts, status
from ..exceptions import AuthenticationFailed, Conflict, HashingFailure, \
    InvalidInput, MissingFields, StoreFailure
from ..services import passwords
from .util import Response, get_param, ACCOUNT_KEYS, PASSWORD_KEYS, \
    NAME_KEYS, SEX_KEYS

logger = logging.getLogger(__name__)

INVALID_JSON = {'error': 'INVALID_JSON'}
MISSING_FIELDS = {'error': 'MISSING_FIELDS'}
INVALID_FIELDS = {'error': 'INVALID_FIELDS'}
INVALID_PASSWORD = {'error': 'INVALID_PASSWORD'}
NAME_TAKEN = {'error': 'NAME_TAKEN'}
INTERNAL_ERROR = {'error': 'INTERNAL_ERROR'}


def create_character(payload: Any) -> Response:
    """
    Create a new character on an existing account.

    Parameters
    ----------
    payload : dict or None
        Parsed JSON request body, or ``None`` if the body could not be parsed.
        Expects ``accountId``, ``password``, ``characterName`` and ``sex``.

    Returns
    -------
    dict
        ``{"ok": true, "name": ...}`` on success; otherwise an ``error`` code.
    int
        An HTTP status code.
    dict
        Extra headers to add to the response.

    """
    if not isinstance(payload, dict):
        return INVALID_JSON, status.HTTP_400_BAD_REQUEST, {}

    fields = [get_param(payload, keys) for keys
              in (ACCOUNT_KEYS, PASSWORD_KEYS, NAME_KEYS, SEX_KEYS)]
    if any(value is not None and not isinstance(value, str)
           for value in fields):
        return INVALID_FIELDS, status.HTTP_400_BAD_REQUEST, {}
    account_id, password, name, sex = fields

    try:
        character = accounts.create_character(account_id, password, name, sex,
                                              passwords.current_hasher())
    except MissingFields:
        return MISSING_FIELDS, status.HTTP_400_BAD_REQUEST, {}
    except InvalidInput as e:
        logger.debug('Rejected character request: %s', e)
        return INVALID_FIELDS, status.HTTP_400_BAD_REQUEST, {}
    except AuthenticationFailed:
        return INVALID_PASSWORD, status.HTTP_401_UNAUTHORIZED, {}
    except Conflict:
        return NAME_TAKEN, status.HTTP_409_CONFLICT, {}
    except (HashingFailure, StoreFailure) as e:
        logger.error('Could not create character %s: %s', name, e)
        return INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR, {}
    response_data = {'ok': True, 'name': character.name}
    return response_data, status.HTTP_201_CREATED, {}
