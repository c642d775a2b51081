"""Helpers for :mod:`loginserver.controllers`."""

from typing import Any, Mapping, Optional, Tuple

Response = Tuple[Optional[dict], int, dict]

ACCOUNT_KEYS = ('accountId', 'account')
PASSWORD_KEYS = ('password',)
NAME_KEYS = ('characterName', 'name')
SEX_KEYS = ('sex',)


def get_param(params: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    """
    Get the first non-empty value among ``keys``.

    Older game clients send ``account`` and ``name`` instead of ``accountId``
    and ``characterName``; the current name is tried first.
    """
    for key in keys:
        value = params.get(key)
        if value not in (None, ''):
            return value
    return None
