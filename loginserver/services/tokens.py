"""
Short-lived login tokens for the game server.

A token binds a character name to an expiry time::

    {"name": "bob", "expire": 1700000003000, "token": "<hex hmac>"}

``token`` is the HMAC-SHA256 of ``name`` immediately followed by the decimal
``expire``, keyed by the secret shared with the game server. On the wire the
JSON object is base64 encoded. Tokens are never stored; the game server
validates them with :meth:`TokenIssuer.validate` (or an equivalent
implementation) using only the secret and its own clock.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time

from flask import Flask, current_app

from ..domain import Token
from ..exceptions import BadSignature, ExpiredToken, InvalidToken

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = 3000
"""Milliseconds."""


def _now() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class TokenIssuer(object):
    """Signs and checks tokens with a fixed secret and lifetime."""

    def __init__(self, secret: str, lifetime: int = DEFAULT_LIFETIME) -> None:
        """Keep the secret; it is never changed afterwards."""
        if not secret:
            raise ValueError('A shared secret is required')
        self._secret = secret.encode('utf-8')
        self._lifetime = lifetime

    @property
    def lifetime(self) -> int:
        """Token lifetime in milliseconds."""
        return self._lifetime

    def _sign(self, name: str, expire: int) -> str:
        message = f'{name}{expire}'.encode('utf-8')
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def issue(self, name: str) -> Token:
        """Mint a token for the character ``name``."""
        expire = _now() + self._lifetime
        return Token(name=name, expire=expire, token=self._sign(name, expire))

    def validate(self, token: Token) -> Token:
        """
        Check the signature and the expiry of a token.

        Returns
        -------
        :class:`.Token`
            The same token, if it can be trusted.

        Raises
        ------
        :class:`.BadSignature`
            The signature does not match the name and expiry.
        :class:`.ExpiredToken`
            The token is authentic, but its lifetime has elapsed.

        """
        expected = self._sign(token.name, token.expire)
        if not hmac.compare_digest(expected.encode('ascii'),
                                   str(token.token).encode('utf-8')):
            logger.debug('Bad signature on token for %s', token.name)
            raise BadSignature('Token signature does not match')
        if _now() > token.expire:
            logger.debug('Token for %s expired at %i', token.name,
                         token.expire)
            raise ExpiredToken('Token has expired')
        return token


def encode(token: Token) -> str:
    """Generate the base64 wire format of a :class:`.Token`."""
    payload = json.dumps(token.to_dict(), separators=(',', ':'))
    return base64.b64encode(payload.encode('utf-8')).decode('ascii')


def decode(encoded: str) -> Token:
    """
    Parse the base64 wire format of a token, without validating it.

    Raises
    ------
    :class:`.InvalidToken`
        The value is not a base64-encoded token object.

    """
    try:
        data = json.loads(base64.b64decode(encoded, validate=True))
        return Token(name=str(data['name']), expire=int(data['expire']),
                     token=str(data['token']))
    except (binascii.Error, ValueError, TypeError, KeyError) as e:
        raise InvalidToken('Token payload malformed') from e


def init_app(app: Flask) -> None:
    """Build the application's :class:`TokenIssuer` from its config."""
    app.config.setdefault('HMAC_SHARED_SECRET', 'foosecret')
    app.config.setdefault('TOKEN_LIFETIME', DEFAULT_LIFETIME)
    app.extensions['tokens'] = TokenIssuer(
        app.config['HMAC_SHARED_SECRET'],
        int(app.config['TOKEN_LIFETIME'])
    )


def current_issuer() -> TokenIssuer:
    """Get the :class:`TokenIssuer` of the current application."""
    issuer: TokenIssuer = current_app.extensions['tokens']
    return issuer
