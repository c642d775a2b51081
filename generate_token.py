"""
Helper script for generating a login token.

Be sure that you are using the same secret when running this script as when
you run the game server. Set ``HMAC_SHARED_SECRET=somesecret`` in your
environment to ensure that the same secret is always used.

.. code-block:: bash

   $ HMAC_SHARED_SECRET=foosecret python generate_token.py --name bob
   eyJuYW1lIjoiYm9iIiwiZXhwaXJlIjoxNzAwMDAwMDAzMDAwLCJ0b2tlbiI6Ii4uLiJ9

Pass ``--lifetime`` (milliseconds) to get a token that lives long enough to
paste into a websocket client by hand. To check a token that the login server
handed out, pass it with ``--verify``.
"""

import os
import sys

import click

from loginserver.exceptions import InvalidToken
from loginserver.services import tokens


@click.command()
@click.option('--name', prompt='Character name')
@click.option('--lifetime', default=60000, type=int,
              help='Token lifetime in milliseconds')
@click.option('--verify', 'encoded', default=None,
              help='Validate this token instead of issuing a new one')
def generate_token(name: str, lifetime: int = 60000,
                   encoded: str = None) -> None:
    """Generate a login token for dev/testing purposes."""
    issuer = tokens.TokenIssuer(os.environ['HMAC_SHARED_SECRET'], lifetime)
    if encoded is None:
        click.echo(tokens.encode(issuer.issue(name.lower())))
        return
    try:
        token = issuer.validate(tokens.decode(encoded))
    except InvalidToken as e:
        click.echo(f'Invalid token: {e}', err=True)
        sys.exit(1)
    if token.name != name.lower():
        click.echo(f'Token is for {token.name}, not {name.lower()}', err=True)
        sys.exit(1)
    click.echo(f'Valid token for {token.name}, expires at {token.expire}')


if __name__ == '__main__':
    generate_token()
