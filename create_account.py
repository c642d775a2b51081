"""
Script for creating an account with its first character.

Uses the database named by ``LOGIN_DATABASE_URI`` (or the ``PG*`` variables).
The tables are created on startup unless ``LOGIN_CREATE_DB=0``.

.. code-block:: bash

   $ LOGIN_DATABASE_URI=sqlite:///login.db python create_account.py
   Account identifier: a1
   Password:
   Repeat for confirmation:
   Character name: bob
   Sex (male, female) [male]:
   Created account a1 with character bob

"""

import sys

import click

from loginserver import accounts
from loginserver.domain import SEXES
from loginserver.exceptions import Conflict, InvalidInput
from loginserver.factory import create_web_app
from loginserver.services import passwords


@click.command()
@click.option('--account', prompt='Account identifier')
@click.option('--password', prompt=True, hide_input=True,
              confirmation_prompt=True)
@click.option('--name', prompt='Character name')
@click.option('--sex', prompt='Sex', type=click.Choice(SEXES),
              default=SEXES[0])
def create_account(account: str, password: str, name: str, sex: str) -> None:
    """Create a new account and character."""
    app = create_web_app()
    with app.app_context():
        try:
            accounts.create_account(account, password, name, sex,
                                    passwords.current_hasher())
        except (InvalidInput, Conflict) as e:
            click.echo(str(e), err=True)
            sys.exit(1)
    click.echo(f'Created account {account} with character {name}')


if __name__ == '__main__':
    create_account()
