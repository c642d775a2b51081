"""Flask configuration for the login server."""

import os

VERSION = '0.3.0'

LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))

LOGIN_HOST = os.environ.get('LOGIN_HOST', '127.0.0.1')
LOGIN_PORT = int(os.environ.get('LOGIN_PORT', '1338'))

PGHOST = os.environ.get('PGHOST', 'localhost')
PGPORT = os.environ.get('PGPORT', '5432')
PGUSER = os.environ.get('PGUSER', 'postgres')
PGPASSWORD = os.environ.get('PGPASSWORD', 'postgres')
PGDATABASE = os.environ.get('PGDATABASE', 'game_login')

SQLALCHEMY_DATABASE_URI = os.environ.get(
    'LOGIN_DATABASE_URI',
    f'postgresql://{PGUSER}:{PGPASSWORD}@{PGHOST}:{PGPORT}/{PGDATABASE}'
)
"""Explicit ``LOGIN_DATABASE_URI`` wins over the ``PG*`` variables."""

SQLALCHEMY_TRACK_MODIFICATIONS = False

HMAC_SHARED_SECRET = os.environ.get('HMAC_SHARED_SECRET', 'foosecret')
"""Shared with the game server, which checks token signatures with it."""

TOKEN_LIFETIME = int(os.environ.get('TOKEN_LIFETIME', '3000'))
"""Milliseconds. The token is handed to the game server right away."""

EXTERNAL_HOST = os.environ.get('EXTERNAL_HOST', '127.0.0.1:2222')
"""Address of the game server as seen by clients."""

BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '12'))
HASHING_CONCURRENCY = int(os.environ.get('HASHING_CONCURRENCY', '4'))
"""Maximum number of bcrypt computations running at the same time."""

UPDATE_MAX_ATTEMPTS = int(os.environ.get('UPDATE_MAX_ATTEMPTS', '5'))
UPDATE_BACKOFF = float(os.environ.get('UPDATE_BACKOFF', '0.05'))
"""Seconds; doubled after every lost compare-and-swap."""

CREATE_DB = os.environ.get('LOGIN_CREATE_DB', '1') == '1'
"""Create missing tables when the application starts."""
