"""
Login server for the HTML5 game server.

The login server is a Flask application that sits in front of the game
server. It owns the account and character tables, checks bcrypt passwords,
and hands out short-lived HMAC tokens that the game server accepts when a
client opens its websocket connection.

The game server never sees a password. It receives a token (see
:mod:`loginserver.services.tokens`) and the external host string, checks the
signature and expiry with the shared secret, and then loads the character
document named in the token from the ``players`` table.

Quick start
-----------

.. code-block:: bash

   $ HMAC_SHARED_SECRET=foosecret LOGIN_DATABASE_URI=sqlite:///login.db \\
       python app.py

Layout
------

- :mod:`.routes` - HTTP surface (Flask blueprint).
- :mod:`.controllers` - map requests to workflows, and outcomes to status
  codes.
- :mod:`.accounts` - account and character workflows.
- :mod:`.services` - persistence, password hashing and token signing.
- :mod:`.process` - pure helpers, e.g. the character blueprint.
"""
