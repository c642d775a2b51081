"""Tests for the WSGI entry point and schema creation at startup."""

import os
import tempfile
from unittest import TestCase, mock

from sqlalchemy import inspect
from werkzeug.test import Client

import wsgi
from loginserver.services import database

from .util import create_test_app


class TestWSGIApplication(TestCase):
    """The WSGI application works against a database it has never seen."""

    def setUp(self) -> None:
        """Point the application at an empty SQLite file."""
        self.workdir = tempfile.TemporaryDirectory()
        path = os.path.join(self.workdir.name, 'login.db')
        self.env = mock.patch.dict(os.environ, {
            'LOGIN_DATABASE_URI': f'sqlite:///{path}',
            'BCRYPT_ROUNDS': '4',
            'HMAC_SHARED_SECRET': 'foosecret'
        })
        self.env.start()
        wsgi.__flask_app__ = None

    def tearDown(self) -> None:
        """Forget the application and remove the database."""
        if wsgi.__flask_app__ is not None:
            with wsgi.__flask_app__.app_context():
                database.current_session().remove()
                database.db.engine.dispose()
        wsgi.__flask_app__ = None
        self.env.stop()
        self.workdir.cleanup()

    def test_create_and_login(self) -> None:
        """Tables are created when the application is first built."""
        client = Client(wsgi.application)
        response = client.post('/', query_string={
            'accountId': 'a1', 'password': 'p1', 'characterName': 'bob',
            'sex': 'male'
        })
        self.assertEqual(response.status_code, 201)
        response = client.get('/', query_string={'accountId': 'a1',
                                                 'password': 'p1'})
        self.assertEqual(response.status_code, 200)


class TestCreateDB(TestCase):
    """``CREATE_DB`` controls whether tables are created at startup."""

    def test_tables_created(self) -> None:
        """By default the tables exist as soon as the app is built."""
        app = create_test_app()
        with app.app_context():
            tables = inspect(database.db.engine).get_table_names()
        self.assertIn('accounts', tables)
        self.assertIn('players', tables)

    def test_tables_not_created(self) -> None:
        """Operators can manage the schema themselves."""
        app = create_test_app(CREATE_DB=False)
        with app.app_context():
            tables = inspect(database.db.engine).get_table_names()
        self.assertNotIn('accounts', tables)
