"""Helpers for tests that need an application and a database."""

from typing import Any
from unittest import TestCase

from flask import Flask

from loginserver.factory import create_web_app
from loginserver.services import database

TEST_CONFIG = {
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'BCRYPT_ROUNDS': 4,
    'HMAC_SHARED_SECRET': 'foosecret',
    'TOKEN_LIFETIME': 3000,
    'EXTERNAL_HOST': 'game.example.com:2222',
    'UPDATE_BACKOFF': 0,
    'TESTING': True
}


def create_test_app(**overrides: Any) -> Flask:
    """Build an application backed by a fresh in-memory SQLite database."""
    config = dict(TEST_CONFIG)
    config.update(overrides)
    return create_web_app(config)


class DatabaseTestCase(TestCase):
    """Runs each test in an application context, with empty tables."""

    def setUp(self) -> None:
        """Create the application and the tables."""
        self.app = create_test_app()
        self.context = self.app.app_context()
        self.context.push()
        database.create_all()

    def tearDown(self) -> None:
        """Drop the tables and leave the application context."""
        database.current_session().remove()
        database.drop_all()
        self.context.pop()
