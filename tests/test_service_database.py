"""Tests for :mod:`loginserver.services.database`."""

from unittest import mock
from typing import Any

import sqlalchemy

from loginserver.exceptions import NameTaken
from loginserver.services import database

from .util import DatabaseTestCase


class TestTransaction(DatabaseTestCase):
    """:func:`.database.transaction` rolls back whatever goes wrong."""

    @mock.patch(f'{database.__name__}.logger')
    def test_domain_error_is_not_logged_as_error(self, mock_logger: Any) -> None:
        """Ordinary outcomes roll back quietly."""
        with self.assertRaises(NameTaken):
            with database.transaction():
                raise NameTaken('bob')
        mock_logger.error.assert_not_called()

    @mock.patch(f'{database.__name__}.logger')
    def test_database_error_is_logged(self, mock_logger: Any) -> None:
        """Database failures are logged as errors."""
        with self.assertRaises(sqlalchemy.exc.OperationalError):
            with database.transaction():
                raise sqlalchemy.exc.OperationalError('statement', {}, None)
        self.assertEqual(mock_logger.error.call_count, 1)

    def test_nested(self) -> None:
        """Only the outermost block commits."""
        session = database.current_session()
        with mock.patch.object(session, 'commit') as mock_commit:
            with database.transaction():
                with database.transaction():
                    pass
                mock_commit.assert_not_called()
            mock_commit.assert_called_once()
