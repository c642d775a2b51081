"""Database session and helpers shared by the account and character stores."""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Generator, Optional

from flask import Flask
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.session import Session

from .models import db, DBAccount, DBCharacter

logger = logging.getLogger(__name__)

_IN_TRANSACTION = 'loginserver.in_transaction'


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection: Any,
                                connection_record: Any) -> None:
    # SQLite ignores REFERENCES clauses unless asked per connection.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def init_app(app: Optional[Flask]) -> None:
    """Attach the database session to the application."""
    db.init_app(app)


def current_session() -> Session:
    """Get/create database session for this context."""
    return db.session


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """
    Context manager for database transaction.

    Transactions may be nested; only the outermost block commits, and a
    failure anywhere rolls back the whole unit of work.
    """
    session = db.session
    if session.info.get(_IN_TRANSACTION):
        yield session
        return
    session.info[_IN_TRANSACTION] = True
    try:
        yield session
        session.commit()
    except IntegrityError as e:
        logger.info('Constraint violated, rolling back: %s', str(e))
        session.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        session.rollback()
        raise
    except Exception as e:
        logger.debug('Rolling back: %s', str(e))
        session.rollback()
        raise
    finally:
        session.info.pop(_IN_TRANSACTION, None)
