"""Login server database models."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from pytz import UTC
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB

db: SQLAlchemy = SQLAlchemy()


def _now() -> datetime:
    return datetime.now(tz=UTC)


class DBAccount(db.Model):  # type: ignore
    """
    Accounts table.

    +------------+-------------+------+-----+---------+----------------+
    | Field      | Type        | Null | Key | Default | Extra          |
    +------------+-------------+------+-----+---------+----------------+
    | id         | serial      | NO   | PRI | NULL    | auto_increment |
    | account    | text        | NO   | UNI | NULL    |                |
    | hash       | text        | NO   |     | NULL    |                |
    | definition | text        | NO   |     | NULL    |                |
    | created_at | timestamptz | NO   |     | now()   |                |
    +------------+-------------+------+-----+---------+----------------+

    ``definition`` holds the name of the character created together with the
    account.
    """

    __tablename__ = 'accounts'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(Text, nullable=False, unique=True)
    hash = Column(Text, nullable=False)
    definition = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)


class DBCharacter(db.Model):  # type: ignore
    """
    Players table; one row per character.

    +------------+-------------+------+-----+---------+----------------+
    | Field      | Type        | Null | Key | Default | Extra          |
    +------------+-------------+------+-----+---------+----------------+
    | id         | serial      | NO   | PRI | NULL    | auto_increment |
    | account    | text        | NO   | MUL | NULL    | FK, cascade    |
    | name       | text        | NO   | UNI | NULL    |                |
    | data       | jsonb       | NO   |     | NULL    |                |
    | version    | int         | NO   |     | 1       |                |
    | created_at | timestamptz | NO   |     | now()   |                |
    | updated_at | timestamptz | NO   |     | now()   |                |
    +------------+-------------+------+-----+---------+----------------+
    """

    __tablename__ = 'players'

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(ForeignKey('accounts.account', ondelete='CASCADE'),
                     nullable=False, index=True)
    name = Column(Text, nullable=False, unique=True)
    data = Column(JSON().with_variant(JSONB(), 'postgresql'), nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)
