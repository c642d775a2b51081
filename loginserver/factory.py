"""Application factory for the login server."""

from typing import Any, Mapping, Optional

from flask import Flask, request
from werkzeug.exceptions import MethodNotAllowed, NotFound, NotImplemented

from . import status
from .app_logging import setup_logger
from .routes import api
from .services import database, passwords, tokens

ALLOWED_METHODS = ('GET', 'POST')


def _not_found(e: Exception) -> tuple:
    return '', status.HTTP_404_NOT_FOUND


def _not_implemented(e: Exception) -> tuple:
    return '', status.HTTP_501_NOT_IMPLEMENTED


def _reject_unsupported_method() -> Optional[tuple]:
    if request.method not in ALLOWED_METHODS:
        return '', status.HTTP_501_NOT_IMPLEMENTED
    return None


def create_web_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Initialize and configure the login server application."""
    app = Flask('loginserver')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)
    setup_logger(app.config['LOGLEVEL'])

    database.init_app(app)
    if app.config['CREATE_DB']:
        with app.app_context():
            database.create_all()
    passwords.init_app(app)
    tokens.init_app(app)

    app.before_request(_reject_unsupported_method)
    app.register_error_handler(NotFound, _not_found)
    # Known path, unsupported verb: looks the same as an unknown path.
    app.register_error_handler(MethodNotAllowed, _not_found)
    app.register_error_handler(NotImplemented, _not_implemented)
    app.register_blueprint(api.blueprint)
    return app
