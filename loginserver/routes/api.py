"""Provides routes for the login API."""

from typing import Optional, Union

from flask import Blueprint, Response, request
from flask.json import jsonify

from loginserver.controllers import accounts, characters

blueprint = Blueprint('api', __name__, url_prefix='')


def _respond(data: Optional[dict], status_code: int,
             headers: dict) -> Union[Response, tuple]:
    if data is None:
        return Response('', status=status_code, headers=headers,
                        mimetype='application/json')
    return jsonify(data), status_code, headers


@blueprint.route('/', methods=['POST'])
def create_account() -> tuple:
    """Create an account and its first character."""
    return _respond(*accounts.create_account(request.args))


@blueprint.route('/', methods=['GET'])
def login() -> tuple:
    """Log in as the primary character of an account."""
    return _respond(*accounts.login(request.args))


@blueprint.route('/characters', methods=['POST'])
def create_character() -> tuple:
    """Add a character to an account."""
    payload = request.get_json(force=True, silent=True)  # Ignore Content-Type.
    return _respond(*characters.create_character(payload))


@blueprint.route('/characters', methods=['GET'])
def list_characters() -> tuple:
    """List the characters of an account."""
    return _respond(*accounts.list_characters(request.args))


@blueprint.route('/login-character', methods=['GET'])
def login_character() -> tuple:
    """Log in as a specific character."""
    return _respond(*accounts.login_character(request.args))
