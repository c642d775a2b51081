"""Web Server Gateway Interface entry-point."""

import os
from typing import Optional

from flask import Flask

from loginserver.factory import create_web_app

__flask_app__: Optional[Flask] = None


def application(environ, start_response):    # type: ignore
    """WSGI application."""
    for key, value in environ.items():
        # uWSGI may pass the container hostname as SERVER_NAME; keep whatever
        # config.py says instead.
        if key == 'SERVER_NAME':
            continue
        os.environ[key] = str(value)
    global __flask_app__
    if __flask_app__ is None:
        __flask_app__ = create_web_app()
    return __flask_app__(environ, start_response)
