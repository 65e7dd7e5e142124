"""Web Server Gateway Interface entry-point."""

import os

from gatekeeper.factory import create_web_app

__flask_app__ = None


def application(environ, start_response):    # type: ignore
    """WSGI application."""
    for key, value in environ.items():
        # ``SERVER_NAME`` from the request environ is usually just a
        # container ID; keep it explicitly configured instead.
        if key == 'SERVER_NAME':
            continue
        if isinstance(value, str):
            os.environ[key] = value

    global __flask_app__
    if __flask_app__ is None:
        __flask_app__ = create_web_app()
    return __flask_app__(environ, start_response)
