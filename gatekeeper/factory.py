"""Application factory for the gatekeeper app."""

from typing import Any, Mapping, Optional

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, Forbidden, Unauthorized, \
    BadRequest, MethodNotAllowed, InternalServerError, NotFound

from .app_logging import setup_logger
from .routes import api
from .services import Services, util


def create_web_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Initialize and configure the gatekeeper application.

    Parameters
    ----------
    config : mapping
        Overrides for the parameters in :mod:`gatekeeper.config`.

    """
    app = Flask('gatekeeper')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    setup_logger(app.config['LOGLEVEL'])
    util.init_app(app)
    app.extensions[api.EXTENSION] = Services.from_config(app.config)
    app.register_blueprint(api.blueprint)

    if app.config['CREATE_DB']:
        with app.app_context():
            util.create_all()

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(Forbidden)(jsonify_exception)
    app.errorhandler(Unauthorized)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(InternalServerError)(jsonify_exception)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(reason=error.description)
    response.status_code = exc_resp.status_code
    return response
