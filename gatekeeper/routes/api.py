"""HTTP endpoints for account requests."""

import logging
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request, \
    send_file, session

from ..controllers import authentication, captcha_image, registration, \
    settings
from ..controllers.util import ResponseData
from ..messages import MessageStream
from ..services import Services
from ..services.sessions import SessionStore

logger = logging.getLogger(__name__)

blueprint = Blueprint('account', __name__, url_prefix='/account')

EXTENSION = 'gatekeeper'


def get_services() -> Services:
    """Get the services for the current application, creating if needed."""
    if EXTENSION not in current_app.extensions:
        current_app.extensions[EXTENSION] = \
            Services.from_config(current_app.config)
    services: Services = current_app.extensions[EXTENSION]
    return services


def _respond(result: ResponseData, messages: MessageStream) -> Response:
    data, code, headers = result
    body: Dict[str, Any] = dict(data)
    body['messages'] = [message._asdict() for message in messages.drain()]
    response: Response = jsonify(body)
    response.status_code = code
    response.headers.extend(headers)
    return response


@blueprint.route('/login', methods=['POST'])
def login() -> Response:
    """Log in with a user name or email address, and password."""
    messages = MessageStream()
    result = authentication.login(request.form, SessionStore(session),
                                  messages, get_services())
    return _respond(result, messages)


@blueprint.route('/logout', methods=['GET', 'POST'])
def logout() -> Response:
    """Log out, and redirect to ``next_page``."""
    next_page = request.args.get('next_page', '')
    default = current_app.config['DEFAULT_LOGOUT_REDIRECT_URL']
    result = authentication.logout(SessionStore(session), next_page, default)
    return _respond(result, MessageStream())


@blueprint.route('/register', methods=['POST'])
def register() -> Response:
    """Register a new account."""
    messages = MessageStream()
    result = registration.register(request.form, SessionStore(session),
                                   messages, get_services())
    return _respond(result, messages)


@blueprint.route('/settings', methods=['POST'])
def update_settings() -> Response:
    """Change the logged-in user's account settings."""
    messages = MessageStream()
    result = settings.update_settings(request.form, SessionStore(session),
                                      messages, get_services())
    return _respond(result, messages)


@blueprint.route('/captcha', methods=['GET'])
def captcha() -> Response:
    """Issue a CAPTCHA challenge for the registration form, as an image."""
    secret = current_app.config['CAPTCHA_SECRET']
    font = current_app.config.get('CAPTCHA_FONT')
    data, code, headers = captcha_image.get(SessionStore(session), secret,
                                            font)
    response: Response = send_file(data['image'], mimetype=data['mimetype'])
    response.status_code = code
    response.headers.extend(headers)
    response.headers['Cache-Control'] = 'no-store'
    return response
