"""
Controllers for logging in and out.

A successful login binds the client's session to the user's ID; logging out
forgets everything in the session.
"""

import logging
from http import HTTPStatus
from typing import Any, Mapping

from .. import credentials, schema
from ..business_rules import Accumulator, require_master_account
from ..domain import Message
from ..exceptions import RequestRejected
from ..messages import MessageStream
from ..services import Services
from ..services.sessions import SessionStore
from .util import ResponseData, good_next_page, refused

logger = logging.getLogger(__name__)

LOGIN_ALREADY_COMPLETE = 'LOGIN_ALREADY_COMPLETE'


def login(form_data: Mapping[str, Any], sessions: SessionStore,
          messages: MessageStream, services: Services) -> ResponseData:
    """
    Log in with a user name (or email address) and password.

    Parameters
    ----------
    form_data : mapping
        Should include ``user_name`` and ``password``.
    sessions : :class:`.SessionStore`
        The client's session; bound to the user on success.
    messages : :class:`.MessageStream`
    services : :class:`.Services`

    Returns
    -------
    dict
        Additional data to add to the response.
    int
        Status code. This should be 200 if all goes well.
    dict
        Headers to add to the response.

    """
    if sessions.current_identity() is not None:
        logger.debug('Already logged in as %s', sessions.current_identity())
        messages.add(Message.WARNING, LOGIN_ALREADY_COMPLETE)
        return {}, HTTPStatus.OK, {}

    logger.debug('Login form submitted')
    rules = Accumulator(messages)
    try:
        require_master_account(services.users, services.settings, rules)
        sanitized = schema.sanitize(services.schemas.load('login'), form_data)
        outcome = schema.validate(sanitized)
        rules.record(outcome)
        rules.checkpoint()
        user = credentials.authenticate(
            outcome.values['user_name'], outcome.values['password'],
            services.users, services.settings, sessions, messages
        )
    except RequestRejected as e:
        logger.debug('Login refused: %s', e)
        return refused(e)

    messages.add(Message.SUCCESS, credentials.WELCOME, **user.export())
    return {'user': user.export()}, HTTPStatus.OK, {}


def logout(sessions: SessionStore, next_page: str,
           default_next_page: str = '/') -> ResponseData:
    """Log the client out and send them on to ``next_page``."""
    logger.debug('Logging out session for user %s',
                 sessions.current_identity())
    credentials.logout(sessions)
    if not good_next_page(next_page):
        next_page = default_next_page
    return {}, HTTPStatus.SEE_OTHER, {'Location': next_page}
