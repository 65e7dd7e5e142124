"""
Controller for registering new accounts.

Registration runs the full pipeline: the honeypot check, then the site-wide
preconditions, field validation, the CAPTCHA and uniqueness checks. Every
problem found after the honeypot is reported at once.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Mapping

from werkzeug.exceptions import InternalServerError

from .. import accounts, business_rules, schema, spam
from ..business_rules import Accumulator
from ..domain import Message
from ..exceptions import Conflict, RegistrationFailed, RequestRejected
from ..messages import MessageStream
from ..passwords import hash_password
from ..services import Services
from ..services.sessions import SessionStore
from .util import ResponseData, refused, report_conflict

logger = logging.getLogger(__name__)

COMPLETE_ACTIVATION_REQUIRED = 'ACCOUNT_REGISTRATION_COMPLETE_TYPE2'
COMPLETE = 'ACCOUNT_REGISTRATION_COMPLETE_TYPE1'


def register(form_data: Mapping[str, Any], sessions: SessionStore,
             messages: MessageStream, services: Services) -> ResponseData:
    """
    Register a new account.

    Parameters
    ----------
    form_data : mapping
        Should include ``user_name``, ``display_name``, ``email``,
        ``password``, ``passwordc``, the honeypot field and, if enabled,
        ``captcha``.
    sessions : :class:`.SessionStore`
        The client's session, which holds the CAPTCHA challenge.
    messages : :class:`.MessageStream`
    services : :class:`.Services`

    Returns
    -------
    dict
        Additional data to add to the response.
    int
        Status code. This should be 201 if all goes well.
    dict
        Headers to add to the response.

    """
    settings = services.settings
    logger.debug('Registration form submitted')
    try:
        spam.check(form_data, settings, messages)

        gate = Accumulator(messages)
        business_rules.require_master_account(services.users, settings, gate)
        business_rules.require_registration_enabled(settings, gate)
        business_rules.require_guest(sessions, gate)
        preconditions_hold = not gate.failed

        sanitized = schema.sanitize(services.schemas.load('register'),
                                    form_data)
        outcome = schema.validate(sanitized)
        gate.record(outcome)
        values: Dict[str, Any] = dict(outcome.values)

        business_rules.require_captcha(sessions, values.get('captcha'),
                                       settings, gate)
        # No point in telling a refused client which names are taken.
        if preconditions_hold:
            business_rules.require_unique_username(
                services.users, values.get('user_name'), gate)
            business_rules.require_unique_email(
                services.users, values.get('email'), gate)
        gate.checkpoint()
    except RequestRejected as e:
        logger.debug('Registration refused: %s', e)
        return refused(e)

    for field in ('captcha', 'passwordc', settings.honeypot_field):
        values.pop(field, None)
    values['password_hash'] = hash_password(values.pop('password'),
                                            settings.password_hash_method)

    try:
        user = accounts.create(values, services.users, services.groups,
                               settings)
    except Conflict as e:
        report_conflict(e, messages)
        return refused(e)
    except RegistrationFailed as e:
        logger.error('Registration failed: %s', e)
        raise InternalServerError('Registration failed') from e

    if settings.require_activation:
        messages.add(Message.SUCCESS, COMPLETE_ACTIVATION_REQUIRED,
                     **user.export())
    else:
        messages.add(Message.SUCCESS, COMPLETE, **user.export())
    return {'user': user.export()}, HTTPStatus.CREATED, {}
