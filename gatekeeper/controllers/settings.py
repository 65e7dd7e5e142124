"""
Controller for self-service account settings.

The user must prove their identity again with their current password
(``passwordcheck``) before anything else is looked at. Each field that
would change is then checked against the field access policy; fields left
alone are not. Validation, uniqueness and locale problems are reported
together.
"""

import logging
from http import HTTPStatus
from typing import Any, Mapping

from werkzeug.datastructures import MultiDict

from .. import accounts, business_rules, schema
from ..authorization import ACCESS_DENIED, authorize_changes
from ..business_rules import Accumulator
from ..domain import Message
from ..exceptions import AuthorizationDenied, Conflict, CredentialInvalid, \
    RequestRejected
from ..messages import MessageStream
from ..passwords import check_password, hash_password
from ..services import Services
from ..services.sessions import SessionStore
from .util import ResponseData, refused, report_conflict

logger = logging.getLogger(__name__)

PASSWORD_INVALID = 'ACCOUNT_PASSWORD_INVALID'
SETTINGS_UPDATED = 'ACCOUNT_SETTINGS_UPDATED'


def update_settings(form_data: Mapping[str, Any], sessions: SessionStore,
                    messages: MessageStream,
                    services: Services) -> ResponseData:
    """
    Update the logged-in user's email, locale, display name or password.

    Parameters
    ----------
    form_data : mapping
        Must include ``passwordcheck``, the user's current password. May
        include ``email``, ``locale``, ``display_name``, and ``password``
        with its confirmation ``passwordc``. Empty values are ignored.
    sessions : :class:`.SessionStore`
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
    user_id = sessions.current_identity()
    user = None if user_id is None else services.users.fetch_by_id(user_id)
    if user is None:
        logger.debug('Settings update without a logged-in user')
        messages.add(Message.DANGER, ACCESS_DENIED)
        return refused(AuthorizationDenied([ACCESS_DENIED]))

    raw = MultiDict(form_data)
    raw.pop('csrf_token', None)

    if not check_password(raw.pop('passwordcheck', ''), user.password_hash):
        logger.debug('Current password check failed for user %s', user_id)
        messages.add(Message.DANGER, PASSWORD_INVALID)
        return refused(CredentialInvalid([PASSWORD_INVALID]))

    settings = services.settings
    try:
        sanitized = schema.sanitize(services.schemas.load('account-settings'),
                                    raw)
        outcome = schema.validate(sanitized)
        changes = authorize_changes(user, user, outcome.values,
                                    services.policy, messages)

        gate = Accumulator(messages)
        gate.record(outcome)
        if 'email' in changes:
            business_rules.require_unique_email(services.users,
                                                changes['email'], gate)
        if 'locale' in changes:
            business_rules.require_known_locale(changes['locale'], settings,
                                                gate)
        gate.checkpoint()
    except RequestRejected as e:
        logger.debug('Settings update refused: %s', e)
        return refused(e)

    if 'password' in changes:
        changes['password_hash'] = hash_password(
            changes.pop('password'), settings.password_hash_method)
    if changes:
        try:
            user = accounts.update(user, changes, services.users)
        except Conflict as e:
            report_conflict(e, messages)
            return refused(e)
    else:
        logger.debug('Nothing to change for user %s', user_id)

    messages.add(Message.SUCCESS, SETTINGS_UPDATED)
    return {'user': user.export()}, HTTPStatus.OK, {}
