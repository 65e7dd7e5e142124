"""
Authentication and session binding.

Unknown users and wrong passwords get the same response, so that the
response does not reveal which user names exist. Disabled and inactive
accounts are told so, as the account holder needs to know what to do next.
"""

import logging

from email_validator import EmailNotValidError, validate_email

from .domain import Message, SiteSettings, User
from .exceptions import CredentialInvalid
from .messages import MessageStream
from .passwords import check_password
from .services.sessions import SessionStore
from .services.users import UserStore

logger = logging.getLogger(__name__)

USER_OR_PASS_INVALID = 'ACCOUNT_USER_OR_PASS_INVALID'
DISABLED = 'ACCOUNT_DISABLED'
INACTIVE = 'ACCOUNT_INACTIVE'
WELCOME = 'ACCOUNT_WELCOME'


def is_email(identifier: str) -> bool:
    """Whether a login identifier looks like an email address."""
    try:
        validate_email(identifier, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _refuse(code: str, messages: MessageStream) -> CredentialInvalid:
    messages.add(Message.DANGER, code)
    return CredentialInvalid([code])


def authenticate(identifier: str, password: str, users: UserStore,
                 settings: SiteSettings, sessions: SessionStore,
                 messages: MessageStream) -> User:
    """
    Log a user in with a user name (or email address) and password.

    Parameters
    ----------
    identifier : str
        User name, or email address if email login is enabled.
    password : str
    users : :class:`.UserStore`
    settings : :class:`.SiteSettings`
    sessions : :class:`.SessionStore`
        Bound to the user on success.
    messages : :class:`.MessageStream`

    Returns
    -------
    :class:`.User`

    Raises
    ------
    :class:`.CredentialInvalid`

    """
    identifier = identifier.strip().lower()
    if is_email(identifier):
        if not settings.email_login_enabled:
            logger.debug('Email login attempted but not enabled')
            raise _refuse(USER_OR_PASS_INVALID, messages)
        user = users.fetch_by_email(identifier)
    else:
        user = users.fetch_by_username(identifier)

    if user is None:
        logger.debug('No such user: %s', identifier)
        raise _refuse(USER_OR_PASS_INVALID, messages)
    if not user.enabled:
        logger.debug('User %s is disabled', user.user_id)
        raise _refuse(DISABLED, messages)
    if not user.active:
        logger.debug('User %s is not active', user.user_id)
        raise _refuse(INACTIVE, messages)
    if not check_password(password, user.password_hash):
        logger.debug('Wrong password for user %s', user.user_id)
        raise _refuse(USER_OR_PASS_INVALID, messages)

    sessions.bind(user.user_id)
    logger.info('User %s logged in', user.user_id)
    return user


def logout(sessions: SessionStore) -> None:
    """End the client's session, whether or not anyone is logged in."""
    sessions.clear()
