"""
Business rules that span fields or accounts.

Rules do not halt the request when they fail. Each failure is noted on an
:class:`Accumulator`, together with any field errors from validation, and
the request halts once, at :meth:`Accumulator.checkpoint`, so that the
client hears about every problem at the same time.
"""

import logging
from typing import Any, List, Optional, Type

from . import captcha
from .domain import FieldError, Message, Rejected, SiteSettings, \
    ValidationOutcome
from .exceptions import BusinessRuleFailed, Conflict, NotFound, \
    ValidationFailed
from .messages import MessageStream
from .services.sessions import SessionStore
from .services.users import EMAIL_IN_USE, USERNAME_IN_USE, UserStore

logger = logging.getLogger(__name__)

MASTER_ACCOUNT_NOT_EXISTS = 'MASTER_ACCOUNT_NOT_EXISTS'
REGISTRATION_DISABLED = 'ACCOUNT_REGISTRATION_DISABLED'
REGISTRATION_LOGOUT = 'ACCOUNT_REGISTRATION_LOGOUT'
CAPTCHA_FAIL = 'CAPTCHA_FAIL'
SPECIFY_LOCALE = 'ACCOUNT_SPECIFY_LOCALE'


class Accumulator:
    """Collects field errors and rule failures for one request."""

    def __init__(self, messages: MessageStream) -> None:
        self.messages = messages
        self.errors: List[FieldError] = []
        self.failures: List[BusinessRuleFailed] = []

    @property
    def failed(self) -> bool:
        """Whether anything has gone wrong so far."""
        return bool(self.errors or self.failures)

    def record(self, outcome: ValidationOutcome) -> None:
        """Take note of the field errors in a validation outcome."""
        if not isinstance(outcome, Rejected):
            return
        for error in outcome.errors:
            self.messages.add(Message.DANGER, error.message,
                              field=error.field, rule=error.rule)
        self.errors.extend(outcome.errors)

    def fail(self, code: str, kind: Type[BusinessRuleFailed] =
             BusinessRuleFailed, **params: Any) -> None:
        """Take note of a failed rule."""
        logger.debug('Business rule failed: %s', code)
        self.messages.add(Message.DANGER, code, **params)
        self.failures.append(kind([code]))

    def checkpoint(self) -> None:
        """
        Halt the request if anything has gone wrong.

        Raises
        ------
        :class:`.NotFound`
            If an account that the request depends on is missing.
        :class:`.BusinessRuleFailed`
            If any other rule failed. This is a :class:`.Conflict` when
            every failure was a uniqueness conflict.
        :class:`.ValidationFailed`
            If only field validation failed.

        """
        if not self.failed:
            return
        codes = [code for failure in self.failures for code in failure.codes]
        kinds = {type(failure) for failure in self.failures}
        logger.info('Request refused: %s', codes
                    + [error.message for error in self.errors])
        if NotFound in kinds:
            raise NotFound(codes, self.errors)
        if kinds == {Conflict}:
            raise Conflict(codes, self.errors)
        if kinds:
            raise BusinessRuleFailed(codes, self.errors)
        raise ValidationFailed(errors=self.errors)


def require_master_account(users: UserStore, settings: SiteSettings,
                           rules: Accumulator) -> None:
    """Nobody may register or log in until the master account exists."""
    if not users.exists(settings.master_user_id, 'user_id'):
        rules.fail(MASTER_ACCOUNT_NOT_EXISTS, NotFound)


def require_registration_enabled(settings: SiteSettings,
                                 rules: Accumulator) -> None:
    """Registration can be switched off for the whole site."""
    if not settings.can_register:
        rules.fail(REGISTRATION_DISABLED)


def require_guest(sessions: SessionStore, rules: Accumulator) -> None:
    """A logged-in user may not register another account."""
    if sessions.current_identity() is not None:
        rules.fail(REGISTRATION_LOGOUT)


def require_captcha(sessions: SessionStore, answer: Optional[str],
                    settings: SiteSettings, rules: Accumulator) -> None:
    """The answer matches the challenge in the session, if enabled."""
    if not settings.enable_captcha:
        return
    if not captcha.check(sessions, answer, settings.captcha_secret):
        rules.fail(CAPTCHA_FAIL)


def require_unique_username(users: UserStore, user_name: Optional[str],
                            rules: Accumulator) -> None:
    """No other account has this user name."""
    if user_name and users.exists(user_name, 'user_name'):
        rules.fail(USERNAME_IN_USE, Conflict, user_name=user_name)


def require_unique_email(users: UserStore, email: Optional[str],
                         rules: Accumulator) -> None:
    """No other account has this email address."""
    if email and users.exists(email, 'email'):
        rules.fail(EMAIL_IN_USE, Conflict, email=email)


def require_known_locale(locale: Optional[str], settings: SiteSettings,
                         rules: Accumulator) -> None:
    """The locale is one that the site offers."""
    if locale and locale not in settings.available_locales:
        rules.fail(SPECIFY_LOCALE, locale=locale)
