"""
Per-field authorization for account changes.

Whether an actor may change a field of a target account is a single
capability question, ``check_field_access(actor, target, field)``, answered
by a table of per-field rules. Only fields whose submitted value differs
from the stored one are asked about; a field that is left alone never
needs authorization.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .domain import Message, User
from .exceptions import AuthorizationDenied
from .messages import MessageStream

logger = logging.getLogger(__name__)

ACCESS_DENIED = 'ACCESS_DENIED'

MUTABLE_FIELDS = ('email', 'locale', 'display_name', 'password')
"""Account fields that can be changed in account settings, in check order."""

FieldRule = Callable[[User, User], bool]


def is_self(actor: User, target: User) -> bool:
    """The actor is changing their own account."""
    return actor.user_id is not None and actor.user_id == target.user_id


def any_of(*rules: FieldRule) -> FieldRule:
    """A rule that passes when any of ``rules`` does."""
    def _check(actor: User, target: User) -> bool:
        return any(rule(actor, target) for rule in rules)
    return _check


def is_one_of(user_ids: Iterable[int]) -> FieldRule:
    """A rule that passes for actors with one of ``user_ids``."""
    allowed = frozenset(user_ids)

    def _check(actor: User, target: User) -> bool:
        return actor.user_id in allowed
    return _check


class FieldAccessPolicy:
    """Answers field capability questions from a rule table."""

    def __init__(self, rules: Mapping[str, FieldRule]) -> None:
        self.rules = dict(rules)

    def check_field_access(self, actor: User, target: User,
                           field: str) -> bool:
        """
        Whether ``actor`` may change ``field`` on ``target``.

        Fields without a rule may not be changed by anyone.
        """
        rule = self.rules.get(field)
        allowed = rule is not None and rule(actor, target)
        logger.debug('Access to %s of user %s for user %s: %s', field,
                     target.user_id, actor.user_id, allowed)
        return allowed

    @classmethod
    def default(cls, admin_ids: Iterable[int] = ()) -> 'FieldAccessPolicy':
        """Users may edit their own settings; ``admin_ids`` may edit any."""
        rule = any_of(is_self, is_one_of(admin_ids))
        return cls({field: rule for field in MUTABLE_FIELDS})


def is_submitted(value: Optional[Any]) -> bool:
    """Empty values mean "leave this field alone"."""
    return value is not None and value != ''


def authorize_changes(actor: User, target: User, values: Mapping[str, Any],
                      policy: FieldAccessPolicy,
                      messages: MessageStream) -> Dict[str, Any]:
    """
    Check every change that ``values`` would make to ``target``.

    Parameters
    ----------
    actor : :class:`.User`
        The authenticated user making the request.
    target : :class:`.User`
        The account to change.
    values : mapping
        Sanitized submitted values, by field name.
    policy : :class:`.FieldAccessPolicy`
    messages : :class:`.MessageStream`

    Returns
    -------
    dict
        The fields that would change, with their new values. A password is
        always a change, since the stored hash cannot be compared.

    Raises
    ------
    :class:`.AuthorizationDenied`
        At the first change that ``actor`` may not make. Nothing after it
        is checked.

    """
    changes: Dict[str, Any] = {}
    for field in MUTABLE_FIELDS:
        value = values.get(field)
        if not is_submitted(value):
            continue
        if field != 'password' and value == getattr(target, field):
            continue
        if not policy.check_field_access(actor, target, field):
            logger.info('User %s may not change %s of user %s',
                        actor.user_id, field, target.user_id)
            messages.add(Message.DANGER, ACCESS_DENIED)
            raise AuthorizationDenied([ACCESS_DENIED])
        changes[field] = value
    return changes
