"""Create and update user accounts."""

import logging
from typing import Any, Mapping

from .domain import SiteSettings, User
from .exceptions import RegistrationFailed
from .services.groups import GroupStore
from .services.users import UserStore

logger = logging.getLogger(__name__)


def create(values: Mapping[str, Any], users: UserStore, groups: GroupStore,
           settings: SiteSettings) -> User:
    """
    Create a new account from validated registration values.

    The account joins the default primary group, which also supplies its
    title, and every other default group.

    Parameters
    ----------
    values : mapping
        Must include ``user_name``, ``email``, ``display_name`` and
        ``password_hash``.
    users : :class:`.UserStore`
    groups : :class:`.GroupStore`
    settings : :class:`.SiteSettings`

    Returns
    -------
    :class:`.User`
        As stored, with ``user_id`` set.

    Raises
    ------
    :class:`.RegistrationFailed`
        If there is no default primary group.
    :class:`.Conflict`
        If the user name or email address was taken in the meantime.

    """
    primary = groups.fetch_default_primary()
    if primary is None:
        raise RegistrationFailed('No default primary group')
    memberships = {primary.group_id}
    memberships.update(group.group_id for group in groups.fetch_all_default())

    user = users.save(User(
        user_name=values['user_name'].lower(),
        email=values['email'].lower(),
        display_name=values['display_name'],
        password_hash=values['password_hash'],
        locale=settings.default_locale,
        active=not settings.require_activation,
        primary_group_id=primary.group_id,
        title=primary.new_user_title,
        group_memberships=frozenset(memberships)
    ))
    logger.info('Created user %s (%s)', user.user_id, user.user_name)
    return user


def update(target: User, changes: Mapping[str, Any],
           users: UserStore) -> User:
    """
    Apply ``changes`` to an account and save it in one transaction.

    Fields not in ``changes`` keep their current values.
    """
    updated = target._replace(**changes)
    if 'email' in changes:
        updated = updated._replace(email=updated.email.lower())
    user = users.save(updated)
    logger.info('Updated %s of user %s', ', '.join(sorted(changes)),
                user.user_id)
    return user
