"""User account persistence."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.session import Session

from .. import domain
from ..exceptions import Conflict
from . import util
from .models import DBUser, DBUserGroup

logger = logging.getLogger(__name__)

USERNAME_IN_USE = 'ACCOUNT_USERNAME_IN_USE'
EMAIL_IN_USE = 'ACCOUNT_EMAIL_IN_USE'


def _to_domain(db_user: DBUser) -> domain.User:
    return domain.User(
        user_id=db_user.user_id,
        user_name=db_user.user_name,
        email=db_user.email,
        display_name=db_user.display_name,
        password_hash=db_user.password_hash,
        locale=db_user.locale,
        title=db_user.title,
        active=bool(db_user.active),
        enabled=bool(db_user.enabled),
        primary_group_id=db_user.primary_group_id,
        group_memberships=frozenset(m.group_id for m in db_user.groups)
    )


class UserStore:
    """
    Loads and saves :class:`.User` accounts.

    User names and email addresses are compared and stored lower-cased. The
    database enforces their uniqueness, so two concurrent saves of the same
    name cannot both succeed; the loser gets a :class:`.Conflict`.
    """

    KINDS = ('user_id', 'user_name', 'email')

    def fetch_by_id(self, user_id: int) -> Optional[domain.User]:
        """Load a user by ID."""
        with util.transaction() as session:
            db_user = session.get(DBUser, user_id)
            return None if db_user is None else _to_domain(db_user)

    def fetch_by_username(self, user_name: str) -> Optional[domain.User]:
        """Load a user by (case-insensitive) user name."""
        return self._fetch_by('user_name', user_name.lower())

    def fetch_by_email(self, email: str) -> Optional[domain.User]:
        """Load a user by (case-insensitive) email address."""
        return self._fetch_by('email', email.lower())

    def exists(self, identifier: object, kind: str = 'user_id') -> bool:
        """
        Check whether a user exists.

        Parameters
        ----------
        identifier : int or str
        kind : str
            One of :attr:`KINDS`.

        """
        if kind not in self.KINDS:
            raise ValueError(f'Cannot look up users by {kind}')
        if kind == 'user_id':
            return self.fetch_by_id(int(identifier)) is not None
        with util.transaction() as session:
            column = getattr(DBUser, kind)
            query = session.query(DBUser.user_id) \
                .filter(column == str(identifier).lower())
            return session.query(query.exists()).scalar()

    def save(self, user: domain.User) -> domain.User:
        """
        Create or update a user, with its group memberships.

        Returns
        -------
        :class:`.User`
            As stored, with ``user_id`` set.

        Raises
        ------
        :class:`.Conflict`
            If the user name or email address belongs to another account.

        """
        try:
            with util.transaction() as session:
                db_user = self._apply(session, user)
                session.add(db_user)
                session.commit()
                logger.debug('Saved user %s', db_user.user_id)
                return _to_domain(db_user)
        except IntegrityError as e:
            raise self._conflict(user) from e

    def _fetch_by(self, column: str, value: str) -> Optional[domain.User]:
        with util.transaction() as session:
            db_user = session.query(DBUser) \
                .filter(getattr(DBUser, column) == value) \
                .first()
            return None if db_user is None else _to_domain(db_user)

    def _apply(self, session: Session, user: domain.User) -> DBUser:
        db_user: Optional[DBUser] = None
        if user.user_id is not None:
            db_user = session.get(DBUser, user.user_id)
        if db_user is None:
            db_user = DBUser(user_id=user.user_id)
        db_user.user_name = user.user_name.lower()
        db_user.email = user.email.lower()
        db_user.display_name = user.display_name
        db_user.password_hash = user.password_hash
        db_user.locale = user.locale
        db_user.title = user.title
        db_user.active = int(user.active)
        db_user.enabled = int(user.enabled)
        db_user.primary_group_id = user.primary_group_id

        extant = {m.group_id: m for m in db_user.groups}
        for group_id in set(extant) - set(user.group_memberships):
            db_user.groups.remove(extant[group_id])
        for group_id in set(user.group_memberships) - set(extant):
            db_user.groups.append(DBUserGroup(group_id=group_id))
        return db_user

    def _conflict(self, user: domain.User) -> Conflict:
        """Work out which unique field a failed write collided on."""
        codes = []
        other = self.fetch_by_username(user.user_name)
        if other is not None and other.user_id != user.user_id:
            codes.append(USERNAME_IN_USE)
        other = self.fetch_by_email(user.email)
        if other is not None and other.user_id != user.user_id:
            codes.append(EMAIL_IN_USE)
        logger.info('Write conflict saving user %s: %s', user.user_name,
                    codes)
        return Conflict(codes or [USERNAME_IN_USE, EMAIL_IN_USE])
