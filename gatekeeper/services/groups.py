"""Group persistence."""

import logging
from typing import List, Optional

from .. import domain
from . import util
from .models import DBGroup

logger = logging.getLogger(__name__)


def _to_domain(db_group: DBGroup) -> domain.Group:
    return domain.Group(
        group_id=db_group.group_id,
        name=db_group.name,
        is_default_primary=db_group.is_default == DBGroup.DEFAULT_PRIMARY,
        is_default=db_group.is_default == DBGroup.DEFAULT,
        new_user_title=db_group.new_user_title
    )


class GroupStore:
    """Loads and saves :class:`.Group` records."""

    def fetch_default_primary(self) -> Optional[domain.Group]:
        """The group that new users get as their primary group."""
        with util.transaction() as session:
            db_group = session.query(DBGroup) \
                .filter(DBGroup.is_default == DBGroup.DEFAULT_PRIMARY) \
                .order_by(DBGroup.group_id) \
                .first()
            return None if db_group is None else _to_domain(db_group)

    def fetch_all_default(self) -> List[domain.Group]:
        """Groups, other than the default primary, that new users join."""
        with util.transaction() as session:
            return [_to_domain(db_group) for db_group in
                    session.query(DBGroup)
                    .filter(DBGroup.is_default == DBGroup.DEFAULT)
                    .order_by(DBGroup.group_id)]

    def save(self, group: domain.Group) -> domain.Group:
        """
        Create or update a group.

        Making a group the default primary group demotes the previous one
        to an ordinary default group, so that there is at most one.
        """
        if group.is_default_primary:
            flag = DBGroup.DEFAULT_PRIMARY
        elif group.is_default:
            flag = DBGroup.DEFAULT
        else:
            flag = DBGroup.NOT_DEFAULT
        with util.transaction() as session:
            db_group = None
            if group.group_id is not None:
                db_group = session.get(DBGroup, group.group_id)
            if db_group is None:
                db_group = DBGroup(group_id=group.group_id)
            if flag == DBGroup.DEFAULT_PRIMARY:
                for other in session.query(DBGroup).filter(
                        DBGroup.is_default == DBGroup.DEFAULT_PRIMARY):
                    if other is not db_group:
                        logger.debug('Demoting default primary group %s',
                                     other.group_id)
                        other.is_default = DBGroup.DEFAULT
            db_group.name = group.name
            db_group.is_default = flag
            db_group.new_user_title = group.new_user_title
            session.add(db_group)
            session.commit()
            return _to_domain(db_group)
