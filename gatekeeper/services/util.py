"""Helpers and Flask application integration for the datastore."""

import logging
from contextlib import contextmanager
from typing import Generator

from flask import Flask
from sqlalchemy.orm.session import Session

from .models import db, DBGroup

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = 'User'
DEFAULT_GROUP_TITLE = 'New Member'


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """Context manager for database transaction."""
    try:
        yield db.session
        # The caller may have explicitly committed already, in order to
        # implement exception handling logic. We only want to commit here if
        # there is anything remaining that is not flushed.
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except Exception as e:
        logger.warning('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def init_app(app: Flask) -> None:
    """Attach the database session to the application."""
    db.init_app(app)


def create_all() -> None:
    """Create all tables, and a default primary group if there is none."""
    db.create_all()
    with transaction() as session:
        if session.query(DBGroup).count() == 0:
            logger.info('Creating default primary group %s',
                        DEFAULT_GROUP_NAME)
            session.add(DBGroup(name=DEFAULT_GROUP_NAME,
                                is_default=DBGroup.DEFAULT_PRIMARY,
                                new_user_title=DEFAULT_GROUP_TITLE))


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()
