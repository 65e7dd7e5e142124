"""SQLAlchemy models for the reference account datastore."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Column, DateTime, ForeignKey, Integer, SmallInteger, \
    String, UniqueConstraint
from sqlalchemy.orm import relationship

db: SQLAlchemy = SQLAlchemy()


class DBGroup(db.Model):
    """Persistence for :class:`domain.Group`."""

    __tablename__ = 'group'

    NOT_DEFAULT = 0
    DEFAULT = 1
    DEFAULT_PRIMARY = 2

    group_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    is_default = Column(SmallInteger, nullable=False, default=NOT_DEFAULT)
    new_user_title = Column(String(150), nullable=False, default='')

    members = relationship('DBUserGroup', back_populates='group')


class DBUser(db.Model):
    """Persistence for :class:`domain.User`."""

    __tablename__ = 'user'
    __table_args__ = (
        UniqueConstraint('user_name', name='uq_user_user_name'),
        UniqueConstraint('email', name='uq_user_email'),
    )

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(50), nullable=False)
    email = Column(String(150), nullable=False)
    display_name = Column(String(50), nullable=False, default='')
    password_hash = Column(String(255), nullable=False, default='')
    locale = Column(String(10), nullable=False, default='')
    title = Column(String(150), nullable=False, default='')
    active = Column(SmallInteger, nullable=False, default=0)
    enabled = Column(SmallInteger, nullable=False, default=1)
    primary_group_id = Column(ForeignKey('group.group_id'), nullable=True)
    sign_up_stamp = Column(DateTime, default=datetime.now)

    groups = relationship('DBUserGroup', back_populates='user',
                          lazy='joined', cascade='all, delete-orphan')


class DBUserGroup(db.Model):
    """Membership of a user in a group."""

    __tablename__ = 'user_group'

    user_id = Column(ForeignKey('user.user_id'), primary_key=True)
    group_id = Column(ForeignKey('group.group_id'), primary_key=True)

    user = relationship('DBUser', back_populates='groups')
    group = relationship('DBGroup', back_populates='members')
