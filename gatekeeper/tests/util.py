"""Testing helpers."""

from contextlib import contextmanager
from typing import Any, Dict, Generator

from flask import Flask
from sqlalchemy.orm.session import Session

from ..authorization import FieldAccessPolicy
from ..domain import SiteSettings, User
from ..passwords import hash_password
from ..schema import SchemaRepository
from ..services import Services, util
from ..services.groups import GroupStore
from ..services.users import UserStore

FAST_HASH = 'pbkdf2:sha256:1000'
"""Cheap enough to hash many passwords in a test run."""

PASSWORD = 'thepassword'


@contextmanager
def temporary_db(db_uri: str = 'sqlite:///:memory:', create: bool = True,
                 drop: bool = True) -> Generator[Session, None, None]:
    """Provide an in-memory sqlite database for testing purposes."""
    app = Flask('foo')
    app.config['SQLALCHEMY_DATABASE_URI'] = db_uri
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    util.init_app(app)

    with app.app_context():
        if create:
            util.create_all()
        try:
            with util.transaction() as session:
                yield session
        finally:
            if drop:
                util.drop_all()


def make_settings(**overrides: Any) -> SiteSettings:
    """Site settings suitable for tests."""
    params: Dict[str, Any] = {
        'captcha_secret': 'foosecret',
        'password_hash_method': FAST_HASH,
        'available_locales': ('en_US', 'fr_FR'),
        'enable_captcha': False,
    }
    params.update(overrides)
    return SiteSettings(**params)


def make_services(**overrides: Any) -> Services:
    """Services backed by the current app's database."""
    settings = make_settings(**overrides)
    return Services(
        schemas=SchemaRepository(),
        users=UserStore(),
        groups=GroupStore(),
        settings=settings,
        policy=FieldAccessPolicy.default([settings.master_user_id])
    )


def add_user(users: UserStore, user_name: str, email: str,
             password: str = PASSWORD, **kwargs: Any) -> User:
    """Save an active account with a known password."""
    kwargs.setdefault('active', True)
    kwargs.setdefault('locale', 'en_US')
    kwargs.setdefault('display_name', user_name.title())
    return users.save(User(user_name=user_name, email=email,
                           password_hash=hash_password(password, FAST_HASH),
                           **kwargs))


def add_master(users: UserStore) -> User:
    """Create the master account that registration and login depend on."""
    return add_user(users, 'master', 'master@example.com', user_id=1)


def registration_form(**overrides: Any) -> Dict[str, Any]:
    """A registration submission that passes every check."""
    form = {
        'user_name': 'alice',
        'display_name': 'Alice Liddell',
        'email': 'alice@example.com',
        'password': 'correcthorse',
        'passwordc': 'correcthorse',
        'spiderbro': 'http://',
        'csrf_token': 'footoken',
    }
    form.update(overrides)
    return {key: value for key, value in form.items() if value is not None}
