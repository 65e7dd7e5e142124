import pytest

from gatekeeper.factory import create_web_app
from gatekeeper.routes.api import get_services
from gatekeeper.services import util
from gatekeeper.tests.util import FAST_HASH, add_master


@pytest.fixture()
def app():
    app = create_web_app({
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'CREATE_DB': True,
        'SECRET_KEY': f'fake set in {__file__}',
        'SESSION_COOKIE_SECURE': False,
        'PASSWORD_HASH_METHOD': FAST_HASH,
        'ENABLE_CAPTCHA': False,
        'REQUIRE_ACTIVATION': False,
        'AVAILABLE_LOCALES': ['en_US', 'fr_FR'],
        'DEFAULT_LOGOUT_REDIRECT_URL': '/bye',
    })
    with app.app_context():
        add_master(get_services().users)
    yield app
    with app.app_context():
        util.drop_all()


@pytest.fixture()
def client(app):
    yield app.test_client()
