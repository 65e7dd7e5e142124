"""Flask configuration."""
import secrets
import os

#################### Site settings ####################
CAN_REGISTER = bool(int(os.environ.get('CAN_REGISTER', '1')))
"""Whether visitors may create their own accounts."""

ENABLE_CAPTCHA = bool(int(os.environ.get('ENABLE_CAPTCHA', '1')))
"""Require a correct CAPTCHA answer on the registration form."""

REQUIRE_ACTIVATION = bool(int(os.environ.get('REQUIRE_ACTIVATION', '1')))
"""New accounts start inactive until the email address is confirmed.

If false, new accounts are active immediately."""

EMAIL_LOGIN = bool(int(os.environ.get('EMAIL_LOGIN', '1')))
"""Allow users to log in with their email address instead of user name."""

DEFAULT_LOCALE = os.environ.get('DEFAULT_LOCALE', 'en_US')
"""Locale assigned to new accounts."""

AVAILABLE_LOCALES = [
    locale.strip() for locale
    in os.environ.get('AVAILABLE_LOCALES', 'en_US').split(',')
    if locale.strip()
]
"""Locales a user may select on the account settings form.

Comma-separated in the environment, e.g. ``en_US,fr_FR,de_DE``."""

MASTER_USER_ID = int(os.environ.get('MASTER_USER_ID', '1'))
"""ID of the master (first administrative) account.

Nobody can register or log in until this account exists."""


#################### Anti-spam ####################
HONEYPOT_FIELD = os.environ.get('HONEYPOT_FIELD', 'spiderbro')
"""Hidden form field that a human visitor never changes."""

HONEYPOT_VALUE = os.environ.get('HONEYPOT_VALUE', 'http://')
"""Value that the honeypot field must be submitted with."""

CAPTCHA_SECRET = os.environ.get('CAPTCHA_SECRET', secrets.token_urlsafe(16))
"""Key for the digest of the CAPTCHA answer stored in the session.

The Flask session is a signed (not encrypted) cookie, so the answer is keyed
with this secret to keep it from being recovered by the client."""

CAPTCHA_FONT = os.environ.get('CAPTCHA_FONT', None)
"""Path to a TrueType font for drawing CAPTCHA images.

If not set, the fonts bundled with the ``captcha`` package are used."""


#################### Credentials ####################
PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'scrypt')
"""Hash method passed to :func:`werkzeug.security.generate_password_hash`."""


#################### Request schemas ####################
SCHEMA_PATH = os.environ.get(
    'SCHEMA_PATH',
    os.path.join(os.path.dirname(os.path.abspath(__file__)),
                 'schema', 'definitions')
)
"""Directory containing one ``<request kind>.json`` file per request kind."""


#################### Database ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///gatekeeper.db')

SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', 0)))
"""Create tables and the default group on startup."""


#################### Minor configs ##############################
SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Sets the `Flask` secret key used to sign the session cookie."""

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_SECURE = bool(int(os.environ.get('SESSION_COOKIE_SECURE', '1')))

DEFAULT_LOGOUT_REDIRECT_URL = os.environ.get('DEFAULT_LOGOUT_REDIRECT_URL', '/')
"""URL to redirect the user to on a logout."""

LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))
"""Level for the JSON log handler installed by the application factory."""

VERSION = '0.1.0'
