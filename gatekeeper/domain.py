"""Defines the core data structures for the gatekeeper pipeline."""

from typing import Any, Dict, FrozenSet, List, Mapping, NamedTuple, \
    Optional, Tuple, Union


class User(NamedTuple):
    """A user account."""

    user_name: str
    """Unique login name. Always stored lower-cased."""

    email: str
    """Unique email address. Always stored lower-cased."""

    display_name: str = ''
    """Name shown to other users."""

    password_hash: str = ''
    """Opaque salted hash; see :mod:`gatekeeper.passwords`."""

    locale: str = ''
    """One of the site's configured locales."""

    active: bool = False
    """Whether the email address has been confirmed."""

    enabled: bool = True
    """Whether the account is administratively allowed to log in."""

    primary_group_id: Optional[int] = None
    """Group that determines the user's title and default privileges."""

    title: str = ''
    """Title, initially the primary group's ``new_user_title``."""

    group_memberships: FrozenSet[int] = frozenset()
    """IDs of all groups to which the user belongs."""

    user_id: Optional[int] = None
    """Assigned by the datastore when the account is first saved."""

    def export(self) -> Dict[str, Any]:
        """Public account details, safe to use as message parameters."""
        return {
            'user_id': self.user_id,
            'user_name': self.user_name,
            'display_name': self.display_name,
            'email': self.email,
            'title': self.title,
            'locale': self.locale,
        }


class Group(NamedTuple):
    """A group of users."""

    name: str
    """Human-readable name of the group."""

    is_default_primary: bool = False
    """New users get this group as their primary group. At most one."""

    is_default: bool = False
    """New users are added to this group."""

    new_user_title: str = ''
    """Title given to new users whose primary group this is."""

    group_id: Optional[int] = None
    """Assigned by the datastore."""


class Message(NamedTuple):
    """An outcome message for the client, to be translated elsewhere."""

    SUCCESS = 'success'
    WARNING = 'warning'
    DANGER = 'danger'
    SEVERITIES = (SUCCESS, WARNING, DANGER)

    severity: str
    """One of :attr:`.SEVERITIES`."""

    code: str
    """Translation key, e.g. ``ACCOUNT_EMAIL_IN_USE``."""

    params: Mapping[str, Any]
    """Placeholders for the translated message."""


class FieldError(NamedTuple):
    """A single violation of a schema rule by a submitted field."""

    field: str
    rule: str
    message: str
    """Translation key for the violation."""


class Accepted(NamedTuple):
    """Outcome of validation when every rule passed."""

    values: Dict[str, Any]
    """Sanitized values of the schema fields that were submitted."""


class Rejected(NamedTuple):
    """Outcome of validation when at least one rule failed."""

    errors: List[FieldError]
    """Every violation, in schema field order and then rule order."""

    values: Dict[str, Any]
    """Sanitized values, for business rules that run despite the errors."""


ValidationOutcome = Union[Accepted, Rejected]


class RuleSpec(NamedTuple):
    """A validation operation declared by a request schema."""

    name: str
    """Name of the operation; see :mod:`gatekeeper.schema.validators`."""

    message: str
    """Translation key reported when the operation fails."""

    params: Mapping[str, Any]
    """Arguments for the operation, e.g. ``{'min': 1, 'max': 25}``."""


class FieldRules(NamedTuple):
    """Everything a request schema says about one field."""

    sanitizers: Tuple[str, ...] = ()
    """Names of sanitizer operations, applied in order."""

    validators: Tuple[RuleSpec, ...] = ()
    """Validation operations, evaluated in order."""

    required: bool = False
    """Whether a missing or empty value is itself a violation."""

    required_message: str = 'VALIDATE_REQUIRED'
    """Translation key reported when a required value is missing."""


class RequestSchema(NamedTuple):
    """Field rules for one kind of request."""

    kind: str
    """E.g. ``login``, ``register``, ``account-settings``."""

    fields: Mapping[str, FieldRules]
    """Ordered, read-only mapping of field name to rules."""


class SiteSettings(NamedTuple):
    """Site-wide switches and policies that govern account requests."""

    can_register: bool = True
    enable_captcha: bool = True
    require_activation: bool = True
    email_login_enabled: bool = True
    default_locale: str = 'en_US'
    available_locales: Tuple[str, ...] = ('en_US',)

    master_user_id: int = 1
    """Registration and login are refused until this account exists."""

    honeypot_field: str = 'spiderbro'
    honeypot_value: str = 'http://'

    captcha_secret: str = ''
    """Key for the CAPTCHA answer digest kept in the session."""

    password_hash_method: str = 'scrypt'

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'SiteSettings':
        """Build settings from a Flask config (see :mod:`gatekeeper.config`)."""
        defaults = cls()
        return cls(
            can_register=bool(config.get('CAN_REGISTER',
                                         defaults.can_register)),
            enable_captcha=bool(config.get('ENABLE_CAPTCHA',
                                           defaults.enable_captcha)),
            require_activation=bool(config.get('REQUIRE_ACTIVATION',
                                               defaults.require_activation)),
            email_login_enabled=bool(config.get('EMAIL_LOGIN',
                                                defaults.email_login_enabled)),
            default_locale=config.get('DEFAULT_LOCALE',
                                      defaults.default_locale),
            available_locales=tuple(config.get('AVAILABLE_LOCALES',
                                               defaults.available_locales)),
            master_user_id=int(config.get('MASTER_USER_ID',
                                          defaults.master_user_id)),
            honeypot_field=config.get('HONEYPOT_FIELD',
                                      defaults.honeypot_field),
            honeypot_value=config.get('HONEYPOT_VALUE',
                                      defaults.honeypot_value),
            captcha_secret=config.get('CAPTCHA_SECRET',
                                      defaults.captcha_secret),
            password_hash_method=config.get('PASSWORD_HASH_METHOD',
                                            defaults.password_hash_method),
        )
