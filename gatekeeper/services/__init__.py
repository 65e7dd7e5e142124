"""
Collaborators of the account request pipeline.

The reference datastore keeps users and groups in a SQL database through
flask-sqlalchemy; session state lives in whatever mapping the caller hands
to :class:`.SessionStore`.
"""

from typing import Any, Mapping, NamedTuple

from ..authorization import FieldAccessPolicy
from ..domain import SiteSettings
from ..schema import DEFINITIONS, SchemaRepository
from .groups import GroupStore
from .sessions import SessionStore
from .users import UserStore


class Services(NamedTuple):
    """Everything a controller needs besides the request itself."""

    schemas: SchemaRepository
    users: UserStore
    groups: GroupStore
    settings: SiteSettings
    policy: FieldAccessPolicy

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'Services':
        """Build the services for an application config."""
        settings = SiteSettings.from_config(config)
        return cls(
            schemas=SchemaRepository(config.get('SCHEMA_PATH', DEFINITIONS)),
            users=UserStore(),
            groups=GroupStore(),
            settings=settings,
            policy=FieldAccessPolicy.default([settings.master_user_id])
        )
