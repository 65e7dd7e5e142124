"""
Script for creating the master account.

Nobody can register or log in until the account with ``MASTER_USER_ID``
exists, so this is the first thing to run against a new database.
"""

import click

from .domain import User
from .exceptions import Conflict
from .factory import create_web_app
from .passwords import hash_password
from .services import Services, util


@click.command()
@click.option('--username', prompt='Master username')
@click.option('--email', prompt='Master email address')
@click.option('--password', prompt='Master password', hide_input=True,
              confirmation_prompt=True)
@click.option('--display-name', prompt='Display name', default='Admin')
def create_master(username: str, email: str, password: str,
                  display_name: str = 'Admin') -> None:
    """Create the master account, and the tables if needed."""
    app = create_web_app()
    with app.app_context():
        util.create_all()
        services = Services.from_config(app.config)
        settings = services.settings
        if services.users.exists(settings.master_user_id, 'user_id'):
            raise click.ClickException(
                f'User {settings.master_user_id} already exists'
            )
        primary = services.groups.fetch_default_primary()
        memberships = frozenset() if primary is None \
            else frozenset({primary.group_id})
        try:
            user = services.users.save(User(
                user_id=settings.master_user_id,
                user_name=username.strip().lower(),
                email=email.strip().lower(),
                display_name=display_name,
                password_hash=hash_password(password,
                                            settings.password_hash_method),
                locale=settings.default_locale,
                active=True,
                enabled=True,
                primary_group_id=None if primary is None
                else primary.group_id,
                title='Master Account',
                group_memberships=memberships
            ))
        except Conflict as e:
            raise click.ClickException(', '.join(e.codes)) from e
    click.echo(f'Created master account {user.user_name} '
               f'({user.user_id})')


if __name__ == '__main__':
    create_master()
