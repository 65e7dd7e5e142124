"""Tests for :mod:`gatekeeper.accounts`."""

from unittest import TestCase, mock

from .. import accounts
from ..domain import Group
from ..exceptions import Conflict, RegistrationFailed
from ..services.groups import GroupStore
from ..services.users import UserStore
from .util import add_user, make_settings, temporary_db

VALUES = {
    'user_name': 'Alice',
    'email': 'Alice@Example.com',
    'display_name': 'Alice Liddell',
    'password_hash': 'foohash',
}


class TestCreate(TestCase):
    """Tests for :func:`.accounts.create`."""

    def setUp(self):
        """Start with a fresh database."""
        db = temporary_db()
        db.__enter__()
        self.addCleanup(db.__exit__, None, None, None)
        self.users = UserStore()
        self.groups = GroupStore()

    def test_create(self):
        """A new account joins the default groups."""
        readers = self.groups.save(Group(name='Readers', is_default=True))
        self.groups.save(Group(name='Staff'))
        primary = self.groups.fetch_default_primary()
        user = accounts.create(VALUES, self.users, self.groups,
                               make_settings(default_locale='fr_FR'))

        self.assertEqual(user.user_name, 'alice')
        self.assertEqual(user.email, 'alice@example.com')
        self.assertEqual(user.locale, 'fr_FR')
        self.assertEqual(user.primary_group_id, primary.group_id)
        self.assertEqual(user.title, primary.new_user_title)
        self.assertEqual(user.group_memberships,
                         {primary.group_id, readers.group_id})
        self.assertEqual(self.users.fetch_by_id(user.user_id), user)

    def test_activation(self):
        """New accounts are active unless activation is required."""
        user = accounts.create(VALUES, self.users, self.groups,
                               make_settings(require_activation=True))
        self.assertFalse(user.active)
        user = accounts.create(dict(VALUES, user_name='bob',
                                    email='bob@example.com'),
                               self.users, self.groups,
                               make_settings(require_activation=False))
        self.assertTrue(user.active)

    def test_no_default_primary_group(self):
        """Registration fails without a default primary group."""
        groups = mock.MagicMock(spec=GroupStore)
        groups.fetch_default_primary.return_value = None
        with self.assertRaises(RegistrationFailed):
            accounts.create(VALUES, self.users, groups, make_settings())
        self.assertIsNone(self.users.fetch_by_username('alice'))

    def test_taken_meanwhile(self):
        """A name taken since the checks ran is still a conflict."""
        add_user(self.users, 'alice', 'other@example.com')
        with self.assertRaises(Conflict):
            accounts.create(VALUES, self.users, self.groups, make_settings())


class TestUpdate(TestCase):
    """Tests for :func:`.accounts.update`."""

    def setUp(self):
        """Start with one user."""
        db = temporary_db()
        db.__enter__()
        self.addCleanup(db.__exit__, None, None, None)
        self.users = UserStore()
        self.user = add_user(self.users, 'alice', 'alice@example.com')

    def test_update(self):
        """Only the given fields change."""
        user = accounts.update(self.user, {'display_name': 'Al',
                                           'email': 'AL@example.com'},
                               self.users)
        self.assertEqual(user.display_name, 'Al')
        self.assertEqual(user.email, 'al@example.com')
        self.assertEqual(user.locale, self.user.locale)
        self.assertEqual(user.password_hash, self.user.password_hash)
        self.assertEqual(self.users.fetch_by_id(self.user.user_id), user)

    def test_update_conflict(self):
        """Nothing changes if the new email is taken."""
        add_user(self.users, 'bob', 'bob@example.com')
        with self.assertRaises(Conflict):
            accounts.update(self.user, {'display_name': 'Al',
                                        'email': 'bob@example.com'},
                            self.users)
        self.assertEqual(self.users.fetch_by_id(self.user.user_id),
                         self.user)
