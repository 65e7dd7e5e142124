"""Tests for :mod:`gatekeeper.services.sessions`."""

from unittest import TestCase

from ..sessions import SessionStore


class TestSessionStore(TestCase):
    """Tests for :class:`.SessionStore`."""

    def test_guest(self):
        """A new session has no identity."""
        self.assertIsNone(SessionStore().current_identity())

    def test_bind_and_clear(self):
        """Binding attaches an identity; clearing forgets everything."""
        data = {'foo': 'bar'}
        sessions = SessionStore(data)
        sessions.bind(42)
        sessions.set_captcha_digest('abc123')
        self.assertEqual(sessions.current_identity(), 42)
        self.assertEqual(sessions.get_captcha_digest(), 'abc123')
        self.assertEqual(data['user_id'], 42, 'Writes through to the mapping')

        sessions.clear()
        self.assertIsNone(sessions.current_identity())
        self.assertIsNone(sessions.get_captcha_digest())
        self.assertEqual(data, {})

    def test_other_keys_left_alone(self):
        """Only the identity and CAPTCHA keys of the mapping are written."""
        data = {'_fresh': True}
        sessions = SessionStore(data)
        sessions.bind(7)
        sessions.set_captcha_digest('abc123')
        self.assertEqual(data, {'_fresh': True, 'user_id': 7,
                                'captcha': 'abc123'})
        self.assertFalse(hasattr(sessions, '__getitem__'),
                         'The store is a view, not a mapping')
