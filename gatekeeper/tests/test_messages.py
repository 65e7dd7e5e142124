"""Tests for :mod:`gatekeeper.messages`."""

from unittest import TestCase

from ..domain import Message
from ..messages import MessageStream


class TestMessageStream(TestCase):
    """Tests for :class:`.MessageStream`."""

    def test_order_is_kept(self):
        """Messages come out in the order they went in, duplicates too."""
        messages = MessageStream()
        messages.add(Message.DANGER, 'FOO')
        messages.add(Message.WARNING, 'BAR', user_name='alice')
        messages.add(Message.DANGER, 'FOO')
        self.assertEqual(messages.drain(), [
            Message('danger', 'FOO', {}),
            Message('warning', 'BAR', {'user_name': 'alice'}),
            Message('danger', 'FOO', {}),
        ])

    def test_drain_clears(self):
        """A drained message is gone."""
        messages = MessageStream()
        messages.add(Message.SUCCESS, 'FOO')
        messages.drain()
        self.assertEqual(messages.drain(), [])
        messages.add(Message.SUCCESS, 'BAR')
        self.assertEqual([m.code for m in messages.drain()], ['BAR'])

    def test_unknown_severity(self):
        """Only the known severities are allowed."""
        with self.assertRaises(ValueError):
            MessageStream().add('info', 'FOO')
