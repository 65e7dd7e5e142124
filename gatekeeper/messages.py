"""
Outcome messages for the client.

Each request gets its own :class:`MessageStream`. Pipeline stages add
severity-tagged message codes as they go, and the caller drains the stream
once when it builds the response. Messages are kept in the order they were
added; a drained message is gone, so a second drain only returns what was
added in between.
"""

import logging
from typing import Any, List

from .domain import Message

logger = logging.getLogger(__name__)


class MessageStream:
    """Append-only sequence of :class:`.Message` for one request."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def add(self, severity: str, code: str, **params: Any) -> None:
        """Append a message; ``params`` fill placeholders in the translation."""
        if severity not in Message.SEVERITIES:
            raise ValueError(f'Unknown severity: {severity}')
        logger.debug('Message %s: %s', severity, code)
        self._messages.append(Message(severity, code, dict(params)))

    def drain(self) -> List[Message]:
        """Remove and return every message added so far."""
        messages, self._messages = self._messages, []
        return messages
