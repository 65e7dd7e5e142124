"""
Honeypot spam filter.

Registration forms carry a field that is hidden from people (``spiderbro``
by default) and pre-filled with a sentinel value. Bots tend to drop or
overwrite it. A submission without the exact sentinel is refused before
any other processing, with a message that does not give away why.
"""

import logging
from typing import Any, Dict, Mapping

from .domain import Message, SiteSettings
from .exceptions import SpamRejected
from .messages import MessageStream

logger = logging.getLogger(__name__)

REJECTED = 'REQUEST_REJECTED'
MASK = '********'


def _masked(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: MASK if 'password' in key.lower() else value
            for key, value in raw.items()}


def check(raw: Mapping[str, Any], settings: SiteSettings,
          messages: MessageStream) -> None:
    """
    Refuse the submission unless the honeypot holds its sentinel value.

    Raises
    ------
    :class:`.SpamRejected`

    """
    if raw.get(settings.honeypot_field) == settings.honeypot_value:
        return
    logger.warning('Possible spam received: %s', _masked(raw))
    messages.add(Message.DANGER, REJECTED)
    raise SpamRejected([REJECTED])
