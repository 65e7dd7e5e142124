"""
Per-client session state.

:class:`SessionStore` is a thin view over the client's session mapping
(usually :data:`flask.session`). The pipeline only ever attaches an
authenticated identity, clears it, and stashes a CAPTCHA digest; where and
how the mapping is persisted is up to the caller.
"""

import logging
from typing import Any, MutableMapping, Optional

logger = logging.getLogger(__name__)


class SessionStore:
    """Identity and CAPTCHA state for one client."""

    USER_KEY = 'user_id'
    CAPTCHA_KEY = 'captcha'

    def __init__(self, data: Optional[MutableMapping[str, Any]] = None) \
            -> None:
        self._data: MutableMapping[str, Any] = {} if data is None else data

    def current_identity(self) -> Optional[int]:
        """ID of the authenticated user, or ``None`` for a guest."""
        user_id = self._data.get(self.USER_KEY)
        return None if user_id is None else int(user_id)

    def bind(self, user_id: int) -> None:
        """Attach an authenticated identity to the session."""
        logger.debug('Binding session to user %s', user_id)
        self._data[self.USER_KEY] = user_id

    def clear(self) -> None:
        """Forget everything, including the identity."""
        logger.debug('Clearing session')
        self._data.clear()

    def get_captcha_digest(self) -> Optional[str]:
        """Digest of the answer to the current CAPTCHA challenge."""
        return self._data.get(self.CAPTCHA_KEY)

    def set_captcha_digest(self, digest: str) -> None:
        """Store the digest for a newly issued CAPTCHA challenge."""
        self._data[self.CAPTCHA_KEY] = digest
