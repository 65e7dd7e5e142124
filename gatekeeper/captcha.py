"""
CAPTCHA challenges kept in the session.

:func:`new` draws a challenge and stores a keyed digest of the answer in the
client's session; :func:`render` draws the returned text. :func:`check`
compares a submitted answer against that digest. Only the digest is stored,
so the answer cannot be read back out of a signed cookie session.
"""

import hashlib
import hmac
import io
import logging
import secrets
import string
from typing import Optional

from captcha.image import ImageCaptcha

from .services.sessions import SessionStore

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_uppercase + string.digits


def _normalize(value: str) -> str:
    return value.strip().upper()


def digest(value: str, secret: str) -> str:
    """Keyed one-way transform of a CAPTCHA answer."""
    return hmac.new(secret.encode('utf-8'),
                    _normalize(value).encode('utf-8'),
                    hashlib.sha256).hexdigest()


def new(sessions: SessionStore, secret: str, length: int = 5) -> str:
    """
    Generate a new challenge for the client that owns ``sessions``.

    Parameters
    ----------
    sessions : :class:`.SessionStore`
    secret : str
        Server-side key for the answer digest.
    length : int
        Number of characters in the challenge.

    Returns
    -------
    str
        The challenge text, for the renderer to draw.

    """
    value = ''.join(secrets.choice(ALPHABET) for _ in range(length))
    sessions.set_captcha_digest(digest(value, secret))
    logger.debug('Issued new captcha challenge')
    return value


def render(value: str, font: Optional[str] = None) -> io.BytesIO:
    """
    Draw a challenge as a PNG image.

    Parameters
    ----------
    value : str
        Challenge text from :func:`new`.
    font : str
        Path to a TrueType font. The renderer's bundled fonts are used if
        not given.

    Returns
    -------
    :class:`io.BytesIO`
        PNG image data.

    """
    if font is not None:
        image = ImageCaptcha(fonts=[font], width=400)
    else:
        image = ImageCaptcha()
    data: io.BytesIO = image.generate(value)
    return data


def check(sessions: SessionStore, value: Optional[str], secret: str) -> bool:
    """Whether ``value`` answers the challenge stored in the session."""
    expected = sessions.get_captcha_digest()
    if not value or not expected:
        return False
    return hmac.compare_digest(digest(value, secret), expected)
