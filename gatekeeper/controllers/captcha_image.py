"""Provides the CAPTCHA image controller."""

import logging
from http import HTTPStatus
from typing import Optional

from werkzeug.exceptions import BadRequest

from .. import captcha
from ..services.sessions import SessionStore
from .util import ResponseData

logger = logging.getLogger(__name__)


def get(sessions: SessionStore, secret: str,
        font: Optional[str] = None) -> ResponseData:
    """
    Issue a new CAPTCHA challenge and draw it.

    The answer replaces any earlier challenge in the session, so only the
    most recently drawn image can be answered.
    """
    if sessions.current_identity() is not None:
        raise BadRequest('Already logged in')
    image = captcha.render(captcha.new(sessions, secret), font=font)
    return {'image': image, 'mimetype': 'image/png'}, HTTPStatus.OK, {}
