"""Helpers for :mod:`gatekeeper.controllers`."""

from http import HTTPStatus
from typing import Any, Dict, Tuple
from urllib.parse import urlparse

from ..domain import Message
from ..exceptions import AuthorizationDenied, BusinessRuleFailed, \
    Conflict, CredentialInvalid, NotFound, RequestRejected, SpamRejected, \
    ValidationFailed
from ..messages import MessageStream

ResponseData = Tuple[dict, int, dict]

STATUS = [
    (SpamRejected, HTTPStatus.INTERNAL_SERVER_ERROR),
    (NotFound, HTTPStatus.FORBIDDEN),
    (AuthorizationDenied, HTTPStatus.FORBIDDEN),
    (CredentialInvalid, HTTPStatus.FORBIDDEN),
    (ValidationFailed, HTTPStatus.BAD_REQUEST),
    (BusinessRuleFailed, HTTPStatus.BAD_REQUEST),
]
"""Response status for each kind of refusal; first match wins."""


def refused(error: RequestRejected) -> ResponseData:
    """Response data for a refused request."""
    code = next((status for kind, status in STATUS
                 if isinstance(error, kind)), HTTPStatus.BAD_REQUEST)
    data: Dict[str, Any] = {
        'errors': [dict(field_error._asdict())
                   for field_error in error.errors]
    }
    return data, code, {}


def report_conflict(error: Conflict, messages: MessageStream) -> None:
    """Tell the client about a uniqueness conflict found at write time."""
    for code in error.codes:
        messages.add(Message.DANGER, code)


def good_next_page(next_page: str) -> bool:
    """Only relative paths on this site are acceptable redirect targets."""
    if not next_page or not next_page.startswith('/') \
            or next_page.startswith('//'):
        return False
    parsed = urlparse(next_page)
    return not parsed.scheme and not parsed.netloc
