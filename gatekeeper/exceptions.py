"""Exceptions raised when a request is refused."""

from typing import Iterable, List

from .domain import FieldError


class RequestRejected(RuntimeError):
    """
    The request was refused; nothing was changed.

    Attributes
    ----------
    codes : list
        Message codes of the business-level reasons for the refusal.
    errors : list
        :class:`.FieldError` entries for fields that failed validation.

    """

    def __init__(self, codes: Iterable[str] = (),
                 errors: Iterable[FieldError] = ()) -> None:
        self.codes: List[str] = list(codes)
        self.errors: List[FieldError] = list(errors)
        reasons = self.codes + [error.message for error in self.errors]
        super(RequestRejected, self).__init__(', '.join(reasons))


class SpamRejected(RequestRejected):
    """The submission looks automated."""


class ValidationFailed(RequestRejected):
    """One or more fields violate the request schema."""


class BusinessRuleFailed(RequestRejected):
    """A precondition that spans fields or accounts does not hold."""


class Conflict(BusinessRuleFailed):
    """A user name or email address is already taken."""


class NotFound(BusinessRuleFailed):
    """An account that the request depends on does not exist."""


class AuthorizationDenied(RequestRejected):
    """The acting user may not make this change."""


class CredentialInvalid(RequestRejected):
    """The credentials do not check out."""


class RegistrationFailed(RuntimeError):
    """The datastore could not produce a new account."""


class SchemaError(ValueError):
    """A request schema definition is malformed."""
