"""
Validation operations that a request schema can declare.

Each entry in :data:`VALIDATORS` is a factory that takes the rule's message
code and its schema parameters and returns a WTForms validator. Operations
are applied to sanitized values, which may not be of the type the rule
expects (e.g. an ``int`` sanitizer that could not parse its input); such a
value fails the rule rather than raising.
"""

from typing import Any, Callable, Dict, Sequence

from wtforms import Field, Form
from wtforms.validators import AnyOf, Email, EqualTo, Length, NoneOf, \
    NumberRange, Regexp, ValidationError

WTFValidator = Callable[[Form, Field], None]


def length(message: str, min: int = -1, max: int = -1) -> WTFValidator:
    """String length between ``min`` and ``max`` (either may be omitted)."""
    return Length(min=min, max=max, message=message)


def regex(message: str, pattern: str) -> WTFValidator:
    """Value matches ``pattern`` from the start."""
    return Regexp(pattern, message=message)


def email(message: str) -> WTFValidator:
    """Value is a syntactically valid email address."""
    return Email(message=message)


def matches(message: str, field: str) -> WTFValidator:
    """Value equals the value of another field, e.g. a confirmation."""
    return EqualTo(field, message=message)


def member_of(message: str, values: Sequence[Any]) -> WTFValidator:
    """Value is one of ``values``."""
    return AnyOf(list(values), message=message)


def not_member_of(message: str, values: Sequence[Any]) -> WTFValidator:
    """Value is none of ``values``."""
    return NoneOf(list(values), message=message)


def integer(message: str) -> WTFValidator:
    """Value is an integer (use with the ``int`` sanitizer)."""
    def _check(form: Form, field: Field) -> None:
        if isinstance(field.data, bool) or not isinstance(field.data, int):
            raise ValidationError(message)
    return _check


def number_range(message: str, min: Any = None,
                 max: Any = None) -> WTFValidator:
    """Number between ``min`` and ``max``, inclusive."""
    return NumberRange(min=min, max=max, message=message)


VALIDATORS: Dict[str, Callable[..., WTFValidator]] = {
    'length': length,
    'regex': regex,
    'email': email,
    'matches': matches,
    'member_of': member_of,
    'not_member_of': not_member_of,
    'integer': integer,
    'range': number_range,
}
