"""
Sanitizer operations.

A sanitizer turns a submitted value into its cleaned form. Sanitizers are
total: a value they cannot handle (including ``None`` for a field that was
not submitted) is returned unchanged, and it is up to the validators to flag
it.
"""

from typing import Any, Callable, Dict

from markupsafe import escape as _escape

TRUE_VALUES = ('1', 'true', 'on', 'yes')
FALSE_VALUES = ('0', 'false', 'off', 'no', '')


def trim(value: Any) -> Any:
    """Strip leading and trailing whitespace."""
    return value.strip() if isinstance(value, str) else value


def lower(value: Any) -> Any:
    """Lower-case the value."""
    return value.lower() if isinstance(value, str) else value


def upper(value: Any) -> Any:
    """Upper-case the value."""
    return value.upper() if isinstance(value, str) else value


def collapse(value: Any) -> Any:
    """Replace each run of whitespace with a single space."""
    return ' '.join(value.split()) if isinstance(value, str) else value


def to_int(value: Any) -> Any:
    """Coerce to an integer, if the value parses as one."""
    if not isinstance(value, str):
        return value
    try:
        return int(value)
    except ValueError:
        return value


def to_bool(value: Any) -> Any:
    """Coerce checkbox-style values to a boolean."""
    if not isinstance(value, str):
        return value
    if value.strip().lower() in TRUE_VALUES:
        return True
    if value.strip().lower() in FALSE_VALUES:
        return False
    return value


def escape(value: Any) -> Any:
    """Replace HTML special characters with entities."""
    return str(_escape(value)) if isinstance(value, str) else value


SANITIZERS: Dict[str, Callable[[Any], Any]] = {
    'trim': trim,
    'lower': lower,
    'upper': upper,
    'collapse': collapse,
    'int': to_int,
    'bool': to_bool,
    'escape': escape,
}
