"""
Request schemas: which fields a request kind accepts, and how to clean and
check them.

Schemas are JSON documents, one per request kind, in the directory named by
the ``SCHEMA_PATH`` config parameter (the bundled ``definitions`` directory by
default). A definition maps each field name to its rules::

    {
        "user_name": {
            "required": true,
            "required_message": "ACCOUNT_SPECIFY_USERNAME",
            "sanitizers": ["trim", "lower"],
            "validators": [
                {"rule": "length", "min": 1, "max": 25,
                 "message": "ACCOUNT_USER_CHAR_LIMIT"}
            ]
        }
    }

Field order in the document is the order in which fields are validated and
errors are reported. A loaded :class:`.RequestSchema` is read-only and may be
shared by concurrent requests.
"""

import json
import logging
import os
import threading
from collections import OrderedDict
from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..domain import FieldRules, RequestSchema, RuleSpec
from ..exceptions import SchemaError
from .forms import SanitizedRequest, sanitize, validate
from .sanitizers import SANITIZERS
from .validators import VALIDATORS

logger = logging.getLogger(__name__)

DEFINITIONS = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           'definitions')

__all__ = ('SchemaRepository', 'SanitizedRequest', 'parse', 'sanitize',
           'validate', 'DEFINITIONS')


def _parse_rule(kind: str, field: str, spec: Mapping[str, Any]) -> RuleSpec:
    params = dict(spec)
    name = params.pop('rule', None)
    if name not in VALIDATORS:
        raise SchemaError(f'{kind}.{field}: unknown validator {name!r}')
    message = params.pop('message', f'VALIDATE_{name.upper()}')
    try:    # Build once, so that bad parameters fail at load time.
        VALIDATORS[name](message, **params)
    except (AssertionError, TypeError, ValueError) as e:
        raise SchemaError(f'{kind}.{field}: bad {name} rule: {e}') from e
    return RuleSpec(name, message, MappingProxyType(params))


def _parse_field(kind: str, field: str,
                 definition: Mapping[str, Any]) -> FieldRules:
    sanitizers = tuple(definition.get('sanitizers', ()))
    for op in sanitizers:
        if op not in SANITIZERS:
            raise SchemaError(f'{kind}.{field}: unknown sanitizer {op!r}')
    return FieldRules(
        sanitizers=sanitizers,
        validators=tuple(_parse_rule(kind, field, spec)
                         for spec in definition.get('validators', ())),
        required=bool(definition.get('required', False)),
        required_message=definition.get('required_message',
                                        FieldRules().required_message)
    )


def parse(kind: str, definition: Mapping[str, Mapping[str, Any]]) \
        -> RequestSchema:
    """
    Build a :class:`.RequestSchema` from its JSON-style definition.

    Raises
    ------
    :class:`.SchemaError`
        If the definition names an unknown operation or passes an operation
        parameters it does not accept.

    """
    if not isinstance(definition, Mapping):
        raise SchemaError(f'{kind}: definition must be an object')
    fields = OrderedDict(
        (field, _parse_field(kind, field, rules))
        for field, rules in definition.items()
    )
    return RequestSchema(kind, MappingProxyType(fields))


class SchemaRepository:
    """Loads and caches request schemas from a directory of JSON files."""

    def __init__(self, path: str = DEFINITIONS) -> None:
        self.path = path
        self._schemas: Dict[str, RequestSchema] = {}
        self._lock = threading.Lock()

    def load(self, kind: str) -> RequestSchema:
        """
        Get the schema for a request kind.

        Parameters
        ----------
        kind : str
            E.g. ``register``; read from ``<path>/<kind>.json``.

        Returns
        -------
        :class:`.RequestSchema`

        Raises
        ------
        :class:`.SchemaError`
            If there is no such schema, or its definition is malformed.

        """
        with self._lock:
            if kind not in self._schemas:
                self._schemas[kind] = self._read(kind)
            return self._schemas[kind]

    def _read(self, kind: str) -> RequestSchema:
        if os.path.basename(kind) != kind:
            raise SchemaError(f'Invalid schema name: {kind}')
        filename = os.path.join(self.path, f'{kind}.json')
        logger.debug('Loading %s schema from %s', kind, filename)
        try:
            with open(filename) as f:
                definition = json.load(f, object_pairs_hook=OrderedDict)
        except FileNotFoundError as e:
            raise SchemaError(f'No schema for {kind}') from e
        except json.JSONDecodeError as e:
            raise SchemaError(f'{kind}: not valid JSON: {e}') from e
        return parse(kind, definition)
