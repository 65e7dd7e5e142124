"""
Sanitize and validate raw request data against a :class:`.RequestSchema`.

Each request is bound to a throwaway WTForms form built from the schema:
sanitizers become field filters and schema rules become field validators.
Sanitizing binds and processes the form; validating runs every rule and
collects every failure, so that a field that breaks two rules yields two
:class:`.FieldError` entries.
"""

import logging
from typing import Any, Dict, Mapping

from werkzeug.datastructures import MultiDict
from wtforms import Field, StringField
from wtforms.form import BaseForm
from wtforms.validators import StopValidation, ValidationError

from ..domain import Accepted, FieldError, FieldRules, Rejected, \
    RequestSchema, RuleSpec, ValidationOutcome
from .sanitizers import SANITIZERS
from .validators import VALIDATORS

logger = logging.getLogger(__name__)


def is_missing(value: Any) -> bool:
    """A value that counts as not provided."""
    return value is None or value == ''


class Presence:
    """
    First validator of every field.

    Stops evaluation for a missing value: a required field reports a single
    ``required`` violation, an optional one is simply not checked further.
    """

    def __init__(self, rules: FieldRules) -> None:
        self.rules = rules

    def __call__(self, form: BaseForm, field: Field) -> None:
        if not is_missing(field.data):
            return
        if self.rules.required:
            raise StopValidation(FieldError(field.short_name, 'required',
                                            self.rules.required_message))
        raise StopValidation()


class Rule:
    """A schema rule whose failure is reported as a :class:`.FieldError`."""

    def __init__(self, spec: RuleSpec) -> None:
        self.spec = spec
        self.check = VALIDATORS[spec.name](spec.message, **spec.params)

    def __call__(self, form: BaseForm, field: Field) -> None:
        try:
            self.check(form, field)
        # ValidationError is a ValueError; TypeError means a value of the
        # wrong type reached the rule.
        except (ValueError, TypeError) as e:
            raise ValidationError(FieldError(field.short_name, self.spec.name,
                                             self.spec.message)) from e


class SanitizedRequest:
    """A request after sanitization, still bound to its schema rules."""

    def __init__(self, schema: RequestSchema, form: BaseForm) -> None:
        self.schema = schema
        self.form = form

    @property
    def values(self) -> Dict[str, Any]:
        """Sanitized values of the schema fields that were submitted."""
        return {field.short_name: field.data for field in self.form
                if field.raw_data and not is_missing(field.data)}


def _bind(schema: RequestSchema) -> BaseForm:
    return BaseForm([
        (name, StringField(
            name,
            filters=[SANITIZERS[op] for op in rules.sanitizers],
            validators=[Presence(rules)]
            + [Rule(spec) for spec in rules.validators]
        ))
        for name, rules in schema.fields.items()
    ])


def sanitize(schema: RequestSchema, raw: Mapping[str, Any]) \
        -> SanitizedRequest:
    """
    Apply the schema's sanitizers to a raw submission.

    Fields that are not in the schema are dropped. Never fails.

    Parameters
    ----------
    schema : :class:`.RequestSchema`
    raw : mapping
        Submitted form data, e.g. :attr:`flask.Request.form`.

    Returns
    -------
    :class:`.SanitizedRequest`

    """
    formdata = raw if hasattr(raw, 'getlist') else MultiDict(raw)
    form = _bind(schema)
    form.process(formdata)
    logger.debug('Sanitized %s request: %s', schema.kind,
                 ', '.join(field.short_name for field in form
                           if field.raw_data))
    return SanitizedRequest(schema, form)


def validate(sanitized: SanitizedRequest) -> ValidationOutcome:
    """
    Evaluate every schema rule against a sanitized request.

    Returns
    -------
    :class:`.Accepted`
        If no rule failed.
    :class:`.Rejected`
        Otherwise, with one :class:`.FieldError` per failure in schema field
        order and then rule order.

    """
    sanitized.form.validate()
    errors = [error for field in sanitized.form for error in field.errors]
    if errors:
        logger.debug('%s request failed validation: %s',
                     sanitized.schema.kind, errors)
        return Rejected(errors, sanitized.values)
    return Accepted(sanitized.values)
