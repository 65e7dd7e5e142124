"""Tests for :mod:`gatekeeper.schema`."""

import json
import os
import tempfile
from unittest import TestCase

from hypothesis import given, settings, strategies as st
from werkzeug.datastructures import MultiDict

from ...domain import Accepted, FieldError, Rejected
from ...exceptions import SchemaError
from .. import SchemaRepository, parse, sanitize, validate
from ..sanitizers import SANITIZERS


class TestSanitizers(TestCase):
    """Sanitizers are total, and leave values they cannot handle alone."""

    def test_trim_and_case(self):
        """String sanitizers do what they say."""
        self.assertEqual(SANITIZERS['trim']('  Foo '), 'Foo')
        self.assertEqual(SANITIZERS['lower']('FoO'), 'foo')
        self.assertEqual(SANITIZERS['upper']('fOo'), 'FOO')
        self.assertEqual(SANITIZERS['collapse']('a \t b\n c'), 'a b c')

    def test_coercion(self):
        """Values are coerced where they can be."""
        self.assertEqual(SANITIZERS['int'](' 42 '), 42)
        self.assertEqual(SANITIZERS['int']('forty-two'), 'forty-two')
        self.assertIs(SANITIZERS['bool']('on'), True)
        self.assertIs(SANITIZERS['bool']('0'), False)
        self.assertEqual(SANITIZERS['bool']('maybe'), 'maybe')

    def test_escape(self):
        """HTML special characters are escaped."""
        self.assertEqual(SANITIZERS['escape']('<b>'), '&lt;b&gt;')

    @given(st.sampled_from(sorted(SANITIZERS)))
    def test_none_passes_through(self, name):
        """An unsubmitted value stays unsubmitted."""
        self.assertIsNone(SANITIZERS[name](None))


class TestParse(TestCase):
    """Tests for :func:`.parse`."""

    def test_field_order_is_kept(self):
        """Fields are validated in the order they are defined."""
        schema = parse('foo', {'b': {}, 'a': {}, 'c': {}})
        self.assertEqual(list(schema.fields), ['b', 'a', 'c'])

    def test_schema_is_read_only(self):
        """A loaded schema cannot be changed."""
        schema = parse('foo', {'a': {}})
        with self.assertRaises(TypeError):
            schema.fields['b'] = schema.fields['a']    # type: ignore

    def test_unknown_sanitizer(self):
        """An unknown sanitizer is a schema error."""
        with self.assertRaises(SchemaError):
            parse('foo', {'a': {'sanitizers': ['frobnicate']}})

    def test_unknown_validator(self):
        """An unknown validator is a schema error."""
        with self.assertRaises(SchemaError):
            parse('foo', {'a': {'validators': [{'rule': 'frobnicate'}]}})

    def test_bad_parameters(self):
        """Parameters that a validator does not take are a schema error."""
        with self.assertRaises(SchemaError):
            parse('foo', {'a': {'validators': [
                {'rule': 'length', 'minimum': 3}
            ]}})

    def test_default_message(self):
        """A rule without a message gets one named after the rule."""
        schema = parse('foo', {'a': {'validators': [{'rule': 'email'}]}})
        self.assertEqual(schema.fields['a'].validators[0].message,
                         'VALIDATE_EMAIL')


class TestSchemaRepository(TestCase):
    """Tests for :class:`.SchemaRepository`."""

    def test_bundled_definitions(self):
        """The bundled schemas load."""
        repository = SchemaRepository()
        for kind in ('login', 'register', 'account-settings'):
            self.assertEqual(repository.load(kind).kind, kind)

    def test_schemas_are_cached(self):
        """A schema is read once and then shared."""
        repository = SchemaRepository()
        self.assertIs(repository.load('login'), repository.load('login'))

    def test_missing_schema(self):
        """There is no schema for an unknown request kind."""
        with self.assertRaises(SchemaError):
            SchemaRepository().load('nonesuch')

    def test_path_traversal(self):
        """Only files in the schema directory can be loaded."""
        with self.assertRaises(SchemaError):
            SchemaRepository().load('../schema/definitions/login')

    def test_custom_path(self):
        """Schemas can be loaded from another directory."""
        with tempfile.TemporaryDirectory() as path:
            with open(os.path.join(path, 'foo.json'), 'w') as f:
                json.dump({'bar': {'required': True}}, f)
            schema = SchemaRepository(path).load('foo')
        self.assertTrue(schema.fields['bar'].required)

    def test_invalid_json(self):
        """A definition that is not JSON is a schema error."""
        with tempfile.TemporaryDirectory() as path:
            with open(os.path.join(path, 'foo.json'), 'w') as f:
                f.write('{"bar": ')
            with self.assertRaises(SchemaError):
                SchemaRepository(path).load('foo')


class TestSanitizeAndValidate(TestCase):
    """Tests for :func:`.sanitize` and :func:`.validate`."""

    def setUp(self):
        """Load the registration schema."""
        self.schema = SchemaRepository().load('register')
        self.form = {
            'user_name': '  Alice ',
            'display_name': ' Alice   Liddell ',
            'email': 'Alice@Example.com',
            'password': 'correcthorse',
            'passwordc': 'correcthorse',
            'captcha': ' ab12c ',
            'spiderbro': 'http://',
        }

    def test_valid_request(self):
        """Every value is sanitized, and fields not in the schema dropped."""
        outcome = validate(sanitize(self.schema, self.form))
        self.assertIsInstance(outcome, Accepted)
        self.assertEqual(outcome.values['user_name'], 'alice')
        self.assertEqual(outcome.values['display_name'], 'Alice Liddell')
        self.assertEqual(outcome.values['email'], 'alice@example.com')
        self.assertEqual(outcome.values['captcha'], 'AB12C')
        self.assertNotIn('spiderbro', outcome.values)

    def test_multidict(self):
        """Form data can be passed as submitted."""
        outcome = validate(sanitize(self.schema, MultiDict(self.form)))
        self.assertIsInstance(outcome, Accepted)

    def test_missing_required_field(self):
        """Omitting a required field is a violation for that field."""
        del self.form['email']
        outcome = validate(sanitize(self.schema, self.form))
        self.assertIsInstance(outcome, Rejected)
        self.assertEqual(outcome.errors, [
            FieldError('email', 'required', 'ACCOUNT_SPECIFY_EMAIL')
        ])

    def test_empty_after_sanitizing(self):
        """A value that is empty once trimmed counts as missing."""
        self.form['user_name'] = '    '
        outcome = validate(sanitize(self.schema, self.form))
        self.assertEqual(outcome.errors, [
            FieldError('user_name', 'required', 'ACCOUNT_SPECIFY_USERNAME')
        ])

    def test_two_failing_rules(self):
        """Each rule that a field breaks is its own violation."""
        self.form['user_name'] = 'x' * 30 + '!'
        outcome = validate(sanitize(self.schema, self.form))
        self.assertEqual(outcome.errors, [
            FieldError('user_name', 'length', 'ACCOUNT_USER_CHAR_LIMIT'),
            FieldError('user_name', 'regex',
                       'ACCOUNT_USER_INVALID_CHARACTERS'),
        ])

    def test_errors_in_field_order(self):
        """Violations are listed by field, then by rule."""
        self.form['email'] = 'not an email'
        self.form['password'] = 'short'
        self.form['user_name'] = 'bad name'
        outcome = validate(sanitize(self.schema, self.form))
        self.assertEqual(
            [(error.field, error.rule) for error in outcome.errors],
            [('user_name', 'regex'), ('email', 'email'),
             ('password', 'length'), ('password', 'matches')]
        )

    def test_rejected_keeps_values(self):
        """Sanitized values are still available when validation fails."""
        self.form['password'] = 'short'
        outcome = validate(sanitize(self.schema, self.form))
        self.assertIsInstance(outcome, Rejected)
        self.assertEqual(outcome.values['user_name'], 'alice')

    def test_optional_fields(self):
        """Missing optional fields are not checked."""
        schema = SchemaRepository().load('account-settings')
        outcome = validate(sanitize(schema, {'email': '', 'locale': None}))
        self.assertIsInstance(outcome, Accepted)
        self.assertEqual(outcome.values, {})

    def test_wrong_type_fails_rule(self):
        """A value of the wrong type fails its rule instead of raising."""
        schema = parse('foo', {'age': {
            'sanitizers': ['int'],
            'validators': [
                {'rule': 'integer', 'message': 'NOT_INT'},
                {'rule': 'range', 'min': 0, 'max': 150,
                 'message': 'OUT_OF_RANGE'},
            ]
        }})
        outcome = validate(sanitize(schema, {'age': 'old'}))
        self.assertEqual([error.rule for error in outcome.errors],
                         ['integer', 'range'])
        outcome = validate(sanitize(schema, {'age': '42'}))
        self.assertEqual(outcome.values, {'age': 42})

    @settings(max_examples=50)
    @given(st.sets(st.sampled_from(['user_name', 'display_name', 'email',
                                    'password', 'passwordc'])))
    def test_one_violation_per_omitted_field(self, omitted):
        """Every omitted required field is reported exactly once."""
        form = {key: value for key, value in self.form.items()
                if key not in omitted}
        outcome = validate(sanitize(self.schema, form))
        required = {error.field for error in
                    getattr(outcome, 'errors', [])
                    if error.rule == 'required'}
        self.assertEqual(required, set(omitted))
        self.assertEqual(isinstance(outcome, Accepted), not omitted)
