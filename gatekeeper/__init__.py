"""
Account-lifecycle request pipeline.

gatekeeper sits between an incoming login, registration, or account-settings
request and a persisted, authorized change to a user account. Raw form data
is run through an ordered series of stages:

1. The spam filter rejects submissions that tamper with the honeypot field.
2. The request schema for the request kind sanitizes and then validates the
   submitted fields, collecting every violation rather than the first.
3. Business rules that cannot be expressed per field (master account exists,
   registration is open, the CAPTCHA matches, user name and email are free)
   are checked, and their failures are collected alongside the field errors.
4. For account settings, each property the user is trying to change is
   authorized individually against an authorization policy.
5. Credentials are hashed or verified, and the session is bound to the
   authenticated user.
6. The account is created or updated in a single transaction.

Every stage reports its outcome through a request-scoped
:class:`gatekeeper.messages.MessageStream`, which the caller drains to build
the response. Collaborators (schemas, user and group stores, site settings,
authorization policy, session) are passed in explicitly; see
:mod:`gatekeeper.services`.

The Flask application in :mod:`gatekeeper.factory` exposes the pipeline as a
small JSON API backed by a flask-sqlalchemy datastore and the Flask cookie
session.
"""
