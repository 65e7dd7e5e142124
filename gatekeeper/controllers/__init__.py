"""
Controllers for account requests.

Each controller runs one request through the pipeline and returns
``(data, status, headers)``. Controllers do not touch Flask's request
globals: the submitted form, the client's :class:`.SessionStore`, the
request's :class:`.MessageStream`, and the :class:`.Services` are all passed
in, so that the same controller can be driven from a test or another
framework.
"""
