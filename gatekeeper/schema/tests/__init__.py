"""Tests for :mod:`gatekeeper.schema`."""
