"""Tests for :mod:`gatekeeper.services`."""
