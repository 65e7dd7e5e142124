"""Tests for :mod:`gatekeeper`."""
