"""Tests for :mod:`gatekeeper.controllers`."""
