"""
Test Utilities
==============

Common utilities and helpers for testing.
"""

from .fake_nfield import FakeNfieldBackend
