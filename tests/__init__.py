"""
Test Suite
==========

Test suite matching the nfield/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: Tests against the in-process fake Nfield server
"""
