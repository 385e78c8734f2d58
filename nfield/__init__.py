"""
Nfield SDK
==========

Asynchronous Python client for the Nfield survey platform REST API.

This package provides:
- IoC wiring (kernel, dependency resolver, SDK initializer)
- Connection bootstrap with domain/user/password sign-in
- Typed services for interviewers, surveys, sampling points, survey scripts,
  survey data downloads and background tasks
- A sample program exercising the full service surface
"""

__version__ = "1.0.0"
__author__ = "Nfield SDK Team"
