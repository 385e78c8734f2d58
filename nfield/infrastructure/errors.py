"""
SDK Errors
==========

Exceptions raised by the Nfield SDK.
"""

from typing import Optional


class NfieldError(Exception):
    """Base class for all SDK errors."""

    pass


class DependencyResolutionError(NfieldError):
    """Raised when a service type cannot be resolved from the container."""

    pass


class NfieldNotSignedInError(NfieldError):
    """Raised when a request is made before a successful sign-in."""

    pass


class NfieldInvalidResponseError(NfieldError):
    """Raised when a server reply does not match the expected record."""

    pass


class NfieldHttpResponseError(NfieldError):
    """
    Raised when the Nfield server answers with a non-success status.

    A status of 0 means the request never got a response (network failure).
    """

    def __init__(self, status: int, message: str, url: Optional[str] = None):
        self.status = status
        self.message = message
        self.url = url
        location = f" ({url})" if url else ""
        super().__init__(f"Nfield request failed with status {status}{location}: {message}")
