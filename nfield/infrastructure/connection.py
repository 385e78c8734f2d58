"""
Nfield Connection
=================

HTTP connection to the Nfield REST API. Holds the aiohttp session and the
session token obtained by signing in, and acts as the service locator for
the typed Nfield services.
"""

import asyncio
import json
from typing import Any, Dict, Optional, Type, TypeVar, Union

import aiohttp
from pydantic import BaseModel, ValidationError
from yarl import URL

from nfield.config.logging import get_logger
from nfield.config.settings import NfieldSettings
from nfield.infrastructure.dependency_resolver import DependencyResolver
from nfield.infrastructure.errors import (
    NfieldError,
    NfieldHttpResponseError,
    NfieldInvalidResponseError,
    NfieldNotSignedInError,
)

logger = get_logger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

REJECTED_SIGN_IN_STATUSES = (401, 403)


class ClientSessionFactory:
    """Creates aiohttp sessions configured from the SDK settings."""

    def create_session(self, settings: NfieldSettings) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(
            total=settings.request_timeout, connect=settings.connect_timeout
        )
        return aiohttp.ClientSession(timeout=timeout, headers={"Accept": "application/json"})


class NfieldConnectionClientObject:
    """Mixin for services that talk to the server through a connection."""

    connection: Optional["NfieldConnection"] = None

    def initialize_connection(self, connection: "NfieldConnection") -> None:
        self.connection = connection

    def _require_connection(self) -> "NfieldConnection":
        if self.connection is None:
            raise NfieldError(
                f"{type(self).__name__} has no connection; obtain it with connection.get_service()"
            )
        return self.connection

    def _parse(self, model: Type[M], data: Any) -> M:
        """
        Validate a decoded API reply as ``model``.

        Raises:
            NfieldInvalidResponseError: If the reply does not match the model
        """
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise NfieldInvalidResponseError(
                f"Unexpected {model.__name__} in server reply: {e.error_count()} validation error(s)"
            ) from e


class NfieldConnection:
    """Connection to one Nfield server."""

    def __init__(self) -> None:
        self.server_url: Optional[URL] = None
        self.logger: Any = logger.bind(component="nfield_connection")  # structlog.BoundLoggerBase
        self._session: Optional[aiohttp.ClientSession] = None
        self._token: Optional[str] = None
        self._settings: Optional[NfieldSettings] = None

    async def __aenter__(self) -> "NfieldConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def settings(self) -> NfieldSettings:
        if self._settings is None:
            self._settings = DependencyResolver.get_service(NfieldSettings)
        return self._settings

    @property
    def is_signed_in(self) -> bool:
        return self._token is not None

    @property
    def token(self) -> Optional[str]:
        return self._token

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            factory = DependencyResolver.get_service(ClientSessionFactory)
            self._session = factory.create_session(self.settings)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session and forget the token."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._token = None

    def url_for(self, *parts: str) -> URL:
        """Build an API URL from path segments below the server URL."""
        if self.server_url is None:
            raise NfieldError("Connection has no server URL; create it with NfieldConnectionFactory")
        url = self.server_url
        for part in parts:
            url = url / str(part)
        return url

    async def sign_in(self, domain: str, username: str, password: str) -> bool:
        """
        Sign in to the Nfield server.

        Args:
            domain: Nfield domain name
            username: User name within the domain
            password: User password

        Returns:
            True when signed in, False when the server rejected the credentials

        Raises:
            NfieldHttpResponseError: If the server fails for any other reason
        """
        url = self.url_for("SignIn")
        form = {"Domain": domain, "Username": username, "Password": password}
        self.logger.info("Signing in", domain=domain, username=username, url=str(url))

        try:
            session = await self._get_session()
            async with session.post(url, data=form) as response:
                if response.status in REJECTED_SIGN_IN_STATUSES:
                    self._token = None
                    self.logger.warning(
                        "Sign in rejected", domain=domain, username=username, status=response.status
                    )
                    return False

                body = await response.text()
                if not 200 <= response.status < 300:
                    raise NfieldHttpResponseError(
                        response.status, _error_message(body, response.reason), url=str(url)
                    )

                token = response.headers.get(self.settings.authentication_header)
                if not token:
                    raise NfieldHttpResponseError(
                        response.status,
                        f"Sign in response has no {self.settings.authentication_header} header",
                        url=str(url),
                    )
                self._token = token
                self.logger.info("Signed in", domain=domain, username=username)
                return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Sign in error", url=str(url), error=str(e))
            raise NfieldHttpResponseError(0, f"Sign in failed: {e}", url=str(url)) from e

    async def request(
        self,
        method: str,
        *path: str,
        body: Optional[Union[Dict[str, Any], list]] = None,
    ) -> Any:
        """
        Send an authenticated request to the API.

        Args:
            method: HTTP method
            *path: Path segments below the server URL
            body: JSON payload

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            NfieldNotSignedInError: If sign_in has not succeeded
            NfieldHttpResponseError: On non-success statuses or a body that is not JSON;
                status 0 for network failures
        """
        if self._token is None:
            raise NfieldNotSignedInError("Sign in before using Nfield services")

        url = self.url_for(*path)
        headers = {"Authorization": f"Basic {self._token}"}
        self.logger.debug("Sending request", method=method, url=str(url))

        try:
            session = await self._get_session()
            async with session.request(method, url, json=body, headers=headers) as response:
                self._refresh_token(response)
                text = await response.text()
                if not 200 <= response.status < 300:
                    self.logger.warning(
                        "Request failed", method=method, url=str(url), status=response.status
                    )
                    raise NfieldHttpResponseError(
                        response.status, _error_message(text, response.reason), url=str(url)
                    )
                if not text.strip():
                    return None
                try:
                    return json.loads(text)
                except ValueError as e:
                    self.logger.warning(
                        "Invalid JSON response",
                        method=method,
                        url=str(url),
                        content_type=response.content_type,
                    )
                    raise NfieldHttpResponseError(
                        response.status, f"Invalid JSON response: {e}", url=str(url)
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Request error", method=method, url=str(url), error=str(e))
            raise NfieldHttpResponseError(0, f"Request failed: {e}", url=str(url)) from e

    def get_service(self, service_type: Type[T]) -> T:
        """
        Resolve a service bound to this connection.

        Args:
            service_type: Service interface, e.g. BaseInterviewersService

        Returns:
            Service instance using this connection
        """
        service = DependencyResolver.get_service(service_type)
        if isinstance(service, NfieldConnectionClientObject):
            service.initialize_connection(self)
        self.logger.debug("Service resolved", service=service_type.__name__)
        return service

    def _refresh_token(self, response: aiohttp.ClientResponse) -> None:
        token = response.headers.get(self.settings.authentication_header)
        if token and token != self._token:
            self._token = token
            self.logger.debug("Authentication token refreshed")


def _error_message(body: str, reason: Optional[str]) -> str:
    """Extract the server's error message from a response body."""
    if body:
        try:
            data = json.loads(body)
        except ValueError:
            return body.strip()
        if isinstance(data, dict) and data.get("Message"):
            return str(data["Message"])
        return body.strip()
    return reason or "No response body"


class NfieldConnectionFactory:
    """Creates connections bound to a server URL."""

    @staticmethod
    def create(server_url: Union[str, URL]) -> NfieldConnection:
        """
        Create a connection for ``server_url``.

        Raises:
            ValueError: If the URL is not an absolute http(s) URL
        """
        url = URL(str(server_url)) if server_url else None
        if url is None or url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid Nfield server URL: {server_url!r}")
        connection = DependencyResolver.get_service(NfieldConnection)
        connection.server_url = url
        logger.debug("Connection created", server_url=str(url))
        return connection
