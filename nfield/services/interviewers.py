"""
Interviewers Service
====================

Add, update, query and remove interviewers, and change their passwords.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from nfield.config.logging import get_logger
from nfield.infrastructure.connection import NfieldConnectionClientObject
from nfield.models.schemas import Interviewer

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "email_address", "telephone_number")


class BaseInterviewersService(ABC):
    """Interviewer management operations."""

    @abstractmethod
    async def add(self, interviewer: Interviewer) -> Interviewer:
        """Create an interviewer and return the stored record."""
        pass

    @abstractmethod
    async def remove(self, interviewer: Interviewer) -> None:
        """Delete an interviewer."""
        pass

    @abstractmethod
    async def update(self, interviewer: Interviewer) -> Interviewer:
        """Update name, email address and telephone number."""
        pass

    @abstractmethod
    async def query(self) -> List[Interviewer]:
        """List all interviewers of the domain."""
        pass

    @abstractmethod
    async def change_password(self, interviewer: Interviewer, password: str) -> Interviewer:
        """Set a new password for an interviewer."""
        pass


class NfieldInterviewersService(NfieldConnectionClientObject, BaseInterviewersService):
    """REST implementation of the interviewers service."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(service="interviewers")  # structlog.BoundLoggerBase

    async def add(self, interviewer: Interviewer) -> Interviewer:
        connection = self._require_connection()
        data = await connection.request("POST", "interviewers", body=interviewer.to_api())
        created = self._parse(Interviewer, data)
        self.logger.info("Interviewer added", interviewer_id=created.interviewer_id)
        return created

    async def remove(self, interviewer: Interviewer) -> None:
        interviewer_id = _require_id(interviewer)
        connection = self._require_connection()
        await connection.request("DELETE", "interviewers", interviewer_id)
        self.logger.info("Interviewer removed", interviewer_id=interviewer_id)

    async def update(self, interviewer: Interviewer) -> Interviewer:
        interviewer_id = _require_id(interviewer)
        connection = self._require_connection()
        payload = interviewer.to_api(include=set(UPDATABLE_FIELDS))
        data = await connection.request("PATCH", "interviewers", interviewer_id, body=payload)
        self.logger.info("Interviewer updated", interviewer_id=interviewer_id)
        return self._parse(Interviewer, data)

    async def query(self) -> List[Interviewer]:
        connection = self._require_connection()
        data = await connection.request("GET", "interviewers")
        return [self._parse(Interviewer, item) for item in data or []]

    async def change_password(self, interviewer: Interviewer, password: str) -> Interviewer:
        interviewer_id = _require_id(interviewer)
        if not password:
            raise ValueError("password must not be empty")
        connection = self._require_connection()
        data = await connection.request(
            "PUT", "interviewers", interviewer_id, body={"Password": password}
        )
        self.logger.info("Interviewer password changed", interviewer_id=interviewer_id)
        return self._parse(Interviewer, data)


def _require_id(interviewer: Interviewer) -> str:
    if interviewer is None or not interviewer.interviewer_id:
        raise ValueError("interviewer must have an interviewer_id")
    return interviewer.interviewer_id
