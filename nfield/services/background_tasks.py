"""
Background Tasks Service
========================

Query the asynchronous jobs (such as data exports) tracked by the platform.
"""

from abc import ABC, abstractmethod
from typing import List

from nfield.infrastructure.connection import NfieldConnectionClientObject
from nfield.models.schemas import BackgroundTask


class BaseBackgroundTasksService(ABC):
    """Background task operations."""

    @abstractmethod
    async def query(self) -> List[BackgroundTask]:
        pass


class NfieldBackgroundTasksService(NfieldConnectionClientObject, BaseBackgroundTasksService):
    """REST implementation of the background tasks service."""

    async def query(self) -> List[BackgroundTask]:
        connection = self._require_connection()
        data = await connection.request("GET", "backgroundtasks")
        return [self._parse(BackgroundTask, item) for item in data or []]
