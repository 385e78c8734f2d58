"""
Survey Data Service
===================

Request exports of collected interview data. The platform answers with a
background task that tracks the export.
"""

from abc import ABC, abstractmethod
from typing import Any

from nfield.config.logging import get_logger
from nfield.infrastructure.connection import NfieldConnectionClientObject
from nfield.models.schemas import BackgroundTask, SurveyDownloadDataRequest

logger = get_logger(__name__)


class BaseSurveyDataService(ABC):
    """Survey data download operations."""

    @abstractmethod
    async def post(self, request: SurveyDownloadDataRequest) -> BackgroundTask:
        """Start a data download and return the task tracking it."""
        pass


class NfieldSurveyDataService(NfieldConnectionClientObject, BaseSurveyDataService):
    """REST implementation of the survey data service."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(service="survey_data")  # structlog.BoundLoggerBase

    async def post(self, request: SurveyDownloadDataRequest) -> BackgroundTask:
        connection = self._require_connection()
        data = await connection.request(
            "POST", "surveys", request.survey_id, "data", body=request.to_api()
        )
        task = self._parse(BackgroundTask, data)
        self.logger.info(
            "Data download requested",
            survey_id=request.survey_id,
            file_name=request.download_file_name,
            task_id=task.id,
        )
        return task
