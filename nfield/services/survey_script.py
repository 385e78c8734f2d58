"""
Survey Script Service
=====================

Download and upload the ODIN questionnaire script of a survey.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

from nfield.config.logging import get_logger
from nfield.infrastructure.connection import NfieldConnectionClientObject
from nfield.models.schemas import SurveyScript

logger = get_logger(__name__)


class BaseSurveyScriptService(ABC):
    """Survey script operations."""

    @abstractmethod
    async def get(self, survey_id: str) -> SurveyScript:
        """Fetch the script uploaded for ``survey_id``."""
        pass

    @abstractmethod
    async def post(self, survey_id: str, script: SurveyScript) -> SurveyScript:
        """Upload a script for ``survey_id``."""
        pass

    @abstractmethod
    async def post_file(self, survey_id: str, path: Union[str, Path]) -> SurveyScript:
        """Upload a script read from a local file."""
        pass


class NfieldSurveyScriptService(NfieldConnectionClientObject, BaseSurveyScriptService):
    """REST implementation of the survey script service."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(service="survey_script")  # structlog.BoundLoggerBase

    async def get(self, survey_id: str) -> SurveyScript:
        if not survey_id:
            raise ValueError("survey_id must not be empty")
        connection = self._require_connection()
        data = await connection.request("GET", "surveys", survey_id, "script")
        return self._parse(SurveyScript, data)

    async def post(self, survey_id: str, script: SurveyScript) -> SurveyScript:
        if not survey_id:
            raise ValueError("survey_id must not be empty")
        connection = self._require_connection()
        data = await connection.request("POST", "surveys", survey_id, "script", body=script.to_api())
        self.logger.info("Survey script uploaded", survey_id=survey_id, file_name=script.file_name)
        return self._parse(SurveyScript, data)

    async def post_file(self, survey_id: str, path: Union[str, Path]) -> SurveyScript:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Script file not found: {path}")
        script = SurveyScript(script=path.read_text(encoding="utf-8"), file_name=path.name)
        return await self.post(survey_id, script)
