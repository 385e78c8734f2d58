"""
Surveys Service
===============

Survey management plus the sampling points that belong to a survey.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from nfield.config.logging import get_logger
from nfield.infrastructure.connection import NfieldConnectionClientObject
from nfield.models.schemas import SamplingPoint, Survey

logger = get_logger(__name__)

# Survey id and survey type are fixed once a survey exists
UPDATABLE_FIELDS = ("client_name", "description", "survey_name")


class BaseSurveysService(ABC):
    """Survey and sampling point operations."""

    @abstractmethod
    async def add(self, survey: Survey) -> Survey:
        pass

    @abstractmethod
    async def remove(self, survey: Survey) -> None:
        pass

    @abstractmethod
    async def update(self, survey: Survey) -> Survey:
        pass

    @abstractmethod
    async def query(self) -> List[Survey]:
        pass

    @abstractmethod
    async def sampling_points_query(self, survey_id: str) -> List[SamplingPoint]:
        pass

    @abstractmethod
    async def sampling_point_query(
        self, survey_id: str, sampling_point_id: str
    ) -> Optional[SamplingPoint]:
        pass

    @abstractmethod
    async def sampling_point_add(self, survey_id: str, sampling_point: SamplingPoint) -> SamplingPoint:
        pass

    @abstractmethod
    async def sampling_point_update(
        self, survey_id: str, sampling_point: SamplingPoint
    ) -> SamplingPoint:
        pass

    @abstractmethod
    async def sampling_point_delete(self, survey_id: str, sampling_point: SamplingPoint) -> None:
        pass


class NfieldSurveysService(NfieldConnectionClientObject, BaseSurveysService):
    """REST implementation of the surveys service."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(service="surveys")  # structlog.BoundLoggerBase

    async def add(self, survey: Survey) -> Survey:
        connection = self._require_connection()
        data = await connection.request("POST", "surveys", body=survey.to_api())
        created = self._parse(Survey, data)
        self.logger.info("Survey added", survey_id=created.survey_id)
        return created

    async def remove(self, survey: Survey) -> None:
        survey_id = _require_survey_id(survey)
        connection = self._require_connection()
        await connection.request("DELETE", "surveys", survey_id)
        self.logger.info("Survey removed", survey_id=survey_id)

    async def update(self, survey: Survey) -> Survey:
        survey_id = _require_survey_id(survey)
        connection = self._require_connection()
        payload = survey.to_api(include=set(UPDATABLE_FIELDS))
        data = await connection.request("PATCH", "surveys", survey_id, body=payload)
        self.logger.info("Survey updated", survey_id=survey_id)
        return self._parse(Survey, data)

    async def query(self) -> List[Survey]:
        connection = self._require_connection()
        data = await connection.request("GET", "surveys")
        return [self._parse(Survey, item) for item in data or []]

    async def sampling_points_query(self, survey_id: str) -> List[SamplingPoint]:
        _require_value(survey_id, "survey_id")
        connection = self._require_connection()
        data = await connection.request("GET", "surveys", survey_id, "samplingpoints")
        return [self._parse(SamplingPoint, item) for item in data or []]

    async def sampling_point_query(
        self, survey_id: str, sampling_point_id: str
    ) -> Optional[SamplingPoint]:
        _require_value(survey_id, "survey_id")
        _require_value(sampling_point_id, "sampling_point_id")
        connection = self._require_connection()
        data = await connection.request(
            "GET", "surveys", survey_id, "samplingpoints", sampling_point_id
        )
        return self._parse(SamplingPoint, data) if data else None

    async def sampling_point_add(self, survey_id: str, sampling_point: SamplingPoint) -> SamplingPoint:
        _require_value(survey_id, "survey_id")
        connection = self._require_connection()
        data = await connection.request(
            "POST", "surveys", survey_id, "samplingpoints", body=sampling_point.to_api()
        )
        created = self._parse(SamplingPoint, data)
        self.logger.info(
            "Sampling point added", survey_id=survey_id, sampling_point_id=created.sampling_point_id
        )
        return created

    async def sampling_point_update(
        self, survey_id: str, sampling_point: SamplingPoint
    ) -> SamplingPoint:
        _require_value(survey_id, "survey_id")
        sampling_point_id = _require_value(sampling_point.sampling_point_id, "sampling_point_id")
        connection = self._require_connection()
        payload = sampling_point.to_api(exclude={"sampling_point_id"})
        data = await connection.request(
            "PATCH", "surveys", survey_id, "samplingpoints", sampling_point_id, body=payload
        )
        return self._parse(SamplingPoint, data)

    async def sampling_point_delete(self, survey_id: str, sampling_point: SamplingPoint) -> None:
        _require_value(survey_id, "survey_id")
        sampling_point_id = _require_value(sampling_point.sampling_point_id, "sampling_point_id")
        connection = self._require_connection()
        await connection.request("DELETE", "surveys", survey_id, "samplingpoints", sampling_point_id)
        self.logger.info(
            "Sampling point removed", survey_id=survey_id, sampling_point_id=sampling_point_id
        )


def _require_survey_id(survey: Survey) -> str:
    if survey is None or not survey.survey_id:
        raise ValueError("survey must have a survey_id")
    return survey.survey_id


def _require_value(value: Optional[str], name: str) -> str:
    if not value:
        raise ValueError(f"{name} must not be empty")
    return value
