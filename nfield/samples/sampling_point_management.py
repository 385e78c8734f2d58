"""
Sampling Point Management
=========================

Sample wrapper listing the sampling points of a survey.
"""

from typing import Any, List

from nfield.config.logging import get_logger
from nfield.models.schemas import SamplingPoint
from nfield.services.surveys import BaseSurveysService

logger = get_logger(__name__)


class SamplingPointManagement:
    """Demonstrates sampling point queries."""

    def __init__(self, surveys_service: BaseSurveysService):
        self.service = surveys_service
        self.logger: Any = logger.bind(component="sampling_point_management")  # structlog.BoundLoggerBase

    async def query_for_sampling_points(self, survey_id: str) -> List[SamplingPoint]:
        sampling_points = await self.service.sampling_points_query(survey_id)
        for sampling_point in sampling_points:
            self.logger.info(
                "Sampling point",
                survey_id=survey_id,
                sampling_point_id=sampling_point.sampling_point_id,
                name=sampling_point.name,
            )
        self.logger.info("Sampling points queried", survey_id=survey_id, count=len(sampling_points))
        return sampling_points
