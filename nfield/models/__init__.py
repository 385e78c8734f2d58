"""
Data Models
===========

Pydantic records exchanged with the Nfield REST API.
"""

from .schemas import (
    BackgroundTask,
    BackgroundTaskStatus,
    Interviewer,
    SamplingPoint,
    Survey,
    SurveyDownloadDataRequest,
    SurveyScript,
    SurveyType,
    format_utc_timestamp,
)

__all__ = [
    "BackgroundTask",
    "BackgroundTaskStatus",
    "Interviewer",
    "SamplingPoint",
    "Survey",
    "SurveyDownloadDataRequest",
    "SurveyScript",
    "SurveyType",
    "format_utc_timestamp",
]
