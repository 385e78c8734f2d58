"""
Pydantic Models and Schemas
===========================

Records exchanged with the Nfield REST API: interviewers, surveys, sampling
points, survey scripts, data download requests and background tasks.

The API speaks PascalCase JSON. Every model accepts either the wire name or
the Python field name on input and dumps wire names via ``to_api()``.
"""

from typing import Optional, Dict, Any
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_UTC_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def format_utc_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC timestamp.

    Naive datetimes are taken to be local time, the same way
    ``datetime.astimezone`` treats them.
    """
    return value.astimezone(timezone.utc).strftime(UTC_TIMESTAMP_FORMAT)


# Enums
class SurveyType(str, Enum):
    """Survey types offered by the platform."""
    BASIC = "Basic"
    ADVANCED = "Advanced"
    EURO_BAROMETER_ADVANCED = "EuroBarometerAdvanced"


class BackgroundTaskStatus(int, Enum):
    """Background task states as reported by the platform."""
    CREATED = 0
    WAITING_FOR_ACTIVATION = 1
    WAITING_TO_RUN = 2
    RUNNING = 3
    WAITING_FOR_CHILDREN_TO_COMPLETE = 4
    RAN_TO_COMPLETION = 5
    CANCELED = 6
    FAULTED = 7

    @property
    def is_finished(self) -> bool:
        return self in (
            BackgroundTaskStatus.RAN_TO_COMPLETION,
            BackgroundTaskStatus.CANCELED,
            BackgroundTaskStatus.FAULTED,
        )


# Base Models
class NfieldModel(BaseModel):
    """Base model mapping snake_case fields onto the API's PascalCase names."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self, **kwargs: Any) -> Dict[str, Any]:
        """Dump the model as an API payload, leaving out unset values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json", **kwargs)


# Interviewer Models
class Interviewer(NfieldModel):
    """Interviewer record managed through the interviewers service."""
    interviewer_id: Optional[str] = Field(None, description="Server-assigned identifier")
    client_interviewer_id: Optional[str] = Field(None, max_length=8, description="Client identifier")
    user_name: Optional[str] = Field(None, description="Login name")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    telephone_number: Optional[str] = None
    password: Optional[str] = Field(None, repr=False, description="Only sent on creation")
    is_full_synced: Optional[bool] = None
    last_password_change_time: Optional[datetime] = None


# Survey Models
class Survey(NfieldModel):
    """Survey record describing a data-collection project."""
    survey_id: Optional[str] = Field(None, description="Server-assigned identifier")
    survey_name: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    survey_type: SurveyType = Field(SurveyType.BASIC, description="Fixed at creation")


class SamplingPoint(NfieldModel):
    """Sampling point belonging to a survey."""
    sampling_point_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    fieldwork_office_id: Optional[str] = None
    group_id: Optional[str] = None
    stratum: Optional[str] = None


class SurveyScript(NfieldModel):
    """ODIN questionnaire script uploaded for a survey."""
    script: str = Field(..., description="Script source")
    file_name: Optional[str] = Field(None, description="Original script file name")


# Data Download Models
class SurveyDownloadDataRequest(NfieldModel):
    """Request for an export of collected survey data."""
    download_successful_live_interview_data: bool = False
    download_not_successful_live_interview_data: bool = False
    download_open_answer_data: bool = False
    download_closed_answer_data: bool = False
    download_suspended_live_interview_data: bool = False
    download_captured_media: bool = False
    download_para_data: bool = False
    download_test_interview_data: bool = False
    download_file_name: str = Field(..., min_length=1)
    start_date: Optional[str] = Field(None, description="UTC start, YYYY-MM-DDTHH:MM:SSZ")
    end_date: Optional[str] = Field(None, description="UTC end, YYYY-MM-DDTHH:MM:SSZ")
    survey_id: str = Field(..., min_length=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_timestamp(cls, v: Any) -> Any:
        """Accept datetimes and enforce the UTC timestamp format on strings."""
        if v is None:
            return v
        if isinstance(v, datetime):
            return format_utc_timestamp(v)
        if isinstance(v, str) and not _UTC_TIMESTAMP_RE.match(v):
            raise ValueError(f"Timestamp must look like YYYY-MM-DDTHH:MM:SSZ, got {v!r}")
        return v

    @classmethod
    def for_day(
        cls,
        survey_id: str,
        download_file_name: str,
        day: Optional[date] = None,
        **flags: bool,
    ) -> "SurveyDownloadDataRequest":
        """
        Build a request covering one local calendar day.

        Args:
            survey_id: Survey to download from
            download_file_name: Name of the produced export file
            day: Local day to cover (defaults to today)
            **flags: Capture flags, e.g. ``download_test_interview_data=True``

        Returns:
            Request spanning local midnight to the next local midnight, in UTC
        """
        day = day or date.today()
        start = datetime.combine(day, time.min)
        end = datetime.combine(day + timedelta(days=1), time.min)
        return cls(
            survey_id=survey_id,
            download_file_name=download_file_name,
            start_date=start,
            end_date=end,
            **flags,
        )


# Background Task Models
class BackgroundTask(NfieldModel):
    """Asynchronous platform job, e.g. a data export."""
    id: str = Field(..., description="Task identifier")
    name: Optional[str] = None
    status: BackgroundTaskStatus = BackgroundTaskStatus.CREATED
    survey_id: Optional[str] = None
    creation_time: Optional[datetime] = None
    object_id: Optional[str] = None
    delete_object_after: Optional[datetime] = None
    type: Optional[int] = None
