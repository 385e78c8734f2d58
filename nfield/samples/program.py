"""
Sample Program
==============

Walks through the Nfield SDK: wires the SDK into an IoC kernel, signs in,
and performs interviewer, survey, sampling point, survey script, data
download and background task operations against a server.

Run with ``nfield-sample`` or ``python -m nfield.samples``.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError

from nfield.config.logging import get_logger, setup_logging
from nfield.config.settings import NfieldSettings, get_settings
from nfield.infrastructure.connection import NfieldConnectionFactory
from nfield.infrastructure.container import Kernel
from nfield.infrastructure.dependency_resolver import DependencyResolver
from nfield.infrastructure.errors import NfieldError, NfieldNotSignedInError
from nfield.infrastructure.initializer import initialize
from nfield.models.schemas import BackgroundTask, Survey, SurveyDownloadDataRequest, SurveyType
from nfield.samples.interviewers_management import InterviewersManagement
from nfield.samples.sampling_point_management import SamplingPointManagement
from nfield.services import (
    BaseBackgroundTasksService,
    BaseInterviewersService,
    BaseSurveyDataService,
    BaseSurveyScriptService,
    BaseSurveysService,
)

logger = get_logger(__name__)


def initialize_nfield(kernel: Kernel, settings: Optional[NfieldSettings] = None) -> None:
    """Initialize the SDK with ``kernel`` as the IoC container."""
    DependencyResolver.register(kernel.get, kernel.get_all)
    initialize(kernel.bind_transient, kernel.bind_singleton, kernel.bind_constant, settings=settings)


async def run(settings: NfieldSettings) -> Optional[BackgroundTask]:
    """
    Run the sample against the configured server.

    Returns:
        The background task created by the data download request, as listed
        by the background tasks service, or None if it was not listed
    """
    with Kernel() as kernel:
        initialize_nfield(kernel, settings)

        async with NfieldConnectionFactory.create(settings.server_url) as connection:
            signed_in = await connection.sign_in(settings.domain, settings.username, settings.password)
            if not signed_in:
                raise NfieldNotSignedInError(
                    f"Sign in rejected for {settings.username} in domain {settings.domain}"
                )

            await _interviewer_operations(connection.get_service(BaseInterviewersService))

            surveys_service = connection.get_service(BaseSurveysService)
            sampling_points_manager = SamplingPointManagement(surveys_service)
            await sampling_points_manager.query_for_sampling_points(
                settings.sample_sampling_point_survey_id
            )
            await _survey_operations(surveys_service)

            # The survey must have an ODIN script uploaded
            script_service = connection.get_service(BaseSurveyScriptService)
            script = await script_service.get(settings.sample_script_survey_id)
            logger.info(
                "Survey script fetched",
                survey_id=settings.sample_script_survey_id,
                file_name=script.file_name,
                length=len(script.script),
            )

            # Test data collected today
            survey_data_service = connection.get_service(BaseSurveyDataService)
            download_request = SurveyDownloadDataRequest.for_day(
                settings.sample_survey_id,
                settings.download_file_name,
                download_successful_live_interview_data=False,
                download_not_successful_live_interview_data=False,
                download_open_answer_data=True,
                download_closed_answer_data=True,
                download_suspended_live_interview_data=False,
                download_captured_media=False,
                download_para_data=False,
                download_test_interview_data=True,
            )
            task = await survey_data_service.post(download_request)

            background_tasks_service = connection.get_service(BaseBackgroundTasksService)
            background_tasks = await background_tasks_service.query()
            my_task = next((t for t in background_tasks if t.id == task.id), None)
            if my_task is not None:
                logger.info("Background task status", task_id=my_task.id, status=my_task.status.name)
            return my_task


async def _interviewer_operations(interviewers_service: BaseInterviewersService) -> None:
    manager = InterviewersManagement(interviewers_service)

    # Scheduled and inline calls mixed
    t1 = manager.add_interviewer_task()
    try:
        interviewer2 = await manager.add_interviewer()
    except Exception:
        t1.cancel()
        await asyncio.gather(t1, return_exceptions=True)
        raise

    interviewer2.first_name = "Harry"
    t2 = manager.update_interviewer_task(interviewer2)

    interviewer1, interviewer2 = await asyncio.gather(t1, t2)

    interviewer1.email_address = f"{interviewer1.email_address}changed"
    interviewer1.first_name = "Bob"
    interviewer1 = await manager.update_interviewer(interviewer1)

    t3 = manager.change_password_task(interviewer2, "ab12345")
    await manager.change_password(interviewer1, "12345ab")
    await t3

    await manager.query_for_interviewers()
    await manager.query_for_interviewers_task()

    await manager.remove_interviewer_task(interviewer1)
    await manager.remove_interviewer(interviewer2)


async def _survey_operations(surveys_service: BaseSurveysService) -> None:
    created_survey = await surveys_service.add(
        Survey(
            survey_type=SurveyType.ADVANCED,
            client_name="clientName",
            description="description",
            survey_name="abc",
        )
    )

    created_survey.client_name = "Nfield"
    await surveys_service.update(created_survey)

    surveys = await surveys_service.query()
    survey = next((s for s in surveys if s.client_name == "Nfield"), None)
    if survey is not None:
        await surveys_service.remove(survey)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nfield SDK sample program")
    parser.add_argument("--server-url", help="Nfield API base URL")
    parser.add_argument("--domain", help="Nfield domain")
    parser.add_argument("--username", help="Nfield user name")
    parser.add_argument("--password", help="Nfield password")
    parser.add_argument("--survey-id", dest="sample_survey_id", help="Survey to download data from")
    parser.add_argument(
        "--script-survey-id",
        dest="sample_script_survey_id",
        help="Survey with an uploaded ODIN script",
    )
    parser.add_argument("--log-level", help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sample program."""
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {k: v for k, v in vars(args).items() if v is not None}
    try:
        settings = NfieldSettings(**overrides) if overrides else get_settings()
    except ValidationError as e:
        parser.error(str(e))

    setup_logging(settings)
    try:
        asyncio.run(run(settings))
    except NfieldError as e:
        logger.error("Sample run failed", error=str(e))
        return 1
    finally:
        DependencyResolver.reset()
    return 0


if __name__ == "__main__":
    sys.exit(main())
