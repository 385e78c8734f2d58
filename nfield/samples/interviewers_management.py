"""
Interviewers Management
=======================

Sample wrapper around the interviewers service. Each operation exists in two
styles: a coroutine to await inline, and a ``*_task`` twin that schedules the
same call on the running loop and hands back the ``asyncio.Task`` so the
caller can wait for it later.
"""

import asyncio
import uuid
from typing import Any, List

from nfield.config.logging import get_logger
from nfield.models.schemas import Interviewer
from nfield.services.interviewers import BaseInterviewersService

logger = get_logger(__name__)


def new_sample_interviewer() -> Interviewer:
    """Build an interviewer record with a unique client id and user name."""
    client_id = uuid.uuid4().hex[:8]
    return Interviewer(
        client_interviewer_id=client_id,
        first_name="Bill",
        last_name="Gates",
        email_address=f"bill.{client_id}@example.com",
        telephone_number="0206598745",
        user_name=f"bill{client_id}",
        password="password12",
    )


class InterviewersManagement:
    """Demonstrates interviewer operations."""

    def __init__(self, interviewers_service: BaseInterviewersService):
        self.service = interviewers_service
        self.logger: Any = logger.bind(component="interviewers_management")  # structlog.BoundLoggerBase

    async def add_interviewer(self) -> Interviewer:
        interviewer = await self.service.add(new_sample_interviewer())
        self.logger.info(
            "Added interviewer",
            interviewer_id=interviewer.interviewer_id,
            user_name=interviewer.user_name,
        )
        return interviewer

    def add_interviewer_task(self) -> "asyncio.Task[Interviewer]":
        return asyncio.create_task(self.add_interviewer())

    async def update_interviewer(self, interviewer: Interviewer) -> Interviewer:
        return await self.service.update(interviewer)

    def update_interviewer_task(self, interviewer: Interviewer) -> "asyncio.Task[Interviewer]":
        return asyncio.create_task(self.update_interviewer(interviewer))

    async def change_password(self, interviewer: Interviewer, password: str) -> Interviewer:
        return await self.service.change_password(interviewer, password)

    def change_password_task(
        self, interviewer: Interviewer, password: str
    ) -> "asyncio.Task[Interviewer]":
        return asyncio.create_task(self.change_password(interviewer, password))

    async def query_for_interviewers(self) -> List[Interviewer]:
        interviewers = await self.service.query()
        for interviewer in interviewers:
            self.logger.info(
                "Interviewer",
                interviewer_id=interviewer.interviewer_id,
                first_name=interviewer.first_name,
                last_name=interviewer.last_name,
                email_address=interviewer.email_address,
            )
        return interviewers

    def query_for_interviewers_task(self) -> "asyncio.Task[List[Interviewer]]":
        return asyncio.create_task(self.query_for_interviewers())

    async def remove_interviewer(self, interviewer: Interviewer) -> None:
        await self.service.remove(interviewer)

    def remove_interviewer_task(self, interviewer: Interviewer) -> "asyncio.Task[None]":
        return asyncio.create_task(self.remove_interviewer(interviewer))
