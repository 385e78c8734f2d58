"""
Fake Nfield Server
==================

In-memory aiohttp application imitating the Nfield REST API routes used by
the SDK. Served in tests through ``aiohttp.test_utils.TestServer``.
"""

import itertools
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from aiohttp import web

TOKEN_HEADER = "X-AuthenticationToken"

INTERVIEWER_UPDATABLE = ("FirstName", "LastName", "EmailAddress", "TelephoneNumber")
SURVEY_UPDATABLE = ("ClientName", "Description", "SurveyName")


def _not_found(message: str) -> web.Response:
    return web.json_response({"Message": message}, status=404)


class FakeNfieldBackend:
    """State and handlers of the fake server."""

    def __init__(
        self,
        domain: str = "testdomain",
        username: str = "user1",
        password: str = "password123",
    ):
        self.credentials = (domain, username, password)
        self.interviewers: Dict[str, Dict[str, Any]] = {}
        self.interviewer_passwords: Dict[str, str] = {}
        self.surveys: Dict[str, Dict[str, Any]] = {}
        self.sampling_points: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.scripts: Dict[str, Dict[str, Any]] = {}
        self.background_tasks: Dict[str, Dict[str, Any]] = {}
        self.download_requests: List[Dict[str, Any]] = []
        self.requests: List[Tuple[str, str]] = []
        self.valid_tokens: set = set()
        self.rotate_tokens = False
        self.fail_next: Optional[Tuple[int, str]] = None
        self.raw_responses: Dict[Tuple[str, str], Tuple[int, str, str]] = {}
        self._token_counter = itertools.count(1)

    # Seeding helpers
    def seed_survey(self, survey_id: str, **fields: Any) -> Dict[str, Any]:
        record = {
            "SurveyId": survey_id,
            "SurveyName": fields.get("SurveyName", survey_id),
            "ClientName": fields.get("ClientName", "Seed"),
            "Description": fields.get("Description", ""),
            "SurveyType": fields.get("SurveyType", "Basic"),
        }
        self.surveys[survey_id] = record
        self.sampling_points.setdefault(survey_id, {})
        return record

    def seed_sampling_point(self, survey_id: str, sampling_point_id: str, name: str) -> None:
        self.sampling_points.setdefault(survey_id, {})[sampling_point_id] = {
            "SamplingPointId": sampling_point_id,
            "Name": name,
        }

    def seed_script(self, survey_id: str, script: str, file_name: str = "script.odin") -> None:
        self.scripts[survey_id] = {"Script": script, "FileName": file_name}

    def issue_token(self) -> str:
        token = f"token-{next(self._token_counter)}"
        self.valid_tokens.add(token)
        return token

    def create_app(self) -> web.Application:
        @web.middleware
        async def auth_middleware(request: web.Request, handler):
            self.requests.append((request.method, request.path))
            if request.path.endswith("/SignIn"):
                return await handler(request)

            auth = request.headers.get("Authorization", "")
            scheme, _, token = auth.partition(" ")
            if scheme != "Basic" or token not in self.valid_tokens:
                return web.json_response({"Message": "Authorization has been denied"}, status=401)

            if self.fail_next is not None:
                status, message = self.fail_next
                self.fail_next = None
                return web.json_response({"Message": message}, status=status)

            raw = self.raw_responses.get((request.method, request.path))
            if raw is not None:
                status, content_type, text = raw
                return web.Response(status=status, text=text, content_type=content_type)

            response = await handler(request)
            if self.rotate_tokens:
                response.headers[TOKEN_HEADER] = self.issue_token()
            return response

        app = web.Application(middlewares=[auth_middleware])
        app.router.add_post("/v1/SignIn", self.sign_in)
        app.router.add_get("/v1/interviewers", self.list_interviewers)
        app.router.add_post("/v1/interviewers", self.add_interviewer)
        app.router.add_patch("/v1/interviewers/{interviewer_id}", self.update_interviewer)
        app.router.add_put("/v1/interviewers/{interviewer_id}", self.change_password)
        app.router.add_delete("/v1/interviewers/{interviewer_id}", self.remove_interviewer)
        app.router.add_get("/v1/surveys", self.list_surveys)
        app.router.add_post("/v1/surveys", self.add_survey)
        app.router.add_patch("/v1/surveys/{survey_id}", self.update_survey)
        app.router.add_delete("/v1/surveys/{survey_id}", self.remove_survey)
        app.router.add_get("/v1/surveys/{survey_id}/samplingpoints", self.list_sampling_points)
        app.router.add_post("/v1/surveys/{survey_id}/samplingpoints", self.add_sampling_point)
        app.router.add_get(
            "/v1/surveys/{survey_id}/samplingpoints/{sampling_point_id}", self.get_sampling_point
        )
        app.router.add_patch(
            "/v1/surveys/{survey_id}/samplingpoints/{sampling_point_id}",
            self.update_sampling_point,
        )
        app.router.add_delete(
            "/v1/surveys/{survey_id}/samplingpoints/{sampling_point_id}",
            self.remove_sampling_point,
        )
        app.router.add_get("/v1/surveys/{survey_id}/script", self.get_script)
        app.router.add_post("/v1/surveys/{survey_id}/script", self.post_script)
        app.router.add_post("/v1/surveys/{survey_id}/data", self.post_data)
        app.router.add_get("/v1/backgroundtasks", self.list_background_tasks)
        return app

    # Sign in
    async def sign_in(self, request: web.Request) -> web.Response:
        form = await request.post()
        supplied = (form.get("Domain"), form.get("Username"), form.get("Password"))
        if supplied != self.credentials:
            return web.json_response({"Message": "Invalid credentials"}, status=401)
        return web.Response(status=200, headers={TOKEN_HEADER: self.issue_token()})

    # Interviewers
    async def list_interviewers(self, request: web.Request) -> web.Response:
        return web.json_response(list(self.interviewers.values()))

    async def add_interviewer(self, request: web.Request) -> web.Response:
        data = await request.json()
        interviewer_id = uuid.uuid4().hex
        password = data.pop("Password", None)
        record = {**data, "InterviewerId": interviewer_id, "IsFullSynced": False}
        self.interviewers[interviewer_id] = record
        if password:
            self.interviewer_passwords[interviewer_id] = password
        return web.json_response(record)

    async def update_interviewer(self, request: web.Request) -> web.Response:
        record = self.interviewers.get(request.match_info["interviewer_id"])
        if record is None:
            return _not_found("Interviewer not found")
        data = await request.json()
        record.update({k: v for k, v in data.items() if k in INTERVIEWER_UPDATABLE})
        return web.json_response(record)

    async def change_password(self, request: web.Request) -> web.Response:
        interviewer_id = request.match_info["interviewer_id"]
        record = self.interviewers.get(interviewer_id)
        if record is None:
            return _not_found("Interviewer not found")
        data = await request.json()
        self.interviewer_passwords[interviewer_id] = data["Password"]
        record["LastPasswordChangeTime"] = datetime.now(timezone.utc).isoformat()
        return web.json_response(record)

    async def remove_interviewer(self, request: web.Request) -> web.Response:
        if self.interviewers.pop(request.match_info["interviewer_id"], None) is None:
            return _not_found("Interviewer not found")
        return web.Response(status=200)

    # Surveys
    async def list_surveys(self, request: web.Request) -> web.Response:
        return web.json_response(list(self.surveys.values()))

    async def add_survey(self, request: web.Request) -> web.Response:
        data = await request.json()
        survey_id = uuid.uuid4().hex
        record = self.seed_survey(survey_id, **data)
        return web.json_response(record)

    async def update_survey(self, request: web.Request) -> web.Response:
        record = self.surveys.get(request.match_info["survey_id"])
        if record is None:
            return _not_found("Survey not found")
        data = await request.json()
        record.update({k: v for k, v in data.items() if k in SURVEY_UPDATABLE})
        return web.json_response(record)

    async def remove_survey(self, request: web.Request) -> web.Response:
        survey_id = request.match_info["survey_id"]
        if self.surveys.pop(survey_id, None) is None:
            return _not_found("Survey not found")
        self.sampling_points.pop(survey_id, None)
        return web.Response(status=200)

    # Sampling points
    def _points(self, request: web.Request) -> Optional[Dict[str, Dict[str, Any]]]:
        survey_id = request.match_info["survey_id"]
        if survey_id not in self.surveys:
            return None
        return self.sampling_points.setdefault(survey_id, {})

    async def list_sampling_points(self, request: web.Request) -> web.Response:
        points = self._points(request)
        if points is None:
            return _not_found("Survey not found")
        return web.json_response(list(points.values()))

    async def add_sampling_point(self, request: web.Request) -> web.Response:
        points = self._points(request)
        if points is None:
            return _not_found("Survey not found")
        data = await request.json()
        sampling_point_id = data.get("SamplingPointId") or uuid.uuid4().hex[:8]
        record = {**data, "SamplingPointId": sampling_point_id}
        points[sampling_point_id] = record
        return web.json_response(record)

    async def get_sampling_point(self, request: web.Request) -> web.Response:
        points = self._points(request)
        record = (points or {}).get(request.match_info["sampling_point_id"])
        if record is None:
            return _not_found("Sampling point not found")
        return web.json_response(record)

    async def update_sampling_point(self, request: web.Request) -> web.Response:
        points = self._points(request)
        record = (points or {}).get(request.match_info["sampling_point_id"])
        if record is None:
            return _not_found("Sampling point not found")
        data = await request.json()
        data.pop("SamplingPointId", None)
        record.update(data)
        return web.json_response(record)

    async def remove_sampling_point(self, request: web.Request) -> web.Response:
        points = self._points(request)
        if points is None or points.pop(request.match_info["sampling_point_id"], None) is None:
            return _not_found("Sampling point not found")
        return web.Response(status=200)

    # Survey script
    async def get_script(self, request: web.Request) -> web.Response:
        script = self.scripts.get(request.match_info["survey_id"])
        if script is None:
            return _not_found("Survey has no script")
        return web.json_response(script)

    async def post_script(self, request: web.Request) -> web.Response:
        survey_id = request.match_info["survey_id"]
        if survey_id not in self.surveys:
            return _not_found("Survey not found")
        data = await request.json()
        self.scripts[survey_id] = data
        return web.json_response(data)

    # Survey data and background tasks
    async def post_data(self, request: web.Request) -> web.Response:
        survey_id = request.match_info["survey_id"]
        if survey_id not in self.surveys:
            return _not_found("Survey not found")
        data = await request.json()
        self.download_requests.append(data)
        task_id = uuid.uuid4().hex
        task = {
            "Id": task_id,
            "Name": f"Download {data.get('DownloadFileName')}",
            "Status": 5,
            "SurveyId": survey_id,
            "CreationTime": datetime.now(timezone.utc).isoformat(),
            "Type": 1,
        }
        self.background_tasks[task_id] = task
        return web.json_response(task)

    async def list_background_tasks(self, request: web.Request) -> web.Response:
        return web.json_response(list(self.background_tasks.values()))
