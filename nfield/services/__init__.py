"""
Nfield Services
===============

Service interfaces resolved through ``NfieldConnection.get_service`` and
their REST implementations.

Services:
- interviewers: interviewer CRUD and password changes
- surveys: survey CRUD and sampling points
- survey_script: ODIN script download and upload
- survey_data: data download requests
- background_tasks: background task queries
"""

from .background_tasks import BaseBackgroundTasksService, NfieldBackgroundTasksService
from .interviewers import BaseInterviewersService, NfieldInterviewersService
from .survey_data import BaseSurveyDataService, NfieldSurveyDataService
from .survey_script import BaseSurveyScriptService, NfieldSurveyScriptService
from .surveys import BaseSurveysService, NfieldSurveysService

__all__ = [
    "BaseBackgroundTasksService",
    "BaseInterviewersService",
    "BaseSurveyDataService",
    "BaseSurveyScriptService",
    "BaseSurveysService",
    "NfieldBackgroundTasksService",
    "NfieldInterviewersService",
    "NfieldSurveyDataService",
    "NfieldSurveyScriptService",
    "NfieldSurveysService",
]
