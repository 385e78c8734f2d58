"""
SDK Initializer
===============

Registers the SDK's own types with an application container through three
binding callables, one per lifetime.
"""

from typing import Any, Callable, Optional

from nfield.config.logging import get_logger
from nfield.config.settings import NfieldSettings, get_settings
from nfield.infrastructure.connection import ClientSessionFactory, NfieldConnection
from nfield.services import (
    BaseBackgroundTasksService,
    BaseInterviewersService,
    BaseSurveyDataService,
    BaseSurveyScriptService,
    BaseSurveysService,
    NfieldBackgroundTasksService,
    NfieldInterviewersService,
    NfieldSurveyDataService,
    NfieldSurveyScriptService,
    NfieldSurveysService,
)

logger = get_logger(__name__)

BindFunc = Callable[[type, Any], None]

SERVICE_BINDINGS = {
    BaseInterviewersService: NfieldInterviewersService,
    BaseSurveysService: NfieldSurveysService,
    BaseSurveyScriptService: NfieldSurveyScriptService,
    BaseSurveyDataService: NfieldSurveyDataService,
    BaseBackgroundTasksService: NfieldBackgroundTasksService,
}


def initialize(
    bind_transient: BindFunc,
    bind_singleton: BindFunc,
    bind_constant: BindFunc,
    settings: Optional[NfieldSettings] = None,
) -> None:
    """
    Register the SDK types with a container.

    Args:
        bind_transient: Binds a type to a new instance per resolve
        bind_singleton: Binds a type to a single shared instance
        bind_constant: Binds a type to a given object
        settings: Settings to expose to the SDK (defaults to the global settings)
    """
    bind_transient(NfieldConnection, NfieldConnection)
    for service, implementation in SERVICE_BINDINGS.items():
        bind_transient(service, implementation)

    bind_singleton(ClientSessionFactory, ClientSessionFactory)
    bind_constant(NfieldSettings, settings or get_settings())

    logger.debug("Nfield SDK initialized", services=len(SERVICE_BINDINGS))
