# External package imports
from fastapi import Request

# Local application imports
from ...application.use_cases.auth.registration_flow import RegistrationFlow
from ...di.container import DIContainer, get_container


def get_request_container(request: Request) -> DIContainer:
    """
    FastAPI dependency resolving the container the app was built with

    Falls back to the global container when the app carries none.
    """
    container = getattr(request.app.state, "container", None)
    return container if container is not None else get_container()


def get_registration_flow(request: Request) -> RegistrationFlow:
    """FastAPI dependency building a RegistrationFlow for this request"""
    return get_request_container(request).get(RegistrationFlow)
