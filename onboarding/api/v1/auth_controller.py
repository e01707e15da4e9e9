# External package imports
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

# Local application imports
from ...application.dto.user_dto import ErrorResponse, UserResponse
from ...application.use_cases.auth.registration_flow import RegistrationFlow
from ...domain.exceptions import RegistrationError, ValidationFailure
from .dependencies import get_registration_flow


router = APIRouter(tags=["authentication"])

_REGISTRATION_FORM_SCHEMA = {
    "type": "object",
    "required": ["firstName", "lastName", "email", "password", "location", "occupation"],
    "properties": {
        "firstName": {"type": "string"},
        "lastName": {"type": "string"},
        "email": {"type": "string", "format": "email"},
        "password": {"type": "string", "format": "password"},
        "location": {"type": "string"},
        "occupation": {"type": "string"},
        "friends": {"type": "array", "items": {"type": "string"}},
        "picture": {"type": "string", "format": "binary"},
    },
}


def error_response(error: RegistrationError) -> JSONResponse:
    """
    Translate a registration failure into its HTTP response

    Only the user-facing message and the failure kind are exposed; internal
    messages and causes stay in the logs.
    """
    body = ErrorResponse(
        detail=error.user_message,
        error=error.kind,
        fields=list(error.fields) if isinstance(error, ValidationFailure) else None,
    )
    return JSONResponse(
        status_code=error.status_code,
        content=body.model_dump(exclude_none=True),
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"multipart/form-data": {"schema": _REGISTRATION_FORM_SCHEMA}},
        }
    },
)
async def register_user(
    request: Request,
    flow: RegistrationFlow = Depends(get_registration_flow),
):
    """
    Register a new user

    Accepts a multipart form with the profile fields, the password and an
    optional ``picture`` file.

    Returns:
        201 with the created user (no password), or an error body whose
        status reflects the failure kind (400, 409 or 500)
    """
    outcome = await flow.run(request)
    if not outcome.succeeded:
        return error_response(outcome.error)
    return UserResponse.from_user(outcome.user)
