"""Health check endpoint for monitoring application status."""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(
    tags=["services"],
    responses={200: {"description": "Service is healthy"}},
)

SERVICE_NAME = "User Onboarding API"


class HealthCheck(BaseModel):
    """Schema for health check response."""
    service_name: str
    status: str


@router.get("/", response_model=HealthCheck)
async def health_check() -> HealthCheck:
    """Check the health status of the service."""
    return HealthCheck(service_name=SERVICE_NAME, status="healthy")
