from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    environment: str
    execution_environment: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@router.get("/health", response_model=HealthResponse)
async def get_health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=settings.app_env,
        execution_environment=settings.resolve_execution_environment().value,
    )
