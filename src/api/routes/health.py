"""Health check endpoint."""

from fastapi import APIRouter, Request

from api.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness check. Does not touch PageSpeed, the target site or Gemini.",
)
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(version=request.app.version)
