from fastapi import APIRouter, Depends

from api.dependencies import ServiceContainer, get_container
from api.schemas import HealthResponse

router = APIRouter(tags=["System Health"])


@router.get("/health", response_model=HealthResponse)
async def get_health(container: ServiceContainer = Depends(get_container)):
    """Liveness and database connectivity."""
    if container.database is None:
        return HealthResponse(status="ok", database="not configured")
    healthy = await container.database.health_check()
    return HealthResponse(
        status="ok" if healthy else "degraded",
        database="up" if healthy else "down",
    )
