from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "healthy", "service": "venture-hub-api"}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe: the store must be initialized."""
    store = getattr(request.app.state, "store", None)
    checks = {"store": store is not None}
    ready = all(checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "degraded", "checks": checks},
    )
