"""Health check endpoints"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Basic health check endpoint"""
    runtime = getattr(request.app.state, "runtime", None)
    return {
        "status": "healthy" if runtime is not None and runtime.booted else "starting",
        "service": "workday-zen",
    }
