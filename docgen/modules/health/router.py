"""Health check routes."""

from fastapi import APIRouter, Request

from docgen import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    """Liveness plus render capacity."""
    limiter = request.app.state.render_limiter
    return {
        "status": "ok",
        "version": __version__,
        "active_renders": limiter.active,
        "max_concurrent_renders": limiter.capacity,
    }
