"""API index endpoint."""

from fastapi import APIRouter

router = APIRouter(tags=["status"])

ENDPOINTS = {
    "POST /api/surprises": "Create a new surprise",
    "GET /api/surprises/:slug": "Get surprise by slug",
    "POST /api/surprises/:slug/verify-password": "Verify password for protected surprise",
}


@router.get("")
async def index() -> dict:
    """Describe the API."""
    return {
        "message": "Digital Surprise Sharing API",
        "status": "running",
        "endpoints": ENDPOINTS,
    }
