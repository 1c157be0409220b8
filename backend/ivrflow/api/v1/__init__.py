"""API v1 routing configuration.

This module defines all v1 API routes. Every error status a router can
answer with is documented with the shared ``{"error": ...}`` body.
"""

from typing import Any

from fastapi import APIRouter

from ivrflow.api.v1 import auth, flows, projects, tokens
from ivrflow.schemas.base import ErrorResponse

ERROR_DESCRIPTIONS = {
    400: "Missing or invalid fields",
    401: "Missing or invalid credentials",
    403: "Resource belongs to another user",
    404: "Resource not found",
    409: "Conflicting state",
    500: "Storage failure",
}


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries for the given error status codes."""
    return {
        code: {"model": ErrorResponse, "description": ERROR_DESCRIPTIONS[code]} for code in codes
    }


router = APIRouter()

# Domain routers
router.include_router(
    auth.router,
    tags=["Accounts"],
    responses=error_responses(400, 401, 409, 500),
)
router.include_router(
    projects.router,
    prefix="/projects",
    tags=["Projects"],
    responses=error_responses(400, 401, 403, 404, 500),
)
router.include_router(
    flows.router,
    prefix="/flows",
    tags=["Flows"],
    responses=error_responses(400, 401, 403, 404, 409, 500),
)
router.include_router(
    tokens.router,
    prefix="/tokens",
    tags=["Tokens"],
    responses=error_responses(400, 401, 403, 404, 500),
)


@router.get("/status", tags=["Status"])
async def api_status() -> dict[str, str]:
    """API v1 status check."""
    return {"status": "ok", "version": "v1"}
