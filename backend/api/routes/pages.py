"""
Top-level pages.

The API index, the authenticated landing route and the login-failed
target used by the OAuth callback.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shared.config import Settings
from shared.models import Account

from ..dependencies import get_app_settings
from ..middleware.auth import RequireAuth

router = APIRouter()


@router.get("/")
async def index(settings: Settings = Depends(get_app_settings)) -> dict[str, Any]:
    """Endpoint map for API consumers."""
    body: dict[str, Any] = {
        "message": f"Welcome to {settings.app_name}",
        "authentication": {
            "login": f"GET {settings.login_url}",
            "logout": "GET /auth/logout",
            "status": "GET /auth/status",
            "profile": "GET /auth/profile",
        },
        "endpoints": {
            "getAllTasks": "GET /api/tasks (requires authentication)",
            "getTaskById": "GET /api/tasks/{id} (requires authentication)",
            "createTask": "POST /api/tasks (requires authentication)",
            "updateTask": "PUT /api/tasks/{id} (requires authentication)",
            "deleteTask": "DELETE /api/tasks/{id} (requires authentication)",
        },
    }
    if settings.debug:
        body["documentation"] = "/api-docs"
    return body


@router.get("/dashboard")
async def dashboard(account: Account = RequireAuth) -> dict[str, Any]:
    """Landing route after a successful login."""
    return {
        "success": True,
        "message": f"Welcome {account.display_name}!",
        "user": {
            "email": account.email,
            "displayName": account.display_name,
            "picture": account.picture,
        },
        "links": {
            "tasks": "/api/tasks",
            "profile": "/auth/profile",
            "logout": "/auth/logout",
        },
    }


@router.get("/login-failed")
async def login_failed(settings: Settings = Depends(get_app_settings)) -> JSONResponse:
    """Target of the OAuth callback when a login cannot complete."""
    return JSONResponse(
        status_code=401,
        content={
            "success": False,
            "message": "Authentication failed. Please try again.",
            "loginUrl": settings.login_url,
        },
    )
