"""Shared-password validation endpoint."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutrition_ai.api.request_models import AuthRequest
from nutrition_ai.api.responses import ok

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/validate")
async def validate_password(body: AuthRequest, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.auth_service.validate(body.password)
    return ok(
        {"authenticated": True, "timestamp": datetime.now(tz=UTC)},
        message="Authentication successful",
    )
