"""Body progress endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Request

from nutrition_ai.api.responses import ok

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer

router = APIRouter(prefix="/api/users", tags=["progress"])


@router.get("/{user_id}/progress")
async def list_progress(user_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return ok(container.progress_service.list_progress(user_id))


@router.post("/{user_id}/progress")
async def record_progress(
    user_id: UUID, request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    record = container.progress_service.record_progress(user_id, payload)
    return ok(record, message="Progress recorded successfully")
