"""Nutrition goal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Request

from nutrition_ai.api.responses import ok
from nutrition_ai.serialization import to_document

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/users/{user_id}/goals")
async def list_goals(user_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return ok(container.goal_service.list_goals(user_id))


@router.post("/users/{user_id}/goals")
async def create_goal(
    user_id: UUID, request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    goal = container.goal_service.create_goal(user_id, payload)
    return ok(goal, message="Goal created successfully")


@router.get("/users/{user_id}/goals/active")
async def get_active_goal(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the active goal; data is null when there is none."""
    container: AppContainer = request.app.state.container
    goal = container.goal_service.get_active_goal(user_id)
    return {"success": True, "data": to_document(goal)}


@router.put("/goals/{goal_id}")
async def update_goal(
    goal_id: UUID, request: Request, updates: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    goal = container.goal_service.update_goal(goal_id, updates)
    return ok(goal, message="Goal updated successfully")
