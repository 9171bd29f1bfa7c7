"""User profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Query, Request

from nutrition_ai.api.responses import ok

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer
    from nutrition_ai.domain.models import UserOverview

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}")
async def get_user_overview(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the profile, last week of meals, active goal and stats."""
    container: AppContainer = request.app.state.container
    return ok(_overview_document(container.user_service.get_overview(user_id)))


@router.put("/{user_id}")
async def update_user(
    user_id: UUID, request: Request, updates: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    profile = container.user_service.update_user(user_id, updates)
    return ok(profile, message="User profile updated successfully")


@router.post("/{user_id}")
async def create_user(
    user_id: str, request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Create a profile; the store assigns the id, so the path id is unused."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.create_user(payload)
    return ok(profile, message="User profile created successfully")


@router.get("/{user_id}/meals")
async def list_user_meals(
    user_id: UUID, request: Request, limit: int = Query(default=50, ge=1, le=500)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return ok(container.meal_service.list_user_meals(user_id, limit=limit))


def _overview_document(overview: UserOverview) -> dict[str, object]:
    return {
        "profile": overview.profile,
        "recentMeals": overview.recent_meals,
        "activeGoal": overview.active_goal,
        "stats": {
            "totalMeals": overview.total_meals,
            "averageDailyCalories": overview.average_daily_calories,
        },
    }
