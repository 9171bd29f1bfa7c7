"""Meal analysis and meal record endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, File, Form, Request, UploadFile

from nutrition_ai.api.request_models import TextMealRequest
from nutrition_ai.api.responses import ok

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.post("/analyze")
async def analyze_meal_image(
    request: Request,
    image: UploadFile | None = File(default=None),
    user_id: str | None = Form(default=None, alias="userId"),
    meal_type: str | None = Form(default=None, alias="mealType"),
    notes: str | None = Form(default=None),
) -> dict[str, object]:
    """Analyze an uploaded meal photo and save the result."""
    container: AppContainer = request.app.state.container
    image_bytes = await image.read() if image is not None else None
    meal, analysis = await container.meal_service.analyze_image(
        user_id, image_bytes, meal_type=meal_type, notes=notes
    )
    return ok({"mealId": meal.id, "meal": meal, "analysis": analysis})


@router.put("/analyze")
async def log_meal_text(body: TextMealRequest, request: Request) -> dict[str, object]:
    """Parse a text description into a saved meal."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.log_text(
        body.user_id, body.food_description, meal_type=body.meal_type, notes=body.notes
    )
    return ok({"mealId": meal.id, "meal": meal})


@router.get("/{meal_id}")
async def get_meal(meal_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return ok(container.meal_service.get_meal(meal_id))


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID, request: Request, updates: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    meal = container.meal_service.update_meal(meal_id, updates)
    return ok(meal, message="Meal updated successfully")


@router.delete("/{meal_id}")
async def delete_meal(meal_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(meal_id)
    return ok(message="Meal deleted successfully")
