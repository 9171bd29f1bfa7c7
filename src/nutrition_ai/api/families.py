"""Family and team endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Body, Request

from nutrition_ai.api.responses import ok
from nutrition_ai.serialization import to_document

if TYPE_CHECKING:
    from nutrition_ai.containers import AppContainer
    from nutrition_ai.domain.families import Family

router = APIRouter(prefix="/api", tags=["families"])


@router.post("/families")
async def create_family(
    request: Request, payload: dict[str, Any] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    family = container.family_service.create_family(payload)
    return ok(_family_document(family), message="Family created successfully")


@router.get("/families/{family_id}")
async def get_family(family_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return ok(_family_document(container.family_service.get_family(family_id)))


@router.get("/users/{user_id}/families")
async def list_user_families(user_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    families = container.family_service.list_user_families(user_id)
    return ok([_family_document(family) for family in families])


def _family_document(family: Family) -> dict[str, object]:
    document = to_document(family)
    document["memberIds"] = family.member_ids
    return document
