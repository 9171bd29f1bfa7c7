"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_ai.adapters.openai_vision_client import OpenAIVisionClient
from nutrition_ai.adapters.supabase_family_repository import SupabaseFamilyRepository
from nutrition_ai.adapters.supabase_goal_repository import SupabaseGoalRepository
from nutrition_ai.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrition_ai.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from nutrition_ai.adapters.supabase_user_repository import SupabaseUserRepository
from nutrition_ai.config import Settings
from nutrition_ai.services.auth import AuthService
from nutrition_ai.services.families import FamilyService
from nutrition_ai.services.goals import GoalService
from nutrition_ai.services.meals import MealService
from nutrition_ai.services.progress import ProgressService
from nutrition_ai.services.users import UserService
from nutrition_ai.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    vision_service: VisionService
    meal_service: MealService
    user_service: UserService
    goal_service: GoalService
    progress_service: ProgressService
    family_service: FamilyService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    openai_client = OpenAIVisionClient.create(
        resolved_settings.openai_api_key,
        timeout=resolved_settings.openai_timeout_seconds,
    )
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        retry_attempts=resolved_settings.vision_retry_attempts,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(resolved_settings.auth_password),
        vision_service=vision_service,
        meal_service=MealService(
            vision_service=vision_service, repository=meal_repository
        ),
        user_service=UserService(
            repository=SupabaseUserRepository(supabase_client),
            meal_repository=meal_repository,
            goal_repository=goal_repository,
        ),
        goal_service=GoalService(goal_repository),
        progress_service=ProgressService(SupabaseProgressRepository(supabase_client)),
        family_service=FamilyService(SupabaseFamilyRepository(supabase_client)),
        close_resources=close_resources,
    )
