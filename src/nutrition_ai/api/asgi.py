"""ASGI entrypoint for the nutrition AI API."""

from nutrition_ai.api.app import create_app
from nutrition_ai.containers import build_container

app = create_app(build_container())
