"""ASGI entrypoint for the recipe matcher API."""

from recipe_matcher.api.app import create_app
from recipe_matcher.containers import build_container

app = create_app(build_container())
