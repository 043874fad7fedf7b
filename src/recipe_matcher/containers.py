"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from recipe_matcher.adapters.json_catalog_source import JsonFileCatalogSource
from recipe_matcher.adapters.openai_vision_client import OpenAIVisionClient
from recipe_matcher.adapters.supabase_catalog_source import SupabaseCatalogSource
from recipe_matcher.config import Settings
from recipe_matcher.services.catalog import (
    CatalogSource,
    IngredientCatalog,
    RecipeCatalog,
    load_catalogs,
)
from recipe_matcher.services.nutrition import RecipeNutritionService
from recipe_matcher.services.ranking import RankingEngine
from recipe_matcher.services.recognition import RecognitionService
from recipe_matcher.services.scoring import MatchScorer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ingredient_catalog: IngredientCatalog
    recipe_catalog: RecipeCatalog
    match_scorer: MatchScorer
    ranking_engine: RankingEngine
    nutrition_service: RecipeNutritionService
    recognition_service: RecognitionService | None
    close_resources: Callable[[], Awaitable[None]]


def build_catalog_source(settings: Settings) -> CatalogSource:
    """Create the catalog source selected by settings."""
    if settings.catalog_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase catalog backend requires URL and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseCatalogSource(client)
    if settings.catalog_backend == "file":
        return JsonFileCatalogSource(Path(settings.catalog_path))
    raise ValueError(f"Unknown catalog backend {settings.catalog_backend!r}")


def build_container(
    settings: Settings | None = None, source: CatalogSource | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalogs = load_catalogs(source or build_catalog_source(resolved_settings))
    scorer = MatchScorer(catalogs.ingredients)
    ranking_engine = RankingEngine(
        recipes=catalogs.recipes,
        scorer=scorer,
        max_workers=resolved_settings.scoring_workers,
        debug=resolved_settings.debug,
    )
    vision_client: OpenAIVisionClient | None = None
    recognition_service: RecognitionService | None = None
    if resolved_settings.openai_api_key:
        vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
        recognition_service = RecognitionService(
            client=vision_client,
            ingredients=catalogs.ingredients,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )

    async def close_resources() -> None:
        if vision_client is not None:
            await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        ingredient_catalog=catalogs.ingredients,
        recipe_catalog=catalogs.recipes,
        match_scorer=scorer,
        ranking_engine=ranking_engine,
        nutrition_service=RecipeNutritionService(catalogs.ingredients),
        recognition_service=recognition_service,
        close_resources=close_resources,
    )
