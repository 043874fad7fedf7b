"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException, Request, status

from recipe_matcher.api.models import (
    AvailableItemPayload,
    IngredientGroupPayload,
    IngredientGroupRequest,
    IngredientPayload,
    MatchPagePayload,
    MatchPayload,
    MatchRequest,
    MissingPayload,
    NutritionPayload,
    RecipeSummaryPayload,
    RecognitionPayload,
    SatisfiedPayload,
)
from recipe_matcher.app_logging import configure_logging
from recipe_matcher.config import parse_allergens
from recipe_matcher.containers import AppContainer
from recipe_matcher.domain.errors import InvalidConstraintError
from recipe_matcher.domain.ingredients import Month
from recipe_matcher.domain.matching import (
    AvailableIngredient,
    AvailableIngredientSet,
    MatchConstraints,
    MatchResult,
)

_logger = logging.getLogger(__name__)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/matches")
    async def rank_matches(payload: MatchRequest, request: Request) -> MatchPagePayload:
        """Rank the recipe catalog against the posted ingredients."""
        state_container: AppContainer = request.app.state.container
        available, constraints = _parse_request(payload, state_container)
        page = state_container.ranking_engine.rank(available, constraints)
        return MatchPagePayload(
            results=[
                _match_payload(result, state_container) for result in page.results
            ],
            total_count=page.total_count,
            page_offset=page.page_offset,
            page_size=page.page_size,
        )

    @app.post("/recipes/{recipe_id}/match")
    async def match_recipe(
        recipe_id: str, payload: MatchRequest, request: Request
    ) -> MatchPayload:
        """Score a single recipe, including disqualified outcomes."""
        state_container: AppContainer = request.app.state.container
        recipe = state_container.recipe_catalog.get(recipe_id)
        if recipe is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        available, constraints = _parse_request(payload, state_container)
        result = state_container.match_scorer.score(recipe, available, constraints)
        return _match_payload(result, state_container)

    @app.get("/recipes/popular")
    async def popular_recipes(
        request: Request, limit: int = 5
    ) -> list[RecipeSummaryPayload]:
        """Return top-rated recipes with nutrition per serving."""
        state_container: AppContainer = request.app.state.container
        nutrition_service = state_container.nutrition_service
        return [
            RecipeSummaryPayload(
                id=recipe.id,
                name=recipe.name,
                image_url=recipe.image_url,
                cook_time_minutes=recipe.cook_time_minutes,
                servings=recipe.servings,
                rating=recipe.rating,
                nutrition_per_serving=NutritionPayload(
                    **asdict(nutrition_service.per_serving(recipe))
                ),
            )
            for recipe in state_container.recipe_catalog.top_rated(limit)
        ]

    @app.post("/ingredients/groups")
    async def group_ingredients(
        payload: IngredientGroupRequest, request: Request
    ) -> list[IngredientGroupPayload]:
        """Group ingredient ids by category for display."""
        state_container: AppContainer = request.app.state.container
        groups = state_container.ingredient_catalog.group_by_category(
            payload.ingredient_ids
        )
        return [
            IngredientGroupPayload(
                category=category.value,
                ingredients=[
                    IngredientPayload(
                        id=item.id,
                        name=item.name,
                        image_url=item.image_url,
                        calories_per_100g=item.nutrition.calories,
                    )
                    for item in items
                ],
            )
            for category, items in groups.items()
        ]

    @app.post("/recognitions")
    async def recognize(request: Request) -> RecognitionPayload:
        """Detect catalog ingredients in an uploaded photo body."""
        state_container: AppContainer = request.app.state.container
        service = state_container.recognition_service
        if service is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Recognition is not configured",
            )
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image body"
            )
        recognition = await service.detect(image_bytes)
        return RecognitionPayload(
            available={
                ingredient_id: AvailableItemPayload(
                    confidence=item.confidence, quantity_g=item.quantity_g
                )
                for ingredient_id, item in recognition.available.items.items()
            },
            unresolved_labels=list(recognition.unresolved_labels),
        )

    return app


def _parse_request(
    payload: MatchRequest, container: AppContainer
) -> tuple[AvailableIngredientSet, MatchConstraints]:
    """Build domain inputs, rejecting malformed constraints with 422."""
    settings = container.settings
    excluded = (
        parse_allergens(",".join(payload.excluded_allergens))
        if payload.excluded_allergens is not None
        else parse_allergens(settings.excluded_allergens)
    )
    month = payload.month
    if payload.seasonal_only and month is None:
        month = datetime.now(tz=UTC).month
    try:
        available = AvailableIngredientSet(
            {
                ingredient_id: AvailableIngredient(
                    confidence=item.confidence, quantity_g=item.quantity_g
                )
                for ingredient_id, item in payload.available.items()
            }
        )
        constraints = MatchConstraints(
            excluded_allergens=excluded,
            seasonal_only=payload.seasonal_only,
            month=Month(month) if month is not None else None,
            acceptance_threshold=(
                payload.acceptance_threshold
                if payload.acceptance_threshold is not None
                else settings.acceptance_threshold
            ),
            page_size=(
                payload.page_size
                if payload.page_size is not None
                else settings.default_page_size
            ),
            page_offset=payload.page_offset,
        )
    except InvalidConstraintError as exc:
        _logger.warning("Rejected match constraints: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(exc)
        ) from exc
    return available, constraints


def _match_payload(result: MatchResult, container: AppContainer) -> MatchPayload:
    """Render a match result with recipe and ingredient names."""
    recipe = container.recipe_catalog.get(result.recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    ingredients = container.ingredient_catalog
    requirements = {requirement.id: requirement for requirement in recipe.requirements}
    return MatchPayload(
        recipe_id=recipe.id,
        recipe_name=recipe.name,
        image_url=recipe.image_url,
        cook_time_minutes=recipe.cook_time_minutes,
        servings=recipe.servings,
        rating=recipe.rating,
        match_percentage=result.match_percentage,
        satisfied=[
            SatisfiedPayload(
                requirement_id=item.requirement_id,
                ingredient_id=item.ingredient_id,
                ingredient_name=ingredients.get(item.ingredient_id).name,
                via_substitute=item.via_substitute,
            )
            for item in result.satisfied
        ],
        missing=[
            MissingPayload(
                requirement_id=requirement_id,
                ingredient_id=requirements[requirement_id].ingredient_id,
                ingredient_name=ingredients.get(
                    requirements[requirement_id].ingredient_id
                ).name,
                optional=requirements[requirement_id].optional,
            )
            for requirement_id in result.missing
        ],
        missing_mandatory_count=result.missing_mandatory_count,
        disqualified=result.disqualified,
        disqualification_reason=(
            result.disqualification_reason.value
            if result.disqualification_reason
            else None
        ),
    )
