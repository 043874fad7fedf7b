"""Pydantic models for the HTTP request and response payloads."""

from pydantic import BaseModel, Field


class AvailableItemPayload(BaseModel):
    """One available ingredient as sent by a client."""

    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    quantity_g: float | None = Field(default=None, ge=0.0)


class MatchRequest(BaseModel):
    """Available ingredients plus ranking constraints."""

    available: dict[str, AvailableItemPayload] = Field(default_factory=dict)
    excluded_allergens: list[str] | None = None
    seasonal_only: bool = False
    month: int | None = Field(default=None, ge=1, le=12)
    acceptance_threshold: float | None = None
    page_size: int | None = None
    page_offset: int = 0


class SatisfiedPayload(BaseModel):
    """Requirement satisfied by a primary or substitute ingredient."""

    requirement_id: str
    ingredient_id: str
    ingredient_name: str
    via_substitute: bool


class MissingPayload(BaseModel):
    """Requirement that could not be satisfied."""

    requirement_id: str
    ingredient_id: str
    ingredient_name: str
    optional: bool


class MatchPayload(BaseModel):
    """Match result for one recipe."""

    recipe_id: str
    recipe_name: str
    image_url: str | None
    cook_time_minutes: int
    servings: int
    rating: float
    match_percentage: int
    satisfied: list[SatisfiedPayload]
    missing: list[MissingPayload]
    missing_mandatory_count: int
    disqualified: bool
    disqualification_reason: str | None = None


class MatchPagePayload(BaseModel):
    """Page of ranked matches."""

    results: list[MatchPayload]
    total_count: int
    page_offset: int
    page_size: int


class NutritionPayload(BaseModel):
    """Per-serving nutrition."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


class RecipeSummaryPayload(BaseModel):
    """Recipe card data for browsing lists."""

    id: str
    name: str
    image_url: str | None
    cook_time_minutes: int
    servings: int
    rating: float
    nutrition_per_serving: NutritionPayload


class IngredientGroupRequest(BaseModel):
    """Ingredient ids to group for display."""

    ingredient_ids: list[str]


class IngredientPayload(BaseModel):
    """Ingredient entry inside a category group."""

    id: str
    name: str
    image_url: str | None
    calories_per_100g: float


class IngredientGroupPayload(BaseModel):
    """Ingredients that share a category."""

    category: str
    ingredients: list[IngredientPayload]


class RecognitionPayload(BaseModel):
    """Ingredients detected in a photo."""

    available: dict[str, AvailableItemPayload]
    unresolved_labels: list[str]
