"""Pydantic models for catalog documents read from a store."""

from pydantic import BaseModel, Field

from recipe_matcher.domain.ingredients import (
    Ingredient,
    IngredientCategory,
    Month,
    NutritionFacts,
)
from recipe_matcher.domain.recipes import Recipe, Requirement


class NutritionDocument(BaseModel):
    """Nutrition values per 100 g."""

    calories: float = Field(ge=0.0)
    protein: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)
    fiber: float = Field(default=0.0, ge=0.0)
    vitamins: dict[str, float] = Field(default_factory=dict)
    minerals: dict[str, float] = Field(default_factory=dict)


class IngredientDocument(BaseModel):
    """Ingredient entry of a catalog document."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: IngredientCategory = IngredientCategory.OTHER
    nutrition: NutritionDocument
    serving_size_g: float = Field(default=100.0, gt=0.0)
    allergens: list[str] = Field(default_factory=list)
    seasonality: list[Month] = Field(default_factory=list)
    image_url: str | None = None
    aliases: list[str] = Field(default_factory=list)

    def to_domain(self) -> Ingredient:
        """Convert to an immutable domain ingredient."""
        return Ingredient(
            id=self.id,
            name=self.name,
            category=self.category,
            nutrition=NutritionFacts(
                calories=self.nutrition.calories,
                protein_g=self.nutrition.protein,
                carbs_g=self.nutrition.carbs,
                fat_g=self.nutrition.fat,
                fiber_g=self.nutrition.fiber,
                vitamins=dict(self.nutrition.vitamins),
                minerals=dict(self.nutrition.minerals),
            ),
            serving_size_g=self.serving_size_g,
            allergens=frozenset(tag.lower() for tag in self.allergens),
            seasonality=frozenset(self.seasonality),
            image_url=self.image_url,
            aliases=tuple(self.aliases),
        )


class RequirementDocument(BaseModel):
    """Requirement entry of a recipe document."""

    id: str | None = None
    ingredient_id: str = Field(min_length=1)
    quantity_g: float = Field(default=0.0, ge=0.0)
    substitutes: list[str] = Field(default_factory=list)
    optional: bool = False
    weight: float = 1.0

    def to_domain(self) -> Requirement:
        """Convert to a domain requirement, defaulting the id to the primary."""
        return Requirement(
            id=self.id or self.ingredient_id,
            ingredient_id=self.ingredient_id,
            quantity_g=self.quantity_g,
            substitutes=tuple(self.substitutes),
            optional=self.optional,
            weight=self.weight,
        )


class RecipeDocument(BaseModel):
    """Recipe entry of a catalog document."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    image_url: str | None = None
    cook_time_minutes: int = Field(ge=0)
    servings: int = Field(default=1, ge=1)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    requirements: list[RequirementDocument] = Field(default_factory=list)

    def to_domain(self) -> Recipe:
        """Convert to an immutable domain recipe."""
        return Recipe(
            id=self.id,
            name=self.name,
            image_url=self.image_url,
            cook_time_minutes=self.cook_time_minutes,
            servings=self.servings,
            rating=self.rating,
            requirements=tuple(item.to_domain() for item in self.requirements),
        )


class CatalogDocument(BaseModel):
    """Top-level catalog file layout."""

    ingredients: list[IngredientDocument]
    recipes: list[RecipeDocument]
