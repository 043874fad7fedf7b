"""Recipe nutrition derived from catalog ingredients."""

from dataclasses import dataclass

from recipe_matcher.domain.recipes import Recipe
from recipe_matcher.services.catalog import IngredientCatalog


@dataclass(frozen=True)
class NutritionTotals:
    """Macro totals for a recipe portion."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


@dataclass
class RecipeNutritionService:
    """Computes recipe nutrition from per-100 g ingredient data."""

    ingredients: IngredientCatalog

    def total(self, recipe: Recipe) -> NutritionTotals:
        """Return totals for the whole recipe using primary ingredients."""
        calories = protein = carbs = fat = fiber = 0.0
        for requirement in recipe.requirements:
            facts = self.ingredients.get(requirement.ingredient_id).nutrition
            factor = requirement.quantity_g / 100.0
            calories += facts.calories * factor
            protein += facts.protein_g * factor
            carbs += facts.carbs_g * factor
            fat += facts.fat_g * factor
            fiber += facts.fiber_g * factor
        return NutritionTotals(
            calories=round(calories, 1),
            protein_g=round(protein, 1),
            carbs_g=round(carbs, 1),
            fat_g=round(fat, 1),
            fiber_g=round(fiber, 1),
        )

    def per_serving(self, recipe: Recipe) -> NutritionTotals:
        """Return totals divided by the recipe's servings."""
        total = self.total(recipe)
        servings = max(recipe.servings, 1)
        return NutritionTotals(
            calories=round(total.calories / servings, 1),
            protein_g=round(total.protein_g / servings, 1),
            carbs_g=round(total.carbs_g / servings, 1),
            fat_g=round(total.fat_g / servings, 1),
            fiber_g=round(total.fiber_g / servings, 1),
        )
