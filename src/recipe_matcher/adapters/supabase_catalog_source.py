"""Supabase implementation of the catalog source."""

from collections import defaultdict
from dataclasses import dataclass

from supabase import Client

from recipe_matcher.domain.catalog_documents import (
    IngredientDocument,
    NutritionDocument,
    RecipeDocument,
    RequirementDocument,
)
from recipe_matcher.services.catalog import CatalogSource


@dataclass
class SupabaseCatalogSource(CatalogSource):
    """Supabase-backed catalog tables."""

    client: Client

    def load_ingredients(self) -> list[IngredientDocument]:
        """Return every ingredient row as a document."""
        response = self.client.table("ingredients").select("*").order("id").execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def load_recipes(self) -> list[RecipeDocument]:
        """Return every recipe with its requirements in position order."""
        recipes_response = (
            self.client.table("recipes").select("*").order("id").execute()
        )
        requirements_response = (
            self.client.table("recipe_requirements")
            .select("*")
            .order("recipe_id")
            .order("position")
            .execute()
        )
        by_recipe: dict[str, list[dict[str, object]]] = defaultdict(list)
        for row in requirements_response.data or []:
            by_recipe[str(row["recipe_id"])].append(row)
        return [
            _parse_recipe(row, by_recipe.get(str(row["id"]), []))
            for row in recipes_response.data or []
        ]


def _parse_ingredient(row: dict[str, object]) -> IngredientDocument:
    """Parse an ingredient row into a document."""
    return IngredientDocument(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=row.get("category") or "other",
        nutrition=NutritionDocument(
            calories=float(row.get("calories") or 0.0),
            protein=float(row.get("protein_g") or 0.0),
            carbs=float(row.get("carbs_g") or 0.0),
            fat=float(row.get("fat_g") or 0.0),
            fiber=float(row.get("fiber_g") or 0.0),
            vitamins=row.get("vitamins") or {},
            minerals=row.get("minerals") or {},
        ),
        serving_size_g=float(row.get("serving_size_g") or 100.0),
        allergens=list(row.get("allergens") or []),
        seasonality=list(row.get("seasonality") or []),
        image_url=row.get("image_url"),
        aliases=list(row.get("aliases") or []),
    )


def _parse_recipe(
    row: dict[str, object], requirement_rows: list[dict[str, object]]
) -> RecipeDocument:
    """Parse a recipe row and its requirement rows into a document."""
    ordered = sorted(requirement_rows, key=lambda item: int(item.get("position", 0)))
    return RecipeDocument(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        image_url=row.get("image_url"),
        cook_time_minutes=int(row.get("cook_time_minutes") or 0),
        servings=int(row.get("servings") or 1),
        rating=float(row.get("rating") or 0.0),
        requirements=[
            RequirementDocument(
                id=item.get("requirement_id"),
                ingredient_id=str(item["ingredient_id"]),
                quantity_g=float(item.get("quantity_g") or 0.0),
                substitutes=list(item.get("substitutes") or []),
                optional=bool(item.get("optional", False)),
                weight=_weight(item.get("weight")),
            )
            for item in ordered
        ],
    )


def _weight(raw: object) -> float:
    """Return the requirement weight, defaulting to 1 when unset."""
    if raw is None:
        return 1.0
    return float(raw)
