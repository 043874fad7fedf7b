"""Read-only ingredient and recipe catalogs."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from pydantic import ValidationError

from recipe_matcher.domain.catalog_documents import IngredientDocument, RecipeDocument
from recipe_matcher.domain.errors import CatalogIntegrityError
from recipe_matcher.domain.ingredients import Ingredient, IngredientCategory
from recipe_matcher.domain.recipes import Recipe

_logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Interface for stores that provide raw catalog documents."""

    def load_ingredients(self) -> list[IngredientDocument]:
        """Return every ingredient document."""

    def load_recipes(self) -> list[RecipeDocument]:
        """Return every recipe document."""


class IngredientCatalog:
    """Lookup structure over canonical ingredients."""

    def __init__(self, ingredients: Iterable[Ingredient]) -> None:
        by_id: dict[str, Ingredient] = {}
        for ingredient in ingredients:
            if ingredient.id in by_id:
                raise CatalogIntegrityError(
                    f"Duplicate ingredient id {ingredient.id!r}"
                )
            by_id[ingredient.id] = ingredient
        self._by_id = MappingProxyType(by_id)
        names: dict[str, str] = {}
        for ingredient in by_id.values():
            for name in (ingredient.name, *ingredient.aliases):
                names.setdefault(name.casefold().strip(), ingredient.id)
        self._by_name = MappingProxyType(names)

    def __contains__(self, ingredient_id: object) -> bool:
        return ingredient_id in self._by_id

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, ingredient_id: str) -> Ingredient:
        """Return an ingredient by id."""
        try:
            return self._by_id[ingredient_id]
        except KeyError:
            raise KeyError(f"Unknown ingredient id {ingredient_id!r}") from None

    def find_by_name(self, label: str) -> Ingredient | None:
        """Find an ingredient by display name or alias, ignoring case."""
        ingredient_id = self._by_name.get(label.casefold().strip())
        if ingredient_id is None:
            return None
        return self._by_id[ingredient_id]

    def group_by_category(
        self, ingredient_ids: Iterable[str]
    ) -> dict[IngredientCategory, list[Ingredient]]:
        """Group known ingredients by category in enumeration order."""
        groups: dict[IngredientCategory, list[Ingredient]] = {}
        seen: set[str] = set()
        resolved = []
        for ingredient_id in ingredient_ids:
            if ingredient_id in seen or ingredient_id not in self._by_id:
                continue
            seen.add(ingredient_id)
            resolved.append(self._by_id[ingredient_id])
        for category in IngredientCategory:
            members = [item for item in resolved if item.category == category]
            if members:
                groups[category] = members
        return groups


class RecipeCatalog:
    """Validated, read-only recipe collection."""

    def __init__(
        self, recipes: Iterable[Recipe], ingredients: IngredientCatalog
    ) -> None:
        by_id: dict[str, Recipe] = {}
        for recipe in recipes:
            if recipe.id in by_id:
                raise CatalogIntegrityError(f"Duplicate recipe id {recipe.id!r}")
            _validate_recipe(recipe, ingredients)
            by_id[recipe.id] = recipe
        self._by_id = MappingProxyType(by_id)
        self.ingredients = ingredients

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._by_id

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        return self._by_id.get(recipe_id)

    def top_rated(self, limit: int = 5) -> list[Recipe]:
        """Return the highest rated recipes, shorter cook time first on ties."""
        ranked = sorted(
            self._by_id.values(),
            key=lambda recipe: (-recipe.rating, recipe.cook_time_minutes, recipe.id),
        )
        return ranked[: max(limit, 0)]


def _validate_recipe(recipe: Recipe, ingredients: IngredientCatalog) -> None:
    """Check requirement references and shape for one recipe."""
    if not recipe.requirements:
        raise CatalogIntegrityError(f"Recipe {recipe.id!r} has no requirements")
    requirement_ids: set[str] = set()
    for requirement in recipe.requirements:
        if requirement.id in requirement_ids:
            raise CatalogIntegrityError(
                f"Recipe {recipe.id!r} repeats requirement {requirement.id!r}"
            )
        requirement_ids.add(requirement.id)
        if requirement.weight <= 0:
            raise CatalogIntegrityError(
                f"Requirement {requirement.id!r} of recipe {recipe.id!r} "
                "must have a positive weight"
            )
        for ingredient_id in requirement.candidate_ids():
            if ingredient_id not in ingredients:
                raise CatalogIntegrityError(
                    f"Recipe {recipe.id!r} references unknown ingredient "
                    f"{ingredient_id!r}"
                )


@dataclass(frozen=True)
class Catalogs:
    """Ingredient and recipe catalogs loaded together."""

    ingredients: IngredientCatalog
    recipes: RecipeCatalog


def build_catalogs(
    ingredient_documents: Iterable[IngredientDocument],
    recipe_documents: Iterable[RecipeDocument],
) -> Catalogs:
    """Build validated catalogs from parsed documents."""
    ingredients = IngredientCatalog(doc.to_domain() for doc in ingredient_documents)
    recipes = RecipeCatalog((doc.to_domain() for doc in recipe_documents), ingredients)
    return Catalogs(ingredients=ingredients, recipes=recipes)


def load_catalogs(source: CatalogSource) -> Catalogs:
    """Load and validate both catalogs from a source."""
    try:
        catalogs = build_catalogs(source.load_ingredients(), source.load_recipes())
    except ValidationError as exc:
        _logger.error("Catalog document validation failed: %s", exc)
        raise CatalogIntegrityError(f"Malformed catalog document: {exc}") from exc
    except CatalogIntegrityError as exc:
        _logger.error("Catalog integrity check failed: %s", exc)
        raise
    _logger.info(
        "Loaded catalogs: ingredients=%s recipes=%s",
        len(catalogs.ingredients),
        len(catalogs.recipes),
    )
    return catalogs
