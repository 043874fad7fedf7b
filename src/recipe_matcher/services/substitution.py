"""Resolve recipe requirements against available ingredients."""

from dataclasses import dataclass

from recipe_matcher.domain.errors import InvalidConstraintError
from recipe_matcher.domain.ingredients import Month
from recipe_matcher.domain.matching import (
    DEFAULT_ACCEPTANCE_THRESHOLD,
    AvailableIngredientSet,
    SatisfiedBy,
)
from recipe_matcher.domain.recipes import Requirement
from recipe_matcher.services.catalog import IngredientCatalog


@dataclass(frozen=True)
class SubstitutionResolver:
    """Pick the ingredient that satisfies a requirement, if any.

    The primary ingredient wins when available. Otherwise substitutes are
    tried in the order the recipe declares them; detection confidence never
    reorders them. When a season month is set, out-of-season candidates are
    ignored.
    """

    ingredients: IngredientCatalog
    acceptance_threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD
    season: Month | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.acceptance_threshold <= 1.0:
            raise InvalidConstraintError("Acceptance threshold must be within [0, 1]")

    def resolve(
        self, requirement: Requirement, available: AvailableIngredientSet
    ) -> SatisfiedBy | None:
        """Return which ingredient satisfies the requirement, or None."""
        for position, ingredient_id in enumerate(requirement.candidate_ids()):
            if self.is_available(ingredient_id, available):
                return SatisfiedBy(
                    requirement_id=requirement.id,
                    ingredient_id=ingredient_id,
                    via_substitute=position > 0,
                )
        return None

    def is_available(
        self, ingredient_id: str, available: AvailableIngredientSet
    ) -> bool:
        """Return True when the ingredient counts as available."""
        if ingredient_id not in available:
            return False
        if available.confidence(ingredient_id) < self.acceptance_threshold:
            return False
        if self.season is None:
            return True
        return self.ingredients.get(ingredient_id).in_season(self.season)
