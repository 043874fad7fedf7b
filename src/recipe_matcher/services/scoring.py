"""Score one recipe against an available ingredient set."""

import math
from dataclasses import dataclass
from fractions import Fraction

from recipe_matcher.domain.matching import (
    AvailableIngredientSet,
    DisqualificationReason,
    MatchConstraints,
    MatchResult,
    SatisfiedBy,
)
from recipe_matcher.domain.recipes import Recipe, Requirement
from recipe_matcher.services.catalog import IngredientCatalog
from recipe_matcher.services.substitution import SubstitutionResolver

OPTIONAL_FACTOR = Fraction(1, 2)


@dataclass(frozen=True)
class MatchScorer:
    """Computes match percentage, satisfied and missing requirements."""

    ingredients: IngredientCatalog

    def resolver_for(self, constraints: MatchConstraints) -> SubstitutionResolver:
        """Return the resolver configured for the given constraints."""
        return SubstitutionResolver(
            ingredients=self.ingredients,
            acceptance_threshold=constraints.acceptance_threshold,
            season=constraints.month if constraints.seasonal_only else None,
        )

    def score(
        self,
        recipe: Recipe,
        available: AvailableIngredientSet,
        constraints: MatchConstraints | None = None,
    ) -> MatchResult:
        """Score a recipe; disqualified recipes always score 0."""
        constraints = constraints or MatchConstraints()
        resolver = self.resolver_for(constraints)
        excluded = constraints.excluded_allergens

        satisfied: list[SatisfiedBy] = []
        satisfied_ids: set[str] = set()
        missing: list[str] = []
        reason: DisqualificationReason | None = None

        for requirement in recipe.requirements:
            match = resolver.resolve(requirement, available)
            if match is not None and excluded:
                carries_allergen = self.ingredients.get(
                    match.ingredient_id
                ).has_any_allergen(excluded)
                if carries_allergen and requirement.optional:
                    match = None
                elif carries_allergen and reason is None:
                    reason = DisqualificationReason.ALLERGEN
            if match is None:
                missing.append(requirement.id)
                if reason is None and self._out_of_season(requirement, constraints):
                    reason = DisqualificationReason.SEASON
                continue
            satisfied.append(match)
            satisfied_ids.add(requirement.id)

        missing_mandatory = sum(
            1
            for requirement in recipe.mandatory_requirements
            if requirement.id not in satisfied_ids
        )
        percentage = 0
        if reason is None:
            percentage = _weighted_percentage(recipe, satisfied_ids)
        return MatchResult(
            recipe_id=recipe.id,
            match_percentage=percentage,
            satisfied=tuple(satisfied),
            missing=tuple(missing),
            missing_mandatory_count=missing_mandatory,
            disqualified=reason is not None,
            disqualification_reason=reason,
        )

    def _out_of_season(
        self, requirement: Requirement, constraints: MatchConstraints
    ) -> bool:
        """Return True for an unmet mandatory slot whose primary is out of season."""
        if requirement.optional or not constraints.seasonal_only:
            return False
        if constraints.month is None:
            return False
        primary = self.ingredients.get(requirement.ingredient_id)
        return not primary.in_season(constraints.month)


def _weighted_percentage(recipe: Recipe, satisfied_ids: set[str]) -> int:
    """Weighted share of satisfied requirements, rounded half up."""
    earned = Fraction(0)
    possible = Fraction(0)
    for requirement in recipe.requirements:
        weight = Fraction(str(requirement.weight))
        if requirement.optional:
            weight *= OPTIONAL_FACTOR
        possible += weight
        if requirement.id in satisfied_ids:
            earned += weight
    if possible == 0:
        return 0
    return math.floor(100 * earned / possible + Fraction(1, 2))
