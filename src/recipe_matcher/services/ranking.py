"""Rank the recipe catalog against an available ingredient set."""

import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice

from recipe_matcher.domain.matching import (
    AvailableIngredientSet,
    MatchConstraints,
    MatchResult,
    RankedPage,
)
from recipe_matcher.domain.recipes import Recipe
from recipe_matcher.services.catalog import RecipeCatalog
from recipe_matcher.services.scoring import MatchScorer

_logger = logging.getLogger(__name__)


@dataclass
class RankingEngine:
    """Scores every recipe, drops disqualified ones and sorts the rest."""

    recipes: RecipeCatalog
    scorer: MatchScorer
    max_workers: int = 1
    debug: bool = False

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

    def rank(
        self, available: AvailableIngredientSet, constraints: MatchConstraints
    ) -> RankedPage:
        """Return one page of ranked matches and the total match count."""
        ranked = self._ranked(available, constraints)
        start = constraints.page_offset
        page = ranked[start : start + constraints.page_size]
        if self.debug:
            _logger.info(
                "Ranked recipes: available=%s total=%s offset=%s returned=%s",
                len(available),
                len(ranked),
                start,
                len(page),
            )
        return RankedPage(
            results=tuple(page),
            total_count=len(ranked),
            page_offset=start,
            page_size=constraints.page_size,
        )

    def iter_ranked(
        self, available: AvailableIngredientSet, constraints: MatchConstraints
    ) -> Iterator[MatchResult]:
        """Yield ranked matches from the page offset onward, ignoring page size.

        The whole catalog is scored and sorted before the first item is
        yielded. Each call recomputes from its inputs, so iteration can be
        restarted.
        """
        ranked = self._ranked(available, constraints)
        yield from islice(ranked, constraints.page_offset, None)

    def _ranked(
        self, available: AvailableIngredientSet, constraints: MatchConstraints
    ) -> list[MatchResult]:
        """Score, filter and sort the whole catalog."""
        recipes = list(self.recipes)

        def score(recipe: Recipe) -> MatchResult:
            return self.scorer.score(recipe, available, constraints)

        if self.max_workers > 1 and len(recipes) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(score, recipes))
        else:
            results = [score(recipe) for recipe in recipes]

        qualifying = [result for result in results if not result.disqualified]
        return sorted(qualifying, key=self._sort_key)

    def _sort_key(self, result: MatchResult) -> tuple[int, float, int, int, str]:
        """Order by score, rating, missing mandatory, cook time, then id."""
        recipe = self.recipes.get(result.recipe_id)
        if recipe is None:
            raise KeyError(f"Unknown recipe id {result.recipe_id!r}")
        return (
            -result.match_percentage,
            -recipe.rating,
            result.missing_mandatory_count,
            recipe.cook_time_minutes,
            recipe.id,
        )

