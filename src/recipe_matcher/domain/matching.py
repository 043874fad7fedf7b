"""Models for match inputs, constraints and results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from recipe_matcher.domain.errors import InvalidConstraintError
from recipe_matcher.domain.ingredients import Month

DEFAULT_ACCEPTANCE_THRESHOLD = 0.5
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class AvailableIngredient:
    """Detection or entry for a single ingredient."""

    confidence: float = 1.0
    quantity_g: float | None = None


@dataclass(frozen=True)
class AvailableIngredientSet:
    """Snapshot of ingredients the user has, keyed by catalog id."""

    items: Mapping[str, AvailableIngredient] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for ingredient_id, item in self.items.items():
            if not 0.0 <= item.confidence <= 1.0:
                raise InvalidConstraintError(
                    f"Confidence for {ingredient_id!r} must be within [0, 1]"
                )
        object.__setattr__(self, "items", dict(self.items))

    @classmethod
    def from_confidences(
        cls, confidences: Mapping[str, float]
    ) -> "AvailableIngredientSet":
        """Build a set from a plain id to confidence mapping."""
        return cls(
            {
                ingredient_id: AvailableIngredient(confidence=confidence)
                for ingredient_id, confidence in confidences.items()
            }
        )

    def __contains__(self, ingredient_id: object) -> bool:
        return ingredient_id in self.items

    def __len__(self) -> int:
        return len(self.items)

    def get(self, ingredient_id: str) -> AvailableIngredient | None:
        """Return the entry for an id, if present."""
        return self.items.get(ingredient_id)

    def confidence(self, ingredient_id: str) -> float:
        """Return the confidence for an id, or 0.0 when it is absent."""
        item = self.items.get(ingredient_id)
        return item.confidence if item is not None else 0.0


@dataclass(frozen=True)
class MatchConstraints:
    """Caller-supplied policy and paging options for a ranking request."""

    excluded_allergens: frozenset[str] = frozenset()
    seasonal_only: bool = False
    month: Month | None = None
    acceptance_threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD
    page_size: int = DEFAULT_PAGE_SIZE
    page_offset: int = 0

    def __post_init__(self) -> None:
        # Catalog allergen tags are stored lowercased.
        allergens = (tag.strip().lower() for tag in self.excluded_allergens)
        object.__setattr__(
            self, "excluded_allergens", frozenset(tag for tag in allergens if tag)
        )
        if not 0.0 <= self.acceptance_threshold <= 1.0:
            raise InvalidConstraintError("Acceptance threshold must be within [0, 1]")
        if self.page_size < 1:
            raise InvalidConstraintError("Page size must be a positive integer")
        if self.page_offset < 0:
            raise InvalidConstraintError("Page offset must not be negative")
        if self.seasonal_only and self.month is None:
            raise InvalidConstraintError("Seasonal filtering requires a month")


class DisqualificationReason(StrEnum):
    """Hard policy that excluded a recipe."""

    ALLERGEN = "allergen"
    SEASON = "season"


@dataclass(frozen=True)
class SatisfiedBy:
    """Which ingredient satisfied a requirement."""

    requirement_id: str
    ingredient_id: str
    via_substitute: bool = False


@dataclass(frozen=True)
class MatchResult:
    """Computed match of one recipe against one available set."""

    recipe_id: str
    match_percentage: int
    satisfied: tuple[SatisfiedBy, ...]
    missing: tuple[str, ...]
    missing_mandatory_count: int
    disqualified: bool = False
    disqualification_reason: DisqualificationReason | None = None


@dataclass(frozen=True)
class RankedPage:
    """A page of ranked results and the total number of matches."""

    results: tuple[MatchResult, ...]
    total_count: int
    page_offset: int
    page_size: int
