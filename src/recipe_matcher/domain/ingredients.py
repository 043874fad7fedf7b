"""Ingredient domain models."""

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum


class IngredientCategory(StrEnum):
    """Closed set of ingredient categories used for UI grouping."""

    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    MEAT = "meat"
    DAIRY = "dairy"
    GRAIN = "grain"
    LEGUME = "legume"
    HERB = "herb"
    SPICE = "spice"
    OTHER = "other"


class Month(IntEnum):
    """Calendar month, numbered like `datetime.date.month`."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrition values per 100 g."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    vitamins: dict[str, float] = field(default_factory=dict)
    minerals: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Ingredient:
    """Canonical ingredient record owned by the ingredient catalog."""

    id: str
    name: str
    category: IngredientCategory
    nutrition: NutritionFacts
    serving_size_g: float
    allergens: frozenset[str] = frozenset()
    seasonality: frozenset[Month] = frozenset()
    image_url: str | None = None
    aliases: tuple[str, ...] = ()

    def in_season(self, month: Month) -> bool:
        """Return True when the ingredient is in season for the month.

        An ingredient without declared months is available all year.
        """
        return not self.seasonality or month in self.seasonality

    def has_any_allergen(self, allergens: frozenset[str]) -> bool:
        """Return True when any of the given allergen tags applies."""
        return not self.allergens.isdisjoint(allergens)
