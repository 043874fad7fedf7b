"""Recipe domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Requirement:
    """One ingredient slot of a recipe."""

    id: str
    ingredient_id: str
    quantity_g: float
    substitutes: tuple[str, ...] = ()
    optional: bool = False
    weight: float = 1.0

    def candidate_ids(self) -> tuple[str, ...]:
        """Return the primary id followed by substitutes in declared order."""
        return (self.ingredient_id, *self.substitutes)


@dataclass(frozen=True)
class Recipe:
    """Recipe record owned by the recipe catalog."""

    id: str
    name: str
    image_url: str | None
    cook_time_minutes: int
    servings: int
    rating: float
    requirements: tuple[Requirement, ...]

    @property
    def mandatory_requirements(self) -> tuple[Requirement, ...]:
        return tuple(r for r in self.requirements if not r.optional)

    @property
    def optional_requirements(self) -> tuple[Requirement, ...]:
        return tuple(r for r in self.requirements if r.optional)
