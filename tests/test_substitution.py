"""Tests for the substitution resolver."""

import pytest

from recipe_matcher.domain.errors import InvalidConstraintError
from recipe_matcher.domain.ingredients import Month
from recipe_matcher.domain.matching import AvailableIngredientSet
from recipe_matcher.services.catalog import IngredientCatalog
from recipe_matcher.services.substitution import SubstitutionResolver
from tests.conftest import req


def test_primary_wins_over_substitute(ingredient_catalog: IngredientCatalog) -> None:
    resolver = SubstitutionResolver(ingredient_catalog)
    available = AvailableIngredientSet.from_confidences({"domates": 0.9, "salca": 1.0})

    result = resolver.resolve(req("domates", substitutes=("salca",)), available)

    assert result is not None
    assert result.ingredient_id == "domates"
    assert not result.via_substitute


def test_substitute_used_when_primary_missing(
    ingredient_catalog: IngredientCatalog,
) -> None:
    resolver = SubstitutionResolver(ingredient_catalog)
    available = AvailableIngredientSet.from_confidences({"salca": 1.0})

    result = resolver.resolve(req("domates", substitutes=("salca",)), available)

    assert result is not None
    assert result.requirement_id == "domates"
    assert result.ingredient_id == "salca"
    assert result.via_substitute


def test_declared_order_beats_confidence(ingredient_catalog: IngredientCatalog) -> None:
    resolver = SubstitutionResolver(ingredient_catalog)
    available = AvailableIngredientSet.from_confidences(
        {"tereyagi": 0.6, "zeytinyagi": 1.0}
    )

    result = resolver.resolve(
        req("sut", substitutes=("tereyagi", "zeytinyagi")), available
    )

    assert result is not None
    assert result.ingredient_id == "tereyagi"


def test_low_confidence_is_not_available(ingredient_catalog: IngredientCatalog) -> None:
    resolver = SubstitutionResolver(ingredient_catalog, acceptance_threshold=0.5)
    available = AvailableIngredientSet.from_confidences(
        {"domates": 0.49, "salca": 0.5}
    )

    result = resolver.resolve(req("domates", substitutes=("salca",)), available)

    assert result is not None
    assert result.ingredient_id == "salca"


def test_unsatisfied_returns_none(ingredient_catalog: IngredientCatalog) -> None:
    resolver = SubstitutionResolver(ingredient_catalog)
    available = AvailableIngredientSet.from_confidences({"sogan": 1.0})

    assert resolver.resolve(req("domates", substitutes=("salca",)), available) is None
    assert resolver.resolve(req("makarna"), available) is None


def test_season_skips_out_of_season_candidates(
    ingredient_catalog: IngredientCatalog,
) -> None:
    resolver = SubstitutionResolver(ingredient_catalog, season=Month.JANUARY)
    available = AvailableIngredientSet.from_confidences({"domates": 1.0, "salca": 1.0})

    result = resolver.resolve(req("domates", substitutes=("salca",)), available)

    assert result is not None
    assert result.ingredient_id == "salca"


def test_threshold_outside_range_is_rejected(
    ingredient_catalog: IngredientCatalog,
) -> None:
    with pytest.raises(InvalidConstraintError):
        SubstitutionResolver(ingredient_catalog, acceptance_threshold=1.5)
