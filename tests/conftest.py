"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from recipe_matcher.config import Settings
from recipe_matcher.containers import AppContainer, build_container
from recipe_matcher.domain.catalog_documents import (
    IngredientDocument,
    NutritionDocument,
    RecipeDocument,
    RequirementDocument,
)
from recipe_matcher.domain.ingredients import IngredientCategory, Month
from recipe_matcher.domain.recipes import Recipe, Requirement
from recipe_matcher.services.catalog import (
    CatalogSource,
    IngredientCatalog,
    RecipeCatalog,
    build_catalogs,
)
from recipe_matcher.services.recognition import VisionClient
from recipe_matcher.services.scoring import MatchScorer

SUMMER = [Month.JUNE, Month.JULY, Month.AUGUST, Month.SEPTEMBER]


def ingredient_doc(  # noqa: PLR0913
    ingredient_id: str,
    name: str,
    category: IngredientCategory = IngredientCategory.OTHER,
    *,
    calories: float = 0.0,
    protein: float = 0.0,
    allergens: list[str] | None = None,
    seasonality: list[Month] | None = None,
    aliases: list[str] | None = None,
) -> IngredientDocument:
    return IngredientDocument(
        id=ingredient_id,
        name=name,
        category=category,
        nutrition=NutritionDocument(calories=calories, protein=protein),
        allergens=allergens or [],
        seasonality=seasonality or [],
        aliases=aliases or [],
    )


def make_recipe(  # noqa: PLR0913
    recipe_id: str,
    requirements: list[Requirement],
    *,
    rating: float = 4.0,
    cook_time_minutes: int = 30,
    servings: int = 4,
    name: str | None = None,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=name or recipe_id,
        image_url=None,
        cook_time_minutes=cook_time_minutes,
        servings=servings,
        rating=rating,
        requirements=tuple(requirements),
    )


def req(
    ingredient_id: str,
    *,
    weight: float = 1.0,
    substitutes: tuple[str, ...] = (),
    optional: bool = False,
    quantity_g: float = 100.0,
) -> Requirement:
    return Requirement(
        id=ingredient_id,
        ingredient_id=ingredient_id,
        quantity_g=quantity_g,
        substitutes=substitutes,
        optional=optional,
        weight=weight,
    )


INGREDIENT_DOCUMENTS = [
    ingredient_doc(
        "makarna",
        "Makarna",
        IngredientCategory.GRAIN,
        calories=350,
        protein=12,
        allergens=["gluten"],
        aliases=["pasta"],
    ),
    ingredient_doc("zeytinyagi", "Zeytinyağı", calories=900, aliases=["olive oil"]),
    ingredient_doc(
        "domates",
        "Domates",
        IngredientCategory.VEGETABLE,
        calories=20,
        seasonality=SUMMER,
        aliases=["tomato"],
    ),
    ingredient_doc("salca", "Salça", aliases=["tomato paste"]),
    ingredient_doc("sogan", "Soğan", IngredientCategory.VEGETABLE, aliases=["onion"]),
    ingredient_doc(
        "sut", "Süt", IngredientCategory.DAIRY, allergens=["milk"], aliases=["milk"]
    ),
    ingredient_doc(
        "tereyagi",
        "Tereyağı",
        IngredientCategory.DAIRY,
        allergens=["milk"],
        aliases=["butter"],
    ),
    ingredient_doc(
        "patlican", "Patlıcan", IngredientCategory.VEGETABLE, seasonality=SUMMER
    ),
    ingredient_doc("maydanoz", "Maydanoz", IngredientCategory.HERB),
    ingredient_doc("pul_biber", "Pul Biber", IngredientCategory.SPICE),
]

RECIPE_DOCUMENTS = [
    RecipeDocument(
        id="sebzeli_makarna",
        name="Sebzeli Makarna",
        cook_time_minutes=30,
        servings=4,
        rating=4.7,
        requirements=[
            RequirementDocument(ingredient_id="makarna", quantity_g=400, weight=2),
            RequirementDocument(ingredient_id="zeytinyagi", quantity_g=30),
            RequirementDocument(
                ingredient_id="domates", quantity_g=300, substitutes=["salca"]
            ),
        ],
    ),
    RecipeDocument(
        id="domates_corbasi",
        name="Domates Çorbası",
        cook_time_minutes=25,
        servings=4,
        rating=4.5,
        requirements=[
            RequirementDocument(
                ingredient_id="domates", quantity_g=500, weight=2, substitutes=["salca"]
            ),
            RequirementDocument(ingredient_id="sogan", quantity_g=100),
            RequirementDocument(
                ingredient_id="tereyagi", quantity_g=20, substitutes=["zeytinyagi"]
            ),
            RequirementDocument(ingredient_id="sut", quantity_g=200, optional=True),
        ],
    ),
    RecipeDocument(
        id="patlican_kizartmasi",
        name="Patlıcan Kızartması",
        cook_time_minutes=20,
        servings=2,
        rating=4.5,
        requirements=[
            RequirementDocument(ingredient_id="patlican", quantity_g=600, weight=2),
            RequirementDocument(ingredient_id="zeytinyagi", quantity_g=100),
            RequirementDocument(ingredient_id="maydanoz", quantity_g=10, optional=True),
        ],
    ),
]


@dataclass
class InMemoryCatalogSource(CatalogSource):
    """Catalog source returning fixed documents."""

    ingredients: list[IngredientDocument] = field(
        default_factory=lambda: list(INGREDIENT_DOCUMENTS)
    )
    recipes: list[RecipeDocument] = field(
        default_factory=lambda: list(RECIPE_DOCUMENTS)
    )

    def load_ingredients(self) -> list[IngredientDocument]:
        return self.ingredients

    def load_recipes(self) -> list[RecipeDocument]:
        return self.recipes


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "items": [
                {"label": "Tomato", "confidence": 0.9, "estimated_grams": 300},
                {"label": "domates", "confidence": 0.6, "estimated_grams": None},
                {"label": "Pasta", "confidence": 0.4, "estimated_grams": None},
                {"label": "unicorn horn", "confidence": 0.8, "estimated_grams": 5},
            ]
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append({"model": model, "image_data_url": image_data_url})
        return self.payload


@pytest.fixture
def ingredient_catalog() -> IngredientCatalog:
    return IngredientCatalog(doc.to_domain() for doc in INGREDIENT_DOCUMENTS)


@pytest.fixture
def recipe_catalog() -> RecipeCatalog:
    return build_catalogs(INGREDIENT_DOCUMENTS, RECIPE_DOCUMENTS).recipes


@pytest.fixture
def scorer(ingredient_catalog: IngredientCatalog) -> MatchScorer:
    return MatchScorer(ingredient_catalog)


@pytest.fixture
def sebzeli_makarna(recipe_catalog: RecipeCatalog) -> Recipe:
    recipe = recipe_catalog.get("sebzeli_makarna")
    assert recipe is not None
    return recipe


@pytest.fixture
def settings() -> Settings:
    return Settings(
        catalog_backend="file",
        catalog_path="unused.json",
        openai_api_key=None,
        excluded_allergens=None,
        acceptance_threshold=0.5,
        default_page_size=10,
        scoring_workers=1,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings, source=InMemoryCatalogSource())
