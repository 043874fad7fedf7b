"""Tests for photo recognition."""

import asyncio

from recipe_matcher.services.catalog import IngredientCatalog
from recipe_matcher.services.recognition import RecognitionService, _to_data_url
from tests.conftest import FakeVisionClient


def _service(
    ingredient_catalog: IngredientCatalog, client: FakeVisionClient
) -> RecognitionService:
    return RecognitionService(
        client=client,
        ingredients=ingredient_catalog,
        model="gpt-5.2",
        reasoning_effort="low",
        store=False,
    )


def test_detect_resolves_labels_and_keeps_best_confidence(
    ingredient_catalog: IngredientCatalog,
) -> None:
    client = FakeVisionClient()

    recognition = asyncio.run(_service(ingredient_catalog, client).detect(b"photo"))

    tomato = recognition.available.get("domates")
    assert tomato is not None
    assert tomato.confidence == 0.9
    assert tomato.quantity_g == 300.0
    assert recognition.available.confidence("makarna") == 0.4
    assert recognition.unresolved_labels == ("unicorn horn",)
    assert client.calls[0]["image_data_url"].startswith("data:image/jpeg;base64,")


def test_detect_handles_empty_extract(ingredient_catalog: IngredientCatalog) -> None:
    client = FakeVisionClient(payload={"items": []})

    recognition = asyncio.run(_service(ingredient_catalog, client).detect(b"photo"))

    assert len(recognition.available) == 0
    assert recognition.unresolved_labels == ()


def test_detect_keeps_zero_gram_estimate(ingredient_catalog: IngredientCatalog) -> None:
    client = FakeVisionClient(
        payload={
            "items": [
                {"label": "Onion", "confidence": 0.7, "estimated_grams": 0},
                {"label": "Pasta", "confidence": 0.8, "estimated_grams": None},
            ]
        }
    )

    recognition = asyncio.run(_service(ingredient_catalog, client).detect(b"photo"))

    onion = recognition.available.get("sogan")
    pasta = recognition.available.get("makarna")
    assert onion is not None and onion.quantity_g == 0.0
    assert pasta is not None and pasta.quantity_g is None


def test_to_data_url_uses_png_header() -> None:
    url = _to_data_url(b"\x89PNG\r\n\x1a\n" + b"rest")

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    assert _to_data_url(b"unknown").startswith("data:image/jpeg;base64,")
