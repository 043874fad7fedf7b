"""Photo recognition that produces an available ingredient set."""

import base64
import logging
from dataclasses import dataclass, field
from typing import Protocol

from recipe_matcher.domain.matching import AvailableIngredient, AvailableIngredientSet
from recipe_matcher.domain.recognition import DetectionExtract
from recipe_matcher.services.catalog import IngredientCatalog

_logger = logging.getLogger(__name__)

DETECTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                    "estimated_grams": {
                        "anyOf": [{"type": "integer", "minimum": 0}, {"type": "null"}]
                    },
                },
                "required": ["label", "confidence", "estimated_grams"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return structured vision extraction data."""


@dataclass(frozen=True)
class Recognition:
    """Detected ingredients resolved against the catalog."""

    available: AvailableIngredientSet
    unresolved_labels: tuple[str, ...] = field(default_factory=tuple)


@dataclass
class RecognitionService:
    """Turns a photo into catalog ingredient ids with confidences."""

    client: VisionClient
    ingredients: IngredientCatalog
    model: str
    reasoning_effort: str | None
    store: bool

    async def detect(self, image_bytes: bytes) -> Recognition:
        """Detect ingredients in an image and map labels to catalog ids."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=DETECTION_SCHEMA,
            prompt=self._prompt(),
        )
        extract = DetectionExtract.model_validate(raw)
        return self.resolve(extract)

    def resolve(self, extract: DetectionExtract) -> Recognition:
        """Map detected labels to catalog ids, keeping the best confidence."""
        found: dict[str, AvailableIngredient] = {}
        unresolved: list[str] = []
        for item in extract.items:
            ingredient = self.ingredients.find_by_name(item.label)
            if ingredient is None:
                unresolved.append(item.label)
                continue
            current = found.get(ingredient.id)
            if current is None or item.confidence > current.confidence:
                grams = None
                if item.estimated_grams is not None:
                    grams = float(item.estimated_grams)
                found[ingredient.id] = AvailableIngredient(
                    confidence=item.confidence, quantity_g=grams
                )
        if unresolved:
            _logger.info("Unresolved recognition labels: %s", ", ".join(unresolved))
        return Recognition(
            available=AvailableIngredientSet(found),
            unresolved_labels=tuple(unresolved),
        )

    def _prompt(self) -> str:
        """Build the detection prompt listing known ingredient names."""
        names = ", ".join(sorted(item.name for item in self.ingredients))
        return (
            "Identify raw cooking ingredients in the image. "
            "Return each item with a label taken from this list when possible: "
            f"{names}. Include a confidence (0-1) and rough grams if visible."
        )


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
