"""Models for photo recognition results."""

from pydantic import BaseModel, Field


class DetectedItem(BaseModel):
    """Single ingredient detected in a photo."""

    label: str
    confidence: float = Field(ge=0.0, le=1.0)
    estimated_grams: int | None = Field(default=None, ge=0)


class DetectionExtract(BaseModel):
    """Structured output of the vision model."""

    items: list[DetectedItem]
