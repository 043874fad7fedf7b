"""Catalog source backed by a JSON document on disk."""

from dataclasses import dataclass, field
from pathlib import Path

from recipe_matcher.domain.catalog_documents import (
    CatalogDocument,
    IngredientDocument,
    RecipeDocument,
)
from recipe_matcher.domain.errors import CatalogIntegrityError
from recipe_matcher.services.catalog import CatalogSource


@dataclass
class JsonFileCatalogSource(CatalogSource):
    """Reads ingredients and recipes from a single JSON file."""

    path: Path
    _document: CatalogDocument | None = field(default=None, init=False, repr=False)

    def load_ingredients(self) -> list[IngredientDocument]:
        """Return ingredient documents from the file."""
        return self._read().ingredients

    def load_recipes(self) -> list[RecipeDocument]:
        """Return recipe documents from the file."""
        return self._read().recipes

    def _read(self) -> CatalogDocument:
        if self._document is None:
            try:
                raw = Path(self.path).read_text(encoding="utf-8")
            except OSError as exc:
                raise CatalogIntegrityError(
                    f"Cannot read catalog file {self.path}: {exc}"
                ) from exc
            self._document = CatalogDocument.model_validate_json(raw)
        return self._document
