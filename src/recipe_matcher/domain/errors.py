"""Domain error types."""


class RecipeMatcherError(Exception):
    """Base error for the matching engine."""


class CatalogIntegrityError(RecipeMatcherError):
    """Raised when catalog data is inconsistent at load time."""


class InvalidConstraintError(RecipeMatcherError):
    """Raised when a caller passes malformed match constraints."""
