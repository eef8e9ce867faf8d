"""Error types raised by the meal plan engine and its repositories."""


class MealPlanError(Exception):
    """Base class for engine errors."""


class NotFoundError(MealPlanError, LookupError):
    """No plan, template or schedule entry matches the given identifiers."""

    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class CatalogError(MealPlanError):
    """The stored template catalog holds an entry that cannot be read."""


__all__ = ['MealPlanError', 'NotFoundError', 'CatalogError']
