"""Catalog filtering by dietary category and excluded ingredients."""
from typing import Iterable, List

from mealplan.domain.MealTemplate import DietaryCategory, MealTemplate


def filter_templates(templates: Iterable[MealTemplate],
                     categories: Iterable[DietaryCategory]) -> List[MealTemplate]:
    """Return active templates whose dietary category is in `categories`, keeping catalog order."""
    allowed = {DietaryCategory.parse(c) for c in categories}
    return [t for t in templates if t.active and t.dietary_category in allowed]


def contains_excluded_ingredient(template: MealTemplate, excluded: Iterable[str]) -> bool:
    """True if any ingredient name of the template matches an excluded name (case-insensitive)."""
    excluded_names = {e.strip().lower() for e in excluded if isinstance(e, str) and e.strip()}
    if not excluded_names:
        return False
    return any(name in excluded_names for name in template.ingredient_names())


def exclude_ingredients(templates: Iterable[MealTemplate], excluded: Iterable[str]) -> List[MealTemplate]:
    excluded = list(excluded or [])
    return [t for t in templates if not contains_excluded_ingredient(t, excluded)]


__all__ = ['filter_templates', 'contains_excluded_ingredient', 'exclude_ingredients']
