"""Dietary category resolution.

Maps a user's free-form preference tags plus profile signals onto the
canonical DietaryCategory set used to filter the template catalog.
"""
from typing import Iterable, List, Optional

from mealplan.domain.MealTemplate import DietaryCategory
from mealplan.domain.Profile import DietarySignals

# Checked in this order; the output order follows it, not the input order
_KEYWORD_CATEGORIES = (
    ("vegetarian", DietaryCategory.VEGETARIAN),
    ("vegan", DietaryCategory.VEGAN),
    ("keto", DietaryCategory.KETO),
    ("paleo", DietaryCategory.PALEO),
    ("mediterranean", DietaryCategory.MEDITERRANEAN),
    ("low_carb", DietaryCategory.LOW_CARB),
    ("high_protein", DietaryCategory.HIGH_PROTEIN),
    ("gluten_free", DietaryCategory.GLUTEN_FREE),
    ("dairy_free", DietaryCategory.DAIRY_FREE),
)

# An allergy in the profile implies the matching "free-from" category
_ALLERGY_CATEGORIES = {
    "gluten_free": "gluten",
    "dairy_free": "dairy",
}


def _normalize_tags(tags: Optional[Iterable[str]]) -> set:
    return {t.strip().lower() for t in (tags or []) if isinstance(t, str) and t.strip()}


def resolve_dietary_categories(preferences: Optional[Iterable[str]],
                               signals: Optional[DietarySignals] = None) -> List[DietaryCategory]:
    """Return the ordered category list, always starting with BALANCED.

    Unrecognized tags are ignored. Each category appears at most once.
    """
    explicit = _normalize_tags(preferences)
    profile_prefs = _normalize_tags(signals.preference_tags if signals else None)
    allergies = _normalize_tags(signals.allergy_tags if signals else None)

    categories = [DietaryCategory.BALANCED]
    for keyword, category in _KEYWORD_CATEGORIES:
        matched = keyword in explicit or keyword in profile_prefs
        allergy = _ALLERGY_CATEGORIES.get(keyword)
        if allergy and allergy in allergies:
            matched = True
        if matched and category not in categories:
            categories.append(category)
    return categories


__all__ = ['resolve_dietary_categories']
