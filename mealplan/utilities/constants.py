from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Index 0 is Sunday, matching day_of_week on schedule entries
DAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
)
DAYS_PER_WEEK: Final[int] = 7

MAIN_PORTION_MULTIPLIER: Final[float] = 1.0
SNACK_PORTION_MULTIPLIER: Final[float] = 0.5

PLAN_TYPE_WEEKLY: Final[str] = "WEEKLY"

# Used when the user's profile carries no nutrition goals
DEFAULT_DAILY_TARGETS: Final[dict[str, int]] = {
    "calories": 2000,
    "protein": 150,
    "carbs": 250,
    "fats": 67,
}

PREFERENCE_TYPES: Final[tuple[str, ...]] = ("favorite", "dislike", "rating")

DEFAULT_INGREDIENT_UNIT: Final[str] = "piece"
DEFAULT_INGREDIENT_CATEGORY: Final[str] = "Other"

# Currency units per 100g or per discrete unit. Coarse, not real prices.
BASE_INGREDIENT_RATES: Final[dict[str, float]] = {
    # Proteins
    "chicken": 3.0,
    "beef": 5.0,
    "fish": 4.0,
    "eggs": 0.5,
    "tofu": 2.0,
    # Vegetables
    "tomato": 0.8,
    "onion": 0.5,
    "carrot": 0.6,
    "broccoli": 1.2,
    "spinach": 1.5,
    # Grains
    "rice": 0.3,
    "pasta": 0.4,
    "bread": 0.8,
    "oats": 0.5,
}
DEFAULT_INGREDIENT_RATE: Final[float] = 1.0

COST_ESTIMATE_NOTE: Final[str] = (
    "Estimated costs come from a static per-unit rate table and ignore real "
    "prices and unit conversions; treat them as a rough guide only."
)
