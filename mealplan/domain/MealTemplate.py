"""Meal template catalog entry plus the closed meal timing / dietary category sets."""
from enum import Enum
from typing import Dict, List, Optional

from mealplan.domain.Ingredient import Ingredient


class MealTiming(Enum):
    # Declaration order is the schedule read-back order
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    MORNING_SNACK = "MORNING_SNACK"
    AFTERNOON_SNACK = "AFTERNOON_SNACK"
    SNACK = "SNACK"

    @classmethod
    def parse(cls, value) -> "MealTiming":
        """Return the matching member; unknown values raise ValueError."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown meal timing: {value!r}")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown meal timing: {value!r}") from None

    @property
    def rank(self) -> int:
        return list(MealTiming).index(self)

    @property
    def is_snack(self) -> bool:
        return self in SNACK_TIMINGS


SNACK_TIMINGS = frozenset({MealTiming.SNACK, MealTiming.MORNING_SNACK, MealTiming.AFTERNOON_SNACK})


class DietaryCategory(Enum):
    BALANCED = "BALANCED"
    VEGETARIAN = "VEGETARIAN"
    VEGAN = "VEGAN"
    KETO = "KETO"
    PALEO = "PALEO"
    MEDITERRANEAN = "MEDITERRANEAN"
    LOW_CARB = "LOW_CARB"
    HIGH_PROTEIN = "HIGH_PROTEIN"
    GLUTEN_FREE = "GLUTEN_FREE"
    DAIRY_FREE = "DAIRY_FREE"

    @classmethod
    def parse(cls, value) -> "DietaryCategory":
        """Return the matching member; unknown values raise ValueError."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown dietary category: {value!r}")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown dietary category: {value!r}") from None


NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fats_g", "fiber_g", "sugar_g", "sodium_mg")


class MealTemplate:
    def __init__(self, template_id: str, name: str, meal_timing, dietary_category,
                 nutrients: Optional[Dict[str, float]] = None,
                 ingredients: Optional[List[Ingredient]] = None,
                 instructions: Optional[List[str]] = None,
                 allergens: Optional[List[str]] = None,
                 active: bool = True, description: str = "",
                 prep_time_minutes: Optional[int] = None,
                 difficulty_level: Optional[int] = None,
                 image_url: str = "", created_at: str = ""):
        self.template_id = template_id
        self.name = name
        self.meal_timing = MealTiming.parse(meal_timing)
        self.dietary_category = DietaryCategory.parse(dietary_category)
        n = nutrients or {}
        # Absent or null nutrient fields count as 0
        self.nutrients = {f: (n.get(f) or 0) for f in NUTRIENT_FIELDS}
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions[:] if instructions else []
        self.allergens = allergens[:] if allergens else []
        self.active = active
        self.description = description
        self.prep_time_minutes = prep_time_minutes
        self.difficulty_level = difficulty_level
        self.image_url = image_url
        self.created_at = created_at

    def __str__(self) -> str:
        return (f"{self.name} [{self.meal_timing.value}/{self.dietary_category.value}] - "
                f"{self.nutrients['calories']} kcal")

    __repr__ = __str__

    def ingredient_names(self) -> List[str]:
        return [i.name.strip().lower() for i in self.ingredients if not i.is_malformed()]

    @staticmethod
    def from_dict(data):
        d = dict(data)
        nutrients = {f: d.get(f) for f in NUTRIENT_FIELDS}
        instructions = []
        for step in d.get("instructions", []) or []:
            # Catalog steps are either plain strings or {"step": n, "text": ...}
            if isinstance(step, dict):
                step = step.get("text", "")
            if step:
                instructions.append(str(step))
        return MealTemplate(
            template_id=str(d["template_id"]),
            name=d.get("name", ""),
            meal_timing=d.get("meal_timing"),
            dietary_category=d.get("dietary_category"),
            nutrients=nutrients,
            ingredients=[Ingredient.from_dict(i) for i in d.get("ingredients", []) or []],
            instructions=instructions,
            allergens=list(d.get("allergens", []) or []),
            active=bool(d.get("is_active", True)),
            description=d.get("description") or "",
            prep_time_minutes=d.get("prep_time_minutes"),
            difficulty_level=d.get("difficulty_level"),
            image_url=d.get("image_url") or "",
            created_at=d.get("created_at") or "",
        )

    def to_dict(self):
        return {
            "template_id": self.template_id,
            "name": self.name,
            "description": self.description,
            "meal_timing": self.meal_timing.value,
            "dietary_category": self.dietary_category.value,
            "prep_time_minutes": self.prep_time_minutes,
            "difficulty_level": self.difficulty_level,
            **self.nutrients,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": self.instructions,
            "allergens": self.allergens,
            "image_url": self.image_url,
            "is_active": self.active,
            "created_at": self.created_at,
        }
