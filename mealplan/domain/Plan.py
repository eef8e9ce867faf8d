"""Plan domain entities: the user's plan configuration and the stored weekly plan record."""
from typing import Dict, List, Optional

from mealplan.utilities.constants import DEFAULT_DAILY_TARGETS, PLAN_TYPE_WEEKLY


class PlanConfig:
    def __init__(self, name: str, meals_per_day: int = 3, snacks_per_day: int = 0,
                 rotation_frequency_days: int = 7, include_leftovers: bool = False,
                 fixed_meal_times: bool = False,
                 dietary_preferences: Optional[List[str]] = None,
                 excluded_ingredients: Optional[List[str]] = None):
        self.name = name
        self.meals_per_day = meals_per_day
        self.snacks_per_day = snacks_per_day
        self.rotation_frequency_days = rotation_frequency_days
        self.include_leftovers = include_leftovers
        self.fixed_meal_times = fixed_meal_times
        self.dietary_preferences = dietary_preferences[:] if dietary_preferences else []
        self.excluded_ingredients = excluded_ingredients[:] if excluded_ingredients else []

    def __str__(self) -> str:
        return (f"{self.name} - {self.meals_per_day} meals, {self.snacks_per_day} snacks, "
                f"rotate every {self.rotation_frequency_days} days")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        allowed = {"name", "meals_per_day", "snacks_per_day", "rotation_frequency_days",
                   "include_leftovers", "fixed_meal_times", "dietary_preferences",
                   "excluded_ingredients"}
        return PlanConfig(**{k: v for k, v in dict(data).items() if k in allowed})

    def to_dict(self):
        return {
            "name": self.name,
            "meals_per_day": self.meals_per_day,
            "snacks_per_day": self.snacks_per_day,
            "rotation_frequency_days": self.rotation_frequency_days,
            "include_leftovers": self.include_leftovers,
            "fixed_meal_times": self.fixed_meal_times,
            "dietary_preferences": self.dietary_preferences,
            "excluded_ingredients": self.excluded_ingredients,
        }


class MealPlan:
    def __init__(self, plan_id: str, user_id: str, config: PlanConfig,
                 targets: Optional[Dict[str, int]] = None, is_active: bool = True,
                 start_date: str = "", created_at: str = "", plan_type: str = PLAN_TYPE_WEEKLY):
        self.plan_id = plan_id
        self.user_id = user_id
        self.config = config
        self.targets = {**DEFAULT_DAILY_TARGETS, **(targets or {})}
        self.is_active = is_active
        self.start_date = start_date
        self.created_at = created_at
        self.plan_type = plan_type

    @property
    def name(self) -> str:
        return self.config.name

    def __str__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"Plan {self.plan_id} ({state}) for {self.user_id}: {self.config}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return MealPlan(
            plan_id=d["plan_id"],
            user_id=d["user_id"],
            config=PlanConfig.from_dict(d.get("config", {})),
            targets=d.get("targets"),
            is_active=bool(d.get("is_active", True)),
            start_date=d.get("start_date", ""),
            created_at=d.get("created_at", ""),
            plan_type=d.get("plan_type", PLAN_TYPE_WEEKLY),
        )

    def to_dict(self):
        return {
            "plan_id": self.plan_id,
            "user_id": self.user_id,
            "name": self.name,
            "plan_type": self.plan_type,
            "config": self.config.to_dict(),
            "targets": self.targets,
            "is_active": self.is_active,
            "start_date": self.start_date,
            "created_at": self.created_at,
        }
