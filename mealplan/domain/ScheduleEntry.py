"""Schedule entry: one template assigned to one (day, timing, order) slot of a plan."""
from typing import Tuple

from mealplan.domain.MealTemplate import MealTiming


class ScheduleEntry:
    def __init__(self, plan_id: str, template_id: str, day_of_week: int, meal_timing,
                 meal_order: int, portion_multiplier: float = 1.0, is_optional: bool = False):
        self.plan_id = plan_id
        self.template_id = template_id
        self.day_of_week = day_of_week
        self.meal_timing = MealTiming.parse(meal_timing)
        self.meal_order = meal_order
        self.portion_multiplier = portion_multiplier
        self.is_optional = is_optional

    @property
    def key(self) -> Tuple[int, MealTiming, int]:
        """Identity of the slot within its plan."""
        return (self.day_of_week, self.meal_timing, self.meal_order)

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.day_of_week, self.meal_timing.rank, self.meal_order)

    def __eq__(self, other):
        if not isinstance(other, ScheduleEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return (f"day {self.day_of_week} {self.meal_timing.value} #{self.meal_order}: "
                f"{self.template_id} x{self.portion_multiplier}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ScheduleEntry(
            plan_id=d["plan_id"],
            template_id=d["template_id"],
            day_of_week=int(d["day_of_week"]),
            meal_timing=d["meal_timing"],
            meal_order=int(d["meal_order"]),
            portion_multiplier=float(d.get("portion_multiplier", 1.0)),
            is_optional=bool(d.get("is_optional", False)),
        )

    def to_dict(self):
        return {
            "plan_id": self.plan_id,
            "template_id": self.template_id,
            "day_of_week": self.day_of_week,
            "meal_timing": self.meal_timing.value,
            "meal_order": self.meal_order,
            "portion_multiplier": self.portion_multiplier,
            "is_optional": self.is_optional,
        }
