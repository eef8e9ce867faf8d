"""Weekly plan view with portion-scaled nutrition.

The view is rebuilt from schedule entries and their templates on every read
so template edits show up immediately; nothing here is stored.
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

from mealplan.domain.MealTemplate import MealTemplate, NUTRIENT_FIELDS
from mealplan.domain.ScheduleEntry import ScheduleEntry
from mealplan.utilities.constants import DAY_NAMES


def scale_nutrients(template: MealTemplate, multiplier: float) -> Dict[str, float]:
    """Multiply every nutrient field by the slot's portion multiplier (missing fields are 0)."""
    return {f: (template.nutrients.get(f) or 0) * multiplier for f in NUTRIENT_FIELDS}


def render_slot(entry: ScheduleEntry, template: MealTemplate) -> Dict[str, Any]:
    data = template.to_dict()
    data.pop("is_active", None)
    data.pop("created_at", None)
    data.update(scale_nutrients(template, entry.portion_multiplier))
    data["portion_multiplier"] = entry.portion_multiplier
    data["meal_order"] = entry.meal_order
    data["is_optional"] = entry.is_optional
    return data


def build_weekly_plan(rows: Iterable[Tuple[ScheduleEntry, MealTemplate]]) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """Group (entry, template) rows into {day name: {meal timing: [slot, ...]}}.

    Every day of the week is present, empty when nothing was scheduled.
    """
    ordered = sorted(rows, key=lambda row: row[0].sort_key())
    week: Dict[str, Dict[str, List[Dict[str, Any]]]] = {name: {} for name in DAY_NAMES}
    for entry, template in ordered:
        if not 0 <= entry.day_of_week < len(DAY_NAMES):
            continue
        day = week[DAY_NAMES[entry.day_of_week]]
        day.setdefault(entry.meal_timing.value, []).append(render_slot(entry, template))
    return week


def compute_week_nutrition(weekly_plan: Dict[str, Dict[str, List[Dict[str, Any]]]]):
    """Sum the scaled nutrients per day and for the whole week.

    Returns structure:
    {
      'days': { 'Sunday': { 'calories': float, 'protein_g': float, ... }, ... },
      'week_totals': { 'calories': float, 'protein_g': float, ... }
    }
    """
    days_result = {}
    totals = defaultdict(float)
    for day, timings in (weekly_plan or {}).items():
        day_totals = {f: 0.0 for f in NUTRIENT_FIELDS}
        for slots in timings.values():
            for slot in slots:
                for f in NUTRIENT_FIELDS:
                    day_totals[f] += slot.get(f, 0) or 0
        days_result[day] = {f: round(v, 2) for f, v in day_totals.items()}
        for f, v in day_totals.items():
            totals[f] += v
    return {
        'days': days_result,
        'week_totals': {f: round(totals[f], 2) for f in NUTRIENT_FIELDS},
    }


__all__ = ["scale_nutrients", "build_weekly_plan", "compute_week_nutrition"]
