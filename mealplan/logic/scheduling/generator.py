"""Weekly schedule generation.

Assigns templates from the filtered catalog to every main-meal and snack slot
of a 7-day week. Selection is pure arithmetic on the day index, so the same
(catalog, config) pair always produces the same schedule:

  main slot:  S[(day // rotation_frequency_days) % len(S)]
  snack slot: SN[(day + snack_index) % len(SN)]

A slot whose candidate list is empty is left out; generation never fails
because of a thin catalog.
"""
import logging
from typing import Dict, List, Sequence

from mealplan.domain.MealTemplate import MealTemplate, MealTiming
from mealplan.domain.Plan import PlanConfig
from mealplan.domain.ScheduleEntry import ScheduleEntry
from mealplan.utilities.constants import (
    DAYS_PER_WEEK, MAIN_PORTION_MULTIPLIER, SNACK_PORTION_MULTIPLIER
)

logger = logging.getLogger(__name__)

_TIMINGS_BY_MEAL_COUNT: Dict[int, List[MealTiming]] = {
    2: [MealTiming.BREAKFAST, MealTiming.DINNER],
    3: [MealTiming.BREAKFAST, MealTiming.LUNCH, MealTiming.DINNER],
    4: [MealTiming.BREAKFAST, MealTiming.LUNCH, MealTiming.SNACK, MealTiming.DINNER],
    5: [MealTiming.BREAKFAST, MealTiming.MORNING_SNACK, MealTiming.LUNCH,
        MealTiming.AFTERNOON_SNACK, MealTiming.DINNER],
}
_DEFAULT_TIMINGS = _TIMINGS_BY_MEAL_COUNT[3]


def meal_timings_for_day(meals_per_day: int) -> List[MealTiming]:
    """Ordered main-meal timings for a day; unsupported counts fall back to three meals."""
    return list(_TIMINGS_BY_MEAL_COUNT.get(meals_per_day, _DEFAULT_TIMINGS))


def snack_timing(snack_index: int) -> MealTiming:
    # Every snack after the second lands on AFTERNOON_SNACK as well
    return MealTiming.MORNING_SNACK if snack_index == 0 else MealTiming.AFTERNOON_SNACK


def generate_schedule(plan_id: str, templates: Sequence[MealTemplate], config: PlanConfig) -> List[ScheduleEntry]:
    """Build the schedule entries of one week for `plan_id`.

    Args:
        plan_id: Plan the entries belong to.
        templates: Filtered catalog in its stable storage order.
        config: Plan configuration (meals/snacks per day, rotation frequency).

    Returns:
        Entries ordered by day, then main meals, then snacks.
    """
    rotation = max(1, int(config.rotation_frequency_days))
    timings = meal_timings_for_day(config.meals_per_day)

    by_timing: Dict[MealTiming, List[MealTemplate]] = {t: [] for t in MealTiming}
    for template in templates:
        by_timing[template.meal_timing].append(template)
    snack_pool = [t for t in templates if t.meal_timing.is_snack]

    if config.snacks_per_day > 2:
        logger.warning(
            "Plan %s requests %s snacks per day; snacks after the second share the AFTERNOON_SNACK timing",
            plan_id, config.snacks_per_day)

    entries: List[ScheduleEntry] = []
    for day in range(DAYS_PER_WEEK):
        for position, timing in enumerate(timings):
            candidates = by_timing[timing]
            if not candidates:
                logger.debug("No %s templates available; day %s slot left empty", timing.value, day)
                continue
            selected = candidates[(day // rotation) % len(candidates)]
            entries.append(ScheduleEntry(
                plan_id=plan_id,
                template_id=selected.template_id,
                day_of_week=day,
                meal_timing=timing,
                meal_order=position + 1,
                portion_multiplier=MAIN_PORTION_MULTIPLIER,
                is_optional=False,
            ))

        if config.snacks_per_day > 0 and snack_pool:
            for s in range(config.snacks_per_day):
                selected = snack_pool[(day + s) % len(snack_pool)]
                entries.append(ScheduleEntry(
                    plan_id=plan_id,
                    template_id=selected.template_id,
                    day_of_week=day,
                    meal_timing=snack_timing(s),
                    meal_order=s + 1,
                    portion_multiplier=SNACK_PORTION_MULTIPLIER,
                    is_optional=True,
                ))

    logger.info("Generated %s schedule entries for plan %s", len(entries), plan_id)
    return entries


__all__ = ['generate_schedule', 'meal_timings_for_day', 'snack_timing']
