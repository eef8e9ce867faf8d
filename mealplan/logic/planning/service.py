"""Meal plan service.

Ties the pure planning logic (category resolution, schedule generation,
portion scaling, shopping list aggregation) to the repositories.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from mealplan.domain.Plan import MealPlan, PlanConfig
from mealplan.domain.MealPreference import MealPreference
from mealplan.domain.ShoppingList import ShoppingListRecord
from mealplan.infra.Plan_Repository import PlanRepository
from mealplan.infra.Preference_Repository import PreferenceRepository
from mealplan.infra.Profile_Repository import ProfileRepository
from mealplan.infra.ShoppingList_Repository import ShoppingListRepository
from mealplan.infra.Template_Repository import TemplateRepository
from mealplan.logic.catalog.categories import resolve_dietary_categories
from mealplan.logic.reporting.nutrition import build_weekly_plan
from mealplan.logic.scheduling.generator import generate_schedule
from mealplan.logic.shopping.list_builder import build_shopping_list
from mealplan.logic.shopping.pricing import RateTable
from mealplan.utilities.constants import PREFERENCE_TYPES
from mealplan.utilities.errors import NotFoundError

logger = logging.getLogger(__name__)

_GOAL_KEYS = {
    "goal_calories": "calories",
    "goal_protein_g": "protein",
    "goal_carbs_g": "carbs",
    "goal_fats_g": "fats",
}


class MealPlanService:
    def __init__(self, templates: TemplateRepository, plans: PlanRepository,
                 profiles: ProfileRepository, preferences: PreferenceRepository,
                 shopping_lists: ShoppingListRepository, rate_table: Optional[RateTable] = None):
        self.templates = templates
        self.plans = plans
        self.profiles = profiles
        self.preferences = preferences
        self.shopping_lists = shopping_lists
        self.rate_table = rate_table or RateTable()

    @classmethod
    def from_data_dir(cls, data_dir: Optional[Path] = None, rate_table: Optional[RateTable] = None):
        templates = TemplateRepository(data_dir)
        return cls(
            templates=templates,
            plans=PlanRepository(data_dir, templates),
            profiles=ProfileRepository(data_dir),
            preferences=PreferenceRepository(data_dir),
            shopping_lists=ShoppingListRepository(data_dir),
            rate_table=rate_table,
        )

    def create_user_meal_plan(self, user_id: str, config: PlanConfig) -> MealPlan:
        """Create the user's new active plan and generate its weekly schedule."""
        logger.info(f"Creating meal plan '{config.name}' for user {user_id}")
        signals = self.profiles.get_dietary_signals(user_id)
        targets = {_GOAL_KEYS[k]: v for k, v in signals.nutrition_goals.items() if k in _GOAL_KEYS and v}

        categories = resolve_dietary_categories(config.dietary_preferences, signals)
        catalog = self.templates.list_active_templates(categories, config.excluded_ingredients)
        logger.debug(f"{len(catalog)} templates match categories {[c.value for c in categories]}")

        # Build and check the schedule before anything is stored
        plan_id = uuid4().hex
        entries = generate_schedule(plan_id, catalog, config)
        self.plans.check_schedule(plan_id, entries)

        try:
            previous_id = self.plans.get_active_plan(user_id).plan_id
        except NotFoundError:
            previous_id = None
        plan = self.plans.create_plan(user_id, config, targets, plan_id=plan_id)
        try:
            self.plans.create_schedule(plan_id, entries)
        except Exception:
            logger.error(f"Storing the schedule of plan {plan_id} failed; restoring previous plan {previous_id}")
            self.plans.discard_plan(plan_id, previous_id)
            raise
        logger.info(f"Meal plan {plan_id} created with {len(entries)} scheduled meals")
        return plan

    def get_user_meal_plan(self, user_id: str, plan_id: Optional[str] = None) -> Dict[str, Any]:
        """Weekly view of the given plan, or of the user's active plan when no id is given."""
        plan = self.plans.get_plan(plan_id, user_id) if plan_id else self.plans.get_active_plan(user_id)
        return build_weekly_plan(self.plans.get_schedule_entries_for_plan(plan.plan_id))

    def replace_meal_in_plan(self, user_id: str, plan_id: str, day_of_week: int, meal_timing,
                             meal_order: int, new_template_id: str):
        """Swap the template of a single slot; the slot key stays the same."""
        logger.info(f"Replacing meal in plan {plan_id}: day={day_of_week} {meal_timing} #{meal_order}")
        self.plans.get_plan(plan_id, user_id)
        self.templates.get_template(new_template_id)
        return self.plans.replace_entry_template(plan_id, day_of_week, meal_timing, meal_order, new_template_id)

    def generate_shopping_list(self, user_id: str, plan_id: str, week_start_date: str) -> ShoppingListRecord:
        """Aggregate, price and store the shopping list of a plan's week."""
        logger.info(f"Generating shopping list for plan {plan_id}, week of {week_start_date}")
        self.plans.get_plan(plan_id, user_id)
        rows = self.plans.get_schedule_entries_for_plan(plan_id)
        grouped, total = build_shopping_list(rows, self.rate_table)
        return self.shopping_lists.persist_shopping_list(user_id, plan_id, week_start_date, grouped, total)

    def get_latest_shopping_list(self, user_id: str, plan_id: str) -> ShoppingListRecord:
        self.plans.get_plan(plan_id, user_id)
        records = self.shopping_lists.list_for_plan(plan_id)
        if not records:
            raise NotFoundError("Shopping list for plan", plan_id)
        return records[-1]

    def save_meal_preference(self, user_id: str, template_id: str, preference_type: str,
                             rating: Optional[int] = None, notes: Optional[str] = None) -> MealPreference:
        if preference_type not in PREFERENCE_TYPES:
            raise ValueError(f"Unknown preference type: {preference_type!r}")
        self.templates.get_template(template_id)
        return self.preferences.upsert_preference(user_id, template_id, preference_type, rating, notes)


__all__ = ['MealPlanService']
