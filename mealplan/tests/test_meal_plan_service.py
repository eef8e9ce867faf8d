import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mealplan.domain.Plan import PlanConfig
from mealplan.logic.planning.service import MealPlanService
from mealplan.tests.factories import make_template, sample_catalog, write_catalog
from mealplan.utilities.errors import NotFoundError


class TestMealPlanService(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        write_catalog(self._tmp.name, sample_catalog())
        self.service = MealPlanService.from_data_dir(Path(self._tmp.name))

    def _write_profiles(self, profiles):
        with open(Path(self._tmp.name) / "profiles.json", "w", encoding="utf-8") as f:
            json.dump(profiles, f)

    def test_create_plan_balanced_only(self):
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week", snacks_per_day=1))
        week = self.service.get_user_meal_plan("u1")
        self.assertEqual(week["Sunday"]["BREAKFAST"][0]["template_id"], "b1")
        self.assertEqual(week["Sunday"]["LUNCH"][0]["template_id"], "l1")
        self.assertEqual(week["Sunday"]["MORNING_SNACK"][0]["template_id"], "s1")
        self.assertEqual(self.service.plans.get_active_plan("u1").plan_id, plan.plan_id)

    def test_profile_goals_and_preferences_feed_plan(self):
        self._write_profiles({"u1": {
            "dietary_preferences": ["vegan"],
            "allergies": [],
            "nutrition_goals": {"goal_calories": 1700, "goal_protein_g": None},
        }})
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week", rotation_frequency_days=1))
        self.assertEqual(plan.targets["calories"], 1700)
        self.assertEqual(plan.targets["protein"], 150)
        week = self.service.get_user_meal_plan("u1", plan.plan_id)
        self.assertEqual(week["Monday"]["DINNER"][0]["template_id"], "d2")

    def test_excluded_ingredients_are_never_scheduled(self):
        plan = self.service.create_user_meal_plan(
            "u1", PlanConfig(name="Week", excluded_ingredients=["chicken"]))
        rows = self.service.plans.get_schedule_entries_for_plan(plan.plan_id)
        self.assertNotIn("d1", {t.template_id for _, t in rows})
        # Only chicken dinner is BALANCED, so dinner slots stay empty
        self.assertNotIn("DINNER", self.service.get_user_meal_plan("u1")["Sunday"])

    def test_replace_meal(self):
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week"))
        entry = self.service.replace_meal_in_plan("u1", plan.plan_id, 2, "LUNCH", 2, "l2")
        self.assertEqual(entry.template_id, "l2")
        week = self.service.get_user_meal_plan("u1", plan.plan_id)
        self.assertEqual(week["Tuesday"]["LUNCH"][0]["template_id"], "l2")
        self.assertEqual(week["Monday"]["LUNCH"][0]["template_id"], "l1")

    def test_replace_with_unknown_template_or_foreign_plan(self):
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week"))
        with self.assertRaises(NotFoundError):
            self.service.replace_meal_in_plan("u1", plan.plan_id, 0, "LUNCH", 2, "missing")
        with self.assertRaises(NotFoundError):
            self.service.replace_meal_in_plan("u2", plan.plan_id, 0, "LUNCH", 2, "l2")

    def test_generate_and_fetch_shopping_list(self):
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week"))
        record = self.service.generate_shopping_list("u1", plan.plan_id, "2024-06-02")
        self.assertEqual(record.name, "Shopping List - Week of 2024-06-02")
        items = {i.name: i for i in record.all_items()}
        # 7 breakfasts with 2 eggs each plus 7 lunches with 1 egg
        self.assertEqual(items["eggs"].quantity, 21)
        self.assertEqual(items["rice"].unit, "kg")
        self.assertEqual(items["rice"].estimated_cost, 21.0)
        latest = self.service.get_latest_shopping_list("u1", plan.plan_id)
        self.assertEqual(latest.list_id, record.list_id)
        self.assertEqual(latest.total_estimated_cost, record.total_estimated_cost)

    def test_latest_shopping_list_missing(self):
        plan = self.service.create_user_meal_plan("u1", PlanConfig(name="Week"))
        with self.assertRaises(NotFoundError):
            self.service.get_latest_shopping_list("u1", plan.plan_id)

    def _stored_plan_ids(self):
        with open(Path(self._tmp.name) / "plans.json", encoding="utf-8") as f:
            return [p["plan_id"] for p in json.load(f)]

    def test_clashing_schedule_keeps_previous_plan_active(self):
        write_catalog(self._tmp.name, sample_catalog() + [
            make_template("a1", "AFTERNOON_SNACK", calories=200, created_at="2024-01-01T00:01:00"),
        ])
        first = self.service.create_user_meal_plan("u1", PlanConfig(name="Good week"))
        # The fourth snack lands on AFTERNOON_SNACK #4, the main afternoon slot of a 5-meal day
        with self.assertRaises(ValueError):
            self.service.create_user_meal_plan("u1", PlanConfig(name="Bad", meals_per_day=5, snacks_per_day=4))
        self.assertEqual(self.service.plans.get_active_plan("u1").plan_id, first.plan_id)
        self.assertEqual(self._stored_plan_ids(), [first.plan_id])
        self.assertEqual(self.service.get_user_meal_plan("u1")["Sunday"]["BREAKFAST"][0]["template_id"], "b1")

    def test_failed_schedule_write_restores_previous_plan(self):
        first = self.service.create_user_meal_plan("u1", PlanConfig(name="Good week"))
        with mock.patch.object(self.service.plans, "create_schedule", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                self.service.create_user_meal_plan("u1", PlanConfig(name="Next week"))
        self.assertEqual(self.service.plans.get_active_plan("u1").plan_id, first.plan_id)
        self.assertEqual(self._stored_plan_ids(), [first.plan_id])

    def test_no_active_plan(self):
        with self.assertRaises(NotFoundError):
            self.service.get_user_meal_plan("nobody")


class TestMealPreferences(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        write_catalog(self._tmp.name, sample_catalog())
        self.service = MealPlanService.from_data_dir(Path(self._tmp.name))

    def test_upsert_is_idempotent(self):
        self.service.save_meal_preference("u1", "b1", "rating", 4, "good")
        self.service.save_meal_preference("u1", "b1", "rating", 4, "good")
        prefs = self.service.preferences.list_preferences("u1")
        self.assertEqual(len(prefs), 1)
        self.assertEqual(prefs[0].rating, 4)

    def test_upsert_updates_existing_row(self):
        first = self.service.save_meal_preference("u1", "b1", "rating", 2)
        self.service.save_meal_preference("u1", "b1", "rating", 5, "better")
        prefs = self.service.preferences.list_preferences("u1")
        self.assertEqual([(p.rating, p.notes) for p in prefs], [(5, "better")])
        self.assertEqual(prefs[0].created_at, first.created_at)

    def test_different_types_are_separate_rows(self):
        self.service.save_meal_preference("u1", "b1", "favorite")
        self.service.save_meal_preference("u1", "b1", "dislike")
        self.service.save_meal_preference("u2", "b1", "favorite")
        self.assertEqual(len(self.service.preferences.list_preferences("u1")), 2)

    def test_rejects_unknown_type_and_template(self):
        with self.assertRaises(ValueError):
            self.service.save_meal_preference("u1", "b1", "love")
        with self.assertRaises(NotFoundError):
            self.service.save_meal_preference("u1", "missing", "favorite")


if __name__ == '__main__':
    unittest.main()
