import unittest

from mealplan.domain.MealTemplate import MealTiming
from mealplan.domain.Plan import PlanConfig
from mealplan.logic.scheduling.generator import (
    generate_schedule, meal_timings_for_day, snack_timing
)
from mealplan.tests.factories import make_template, sample_catalog


def _config(**kwargs):
    return PlanConfig(name="Test plan", **kwargs)


class TestMealTimings(unittest.TestCase):

    def test_timing_table(self):
        self.assertEqual(meal_timings_for_day(2), [MealTiming.BREAKFAST, MealTiming.DINNER])
        self.assertEqual(meal_timings_for_day(3), [MealTiming.BREAKFAST, MealTiming.LUNCH, MealTiming.DINNER])
        self.assertEqual(meal_timings_for_day(4), [
            MealTiming.BREAKFAST, MealTiming.LUNCH, MealTiming.SNACK, MealTiming.DINNER])
        self.assertEqual(meal_timings_for_day(5), [
            MealTiming.BREAKFAST, MealTiming.MORNING_SNACK, MealTiming.LUNCH,
            MealTiming.AFTERNOON_SNACK, MealTiming.DINNER])

    def test_unsupported_counts_fall_back_to_three_meals(self):
        self.assertEqual(meal_timings_for_day(6), meal_timings_for_day(3))
        self.assertEqual(meal_timings_for_day(1), meal_timings_for_day(3))

    def test_snack_timing(self):
        self.assertEqual(snack_timing(0), MealTiming.MORNING_SNACK)
        self.assertEqual(snack_timing(1), MealTiming.AFTERNOON_SNACK)
        self.assertEqual(snack_timing(2), MealTiming.AFTERNOON_SNACK)


class TestGenerateSchedule(unittest.TestCase):

    def setUp(self):
        self.catalog = sample_catalog()

    def _main(self, entries, timing):
        return [e for e in entries if e.meal_timing == timing and not e.is_optional]

    def test_weekly_rotation_repeats_first_template(self):
        entries = generate_schedule("p1", self.catalog, _config(rotation_frequency_days=7))
        self.assertEqual(len(entries), 21)
        breakfasts = self._main(entries, MealTiming.BREAKFAST)
        self.assertEqual({e.template_id for e in breakfasts}, {"b1"})
        self.assertEqual([e.day_of_week for e in breakfasts], list(range(7)))

    def test_daily_rotation_cycles_catalog(self):
        entries = generate_schedule("p1", self.catalog, _config(rotation_frequency_days=1))
        lunches = self._main(entries, MealTiming.LUNCH)
        self.assertEqual([e.template_id for e in lunches], ["l1", "l2", "l1", "l2", "l1", "l2", "l1"])

    def test_rotation_every_three_days(self):
        entries = generate_schedule("p1", self.catalog, _config(rotation_frequency_days=3))
        dinners = self._main(entries, MealTiming.DINNER)
        self.assertEqual([e.template_id for e in dinners], ["d1", "d1", "d1", "d2", "d2", "d2", "d1"])

    def test_main_slots_have_order_and_full_portion(self):
        entries = generate_schedule("p1", self.catalog, _config())
        day0 = [e for e in entries if e.day_of_week == 0]
        self.assertEqual([(e.meal_timing, e.meal_order) for e in day0], [
            (MealTiming.BREAKFAST, 1), (MealTiming.LUNCH, 2), (MealTiming.DINNER, 3)])
        for e in day0:
            self.assertEqual(e.portion_multiplier, 1.0)
            self.assertFalse(e.is_optional)
            self.assertEqual(e.plan_id, "p1")

    def test_snacks_are_half_portion_and_optional(self):
        entries = generate_schedule("p1", self.catalog, _config(snacks_per_day=2))
        snacks = [e for e in entries if e.is_optional]
        self.assertEqual(len(snacks), 14)
        day1 = [e for e in snacks if e.day_of_week == 1]
        self.assertEqual([(e.meal_timing, e.meal_order, e.template_id) for e in day1], [
            (MealTiming.MORNING_SNACK, 1, "s2"), (MealTiming.AFTERNOON_SNACK, 2, "s1")])
        for e in snacks:
            self.assertEqual(e.portion_multiplier, 0.5)

    def test_extra_snacks_collapse_onto_afternoon_without_key_clash(self):
        with self.assertLogs("mealplan.logic.scheduling.generator", level="WARNING"):
            entries = generate_schedule("p1", self.catalog, _config(snacks_per_day=3))
        afternoon = [e for e in entries if e.day_of_week == 0 and e.meal_timing == MealTiming.AFTERNOON_SNACK]
        self.assertEqual([e.meal_order for e in afternoon], [2, 3])
        keys = [e.key for e in entries]
        self.assertEqual(len(keys), len(set(keys)))

    def test_four_meals_uses_snack_templates_for_the_main_snack(self):
        entries = generate_schedule("p1", self.catalog, _config(meals_per_day=4, rotation_frequency_days=1))
        main_snacks = self._main(entries, MealTiming.SNACK)
        self.assertEqual([e.meal_order for e in main_snacks], [3] * 7)
        self.assertEqual(main_snacks[1].template_id, "s2")

    def test_five_meals_with_snacks_keeps_keys_unique(self):
        entries = generate_schedule("p1", self.catalog, _config(meals_per_day=5, snacks_per_day=3))
        keys = [e.key for e in entries]
        self.assertEqual(len(keys), len(set(keys)))
        # No MORNING_SNACK/AFTERNOON_SNACK templates: those main slots stay empty
        self.assertEqual(self._main(entries, MealTiming.MORNING_SNACK), [])

    def test_snack_pool_takes_every_snack_timing(self):
        catalog = [
            make_template("ms", "MORNING_SNACK"),
            make_template("as", "AFTERNOON_SNACK"),
            make_template("b1", "BREAKFAST"),
        ]
        entries = generate_schedule("p1", catalog, _config(meals_per_day=2, snacks_per_day=1))
        snacks = [e.template_id for e in entries if e.is_optional]
        self.assertEqual(snacks, ["ms", "as", "ms", "as", "ms", "as", "ms"])

    def test_empty_catalog_yields_empty_schedule(self):
        self.assertEqual(generate_schedule("p1", [], _config(snacks_per_day=2)), [])

    def test_missing_timing_leaves_gaps(self):
        breakfasts_only = [t for t in self.catalog if t.meal_timing == MealTiming.BREAKFAST]
        entries = generate_schedule("p1", breakfasts_only, _config(snacks_per_day=1))
        self.assertEqual(len(entries), 7)
        self.assertTrue(all(e.meal_timing == MealTiming.BREAKFAST for e in entries))

    def test_deterministic(self):
        config = _config(rotation_frequency_days=2, snacks_per_day=1)
        self.assertEqual(generate_schedule("p1", self.catalog, config),
                         generate_schedule("p1", self.catalog, config))


if __name__ == '__main__':
    unittest.main()
