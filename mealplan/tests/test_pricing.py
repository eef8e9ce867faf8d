import json
import tempfile
import unittest
from pathlib import Path

from mealplan.logic.shopping.pricing import RateTable, round_cost


class TestRateTable(unittest.TestCase):

    def setUp(self):
        self.table = RateTable()

    def test_known_rate_is_case_insensitive(self):
        self.assertEqual(self.table.rate_for("Chicken"), 3.0)
        self.assertEqual(self.table.rate_for(" BROCCOLI "), 1.2)

    def test_unknown_ingredient_uses_default_rate(self):
        self.assertEqual(self.table.rate_for("saffron"), 1.0)
        self.assertEqual(RateTable(default_rate=2.0).estimate_cost("saffron", 3, "g"), 6.0)

    def test_kilograms_count_as_ten_steps(self):
        self.assertEqual(self.table.estimate_cost("beef", 2, "kg"), 100.0)
        self.assertEqual(self.table.estimate_cost("beef", 2, "piece"), 10.0)

    def test_half_up_rounding(self):
        self.assertEqual(round_cost(0.125), 0.13)
        self.assertEqual(round_cost(0.124), 0.12)
        self.assertEqual(self.table.estimate_cost("saffron", 0.125, "g"), 0.13)

    def test_deterministic(self):
        self.assertEqual(self.table.estimate_cost("tomato", 3.3, "piece"),
                         self.table.estimate_cost("tomato", 3.3, "piece"))

    def test_from_file_overlays_builtin_rates(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rates.json"
            path.write_text(json.dumps({"Saffron": 9.5, "chicken": 4.0}), encoding="utf-8")
            table = RateTable.from_file(path)
        self.assertEqual(table.rate_for("saffron"), 9.5)
        self.assertEqual(table.rate_for("chicken"), 4.0)
        self.assertEqual(table.rate_for("beef"), 5.0)

    def test_from_missing_file_falls_back(self):
        with self.assertLogs("mealplan.logic.shopping.pricing", level="WARNING"):
            table = RateTable.from_file(Path("/nonexistent/rates.json"))
        self.assertEqual(table.rates, RateTable().rates)


if __name__ == '__main__':
    unittest.main()
