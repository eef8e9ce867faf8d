"""Shopping list builder.

Merges the ingredients of every scheduled meal of a plan into one priced list.
Ingredients are merged by lower-cased name only: the unit and category of the
first occurrence win and later occurrences in another unit are summed as-is.

Provides aggregate_ingredients(rows), group_by_category(items) and
build_shopping_list(rows, rate_table).
"""
import logging
from typing import Dict, Iterable, List, Tuple

from mealplan.domain.MealTemplate import MealTemplate
from mealplan.domain.ScheduleEntry import ScheduleEntry
from mealplan.domain.ShoppingList import ShoppingListItem
from mealplan.logic.shopping.pricing import RateTable
from mealplan.utilities.constants import DEFAULT_INGREDIENT_CATEGORY, DEFAULT_INGREDIENT_UNIT

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return name.lower()


def aggregate_ingredients(rows: Iterable[Tuple[ScheduleEntry, MealTemplate]]) -> Dict[str, ShoppingListItem]:
    """Sum quantity * portion_multiplier per ingredient name.

    Ingredients without a name are skipped. A missing quantity counts as 1.
    The returned mapping keeps first-seen order.
    """
    merged: Dict[str, ShoppingListItem] = {}
    for entry, template in rows:
        for ing in template.ingredients:
            if ing.is_malformed():
                logger.warning(f"Skipping ingredient without a name in template {template.template_id}")
                continue
            qty = 1 if ing.quantity is None else ing.quantity
            effective = qty * entry.portion_multiplier
            k = _key(ing.name)
            item = merged.get(k)
            if item is None:
                merged[k] = ShoppingListItem(
                    name=k,
                    quantity=effective,
                    unit=ing.unit or DEFAULT_INGREDIENT_UNIT,
                    category=ing.category or DEFAULT_INGREDIENT_CATEGORY,
                )
            else:
                item.add_quantity(effective)
    return merged


def group_by_category(items: Iterable[ShoppingListItem]) -> Dict[str, List[ShoppingListItem]]:
    """Bucket items by category; bucket order is the order categories are first seen."""
    grouped: Dict[str, List[ShoppingListItem]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    return grouped


def build_shopping_list(rows: Iterable[Tuple[ScheduleEntry, MealTemplate]], rate_table: RateTable):
    """Aggregate, price and group the ingredients of a plan.

    Args:
        rows: (schedule entry, template) pairs of the plan.
        rate_table: Rates used for the cost estimate.

    Returns:
        (grouped items by category, total estimated cost)
    """
    merged = aggregate_ingredients(rows)
    for item in merged.values():
        # Priced on the unrounded quantity; the list shows it rounded up
        item.estimated_cost = rate_table.estimate_cost(item.name, item.quantity, item.unit)
    total = round(sum(item.estimated_cost for item in merged.values()), 2)
    return group_by_category(merged.values()), total


__all__ = ['aggregate_ingredients', 'group_by_category', 'build_shopping_list']
