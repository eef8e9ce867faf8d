"""Shopping list entities: aggregated items and the persisted list record."""
import math
from typing import Dict, List, Optional


class ShoppingListItem:
    def __init__(self, name: str, quantity: float = 0.0, unit: str = "",
                 category: str = "", estimated_cost: float = 0.0, is_purchased: bool = False):
        self.name = name  # case-folded merge key
        self.quantity = quantity
        self.unit = unit
        self.category = category
        self.estimated_cost = estimated_cost
        self.is_purchased = is_purchased

    def add_quantity(self, quantity: float):
        '''Adds an effective quantity contributed by one more schedule entry.'''
        self.quantity += quantity

    @property
    def display_quantity(self) -> int:
        return math.ceil(self.quantity)

    def __str__(self) -> str:
        return f"{self.name} - {self.display_quantity} {self.unit} ({self.category}) ~{self.estimated_cost:.2f}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return ShoppingListItem(
            name=d.get("name", ""),
            quantity=float(d.get("quantity", 0) or 0),
            unit=d.get("unit", ""),
            category=d.get("category", ""),
            estimated_cost=float(d.get("estimated_cost", 0) or 0),
            is_purchased=bool(d.get("is_purchased", False)),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.display_quantity,
            "unit": self.unit,
            "category": self.category,
            "estimated_cost": self.estimated_cost,
            "is_purchased": self.is_purchased,
        }


class ShoppingListRecord:
    def __init__(self, list_id: str, user_id: str, plan_id: str, week_start_date: str,
                 items: Optional[Dict[str, List[ShoppingListItem]]] = None,
                 total_estimated_cost: float = 0.0, created_at: str = "", name: str = ""):
        self.list_id = list_id
        self.user_id = user_id
        self.plan_id = plan_id
        self.week_start_date = week_start_date
        # category -> items, in first-seen category order
        self.items = dict(items) if items else {}
        self.total_estimated_cost = total_estimated_cost
        self.created_at = created_at
        self.name = name or f"Shopping List - Week of {week_start_date}"

    def all_items(self) -> List[ShoppingListItem]:
        return [item for bucket in self.items.values() for item in bucket]

    def __str__(self) -> str:
        return f"{self.name}: {len(self.all_items())} items, ~{self.total_estimated_cost:.2f}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        grouped = {
            category: [ShoppingListItem.from_dict(i) for i in items]
            for category, items in (d.get("items") or {}).items()
        }
        return ShoppingListRecord(
            list_id=d["list_id"],
            user_id=d["user_id"],
            plan_id=d["plan_id"],
            week_start_date=d.get("week_start_date", ""),
            items=grouped,
            total_estimated_cost=float(d.get("total_estimated_cost", 0) or 0),
            created_at=d.get("created_at", ""),
            name=d.get("name", ""),
        )

    def to_dict(self):
        return {
            "list_id": self.list_id,
            "user_id": self.user_id,
            "plan_id": self.plan_id,
            "name": self.name,
            "week_start_date": self.week_start_date,
            "items": {c: [i.to_dict() for i in items] for c, items in self.items.items()},
            "total_estimated_cost": self.total_estimated_cost,
            "created_at": self.created_at,
        }
