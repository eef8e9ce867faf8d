"""Ingredient record of a meal template: name, quantity, unit, shopping category."""
from typing import Optional


class Ingredient:
    def __init__(self, name: str = "", quantity: Optional[float] = None,
                 unit: str = "", category: str = ""):
        self.name = name
        # None means the catalog did not state a quantity
        self.quantity = quantity
        self.unit = unit
        self.category = category

    def is_malformed(self) -> bool:
        return not isinstance(self.name, str) or not self.name.strip()

    def __str__(self) -> str:
        qty = "" if self.quantity is None else f"{self.quantity} "
        return f"{self.name} - {qty}{self.unit} ({self.category or 'uncategorized'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a catalog dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        qty = d.get("quantity")
        if qty is not None:
            try:
                qty = float(qty)
            except (TypeError, ValueError):
                qty = None
        return Ingredient(
            name=d.get("name") or "",
            quantity=qty,
            unit=d.get("unit") or "",
            category=d.get("category") or "",
        )

    def to_dict(self):
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
        }
