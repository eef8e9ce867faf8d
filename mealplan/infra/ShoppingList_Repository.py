"""Shopping list repository (JSON file persistence)."""
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from uuid import uuid4

from mealplan.domain.ShoppingList import ShoppingListItem, ShoppingListRecord
from mealplan.infra.json_store import STORE_LOCK, atomic_write, load_json
from mealplan.infra.paths import DATA_DIR, SHOPPING_LISTS_FILE_NAME


class ShoppingListRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = Path(data_dir or DATA_DIR) / SHOPPING_LISTS_FILE_NAME

    def _load(self) -> List[dict]:
        lists = load_json(self.path, [])
        return lists if isinstance(lists, list) else []

    def persist_shopping_list(self, user_id: str, plan_id: str, week_start_date: str,
                              grouped_items: Dict[str, List[ShoppingListItem]],
                              total_cost: float) -> ShoppingListRecord:
        record = ShoppingListRecord(
            list_id=uuid4().hex,
            user_id=user_id,
            plan_id=plan_id,
            week_start_date=week_start_date,
            items=grouped_items,
            total_estimated_cost=total_cost,
            created_at=datetime.now().isoformat(),
        )
        with STORE_LOCK:
            lists = self._load()
            lists.append(record.to_dict())
            atomic_write(self.path, lists)
        return record

    def list_for_plan(self, plan_id: str) -> List[ShoppingListRecord]:
        return [ShoppingListRecord.from_dict(r) for r in self._load() if r.get("plan_id") == plan_id]
