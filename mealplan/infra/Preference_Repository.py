"""Meal preference repository (JSON file persistence)."""
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from mealplan.domain.MealPreference import MealPreference
from mealplan.infra.json_store import STORE_LOCK, atomic_write, load_json
from mealplan.infra.paths import DATA_DIR, PREFERENCES_FILE_NAME


class PreferenceRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = Path(data_dir or DATA_DIR) / PREFERENCES_FILE_NAME

    def _load(self) -> List[dict]:
        prefs = load_json(self.path, [])
        return prefs if isinstance(prefs, list) else []

    def upsert_preference(self, user_id: str, template_id: str, preference_type: str,
                          rating: Optional[int] = None, notes: Optional[str] = None) -> MealPreference:
        """Insert or update the row keyed by (user, template, preference type).

        Repeating the same call leaves exactly one row with the same values.
        """
        now = datetime.now().isoformat()
        key = (user_id, template_id, preference_type)
        with STORE_LOCK:
            prefs = self._load()
            for i, raw in enumerate(prefs):
                existing = MealPreference.from_dict(raw)
                if existing.key == key:
                    existing.rating = rating
                    existing.notes = notes
                    existing.updated_at = now
                    prefs[i] = existing.to_dict()
                    atomic_write(self.path, prefs)
                    return existing
            pref = MealPreference(user_id, template_id, preference_type, rating, notes,
                                  created_at=now, updated_at=now)
            prefs.append(pref.to_dict())
            atomic_write(self.path, prefs)
            return pref

    def list_preferences(self, user_id: str) -> List[MealPreference]:
        return [MealPreference.from_dict(p) for p in self._load() if p.get("user_id") == user_id]
