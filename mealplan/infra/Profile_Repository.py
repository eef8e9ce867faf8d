"""Profile repository: questionnaire signals per user (JSON file persistence)."""
from pathlib import Path
from typing import Optional

from mealplan.domain.Profile import DietarySignals
from mealplan.infra.json_store import load_json
from mealplan.infra.paths import DATA_DIR, PROFILES_FILE_NAME


class ProfileRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.path = Path(data_dir or DATA_DIR) / PROFILES_FILE_NAME

    def get_dietary_signals(self, user_id: str) -> DietarySignals:
        """Preference and allergy tags of the user's questionnaire; empty when none was filled in."""
        profiles = load_json(self.path, {})
        if not isinstance(profiles, dict):
            return DietarySignals()
        return DietarySignals.from_dict(profiles.get(user_id))
