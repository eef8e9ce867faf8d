"""Profile signals read from a user's questionnaire."""
from typing import Dict, List, Optional


class DietarySignals:
    def __init__(self, preference_tags: Optional[List[str]] = None,
                 allergy_tags: Optional[List[str]] = None,
                 nutrition_goals: Optional[Dict[str, int]] = None):
        self.preference_tags = preference_tags[:] if preference_tags else []
        self.allergy_tags = allergy_tags[:] if allergy_tags else []
        self.nutrition_goals = dict(nutrition_goals) if nutrition_goals else {}

    def __str__(self) -> str:
        return f"prefs={self.preference_tags} allergies={self.allergy_tags}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return DietarySignals(
            preference_tags=list(d.get("dietary_preferences", []) or []),
            allergy_tags=list(d.get("allergies", []) or []),
            nutrition_goals=d.get("nutrition_goals") or {},
        )
