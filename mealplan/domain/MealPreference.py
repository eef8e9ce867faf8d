"""User preference for a meal template (favorite, dislike or a 1-5 rating)."""
from typing import Optional, Tuple


class MealPreference:
    def __init__(self, user_id: str, template_id: str, preference_type: str,
                 rating: Optional[int] = None, notes: Optional[str] = None,
                 created_at: str = "", updated_at: str = ""):
        self.user_id = user_id
        self.template_id = template_id
        self.preference_type = preference_type
        self.rating = rating
        self.notes = notes
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.user_id, self.template_id, self.preference_type)

    def __str__(self) -> str:
        rating = f" ({self.rating}/5)" if self.rating is not None else ""
        return f"{self.user_id} {self.preference_type} {self.template_id}{rating}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        allowed = {"user_id", "template_id", "preference_type", "rating", "notes",
                   "created_at", "updated_at"}
        return MealPreference(**{k: v for k, v in dict(data).items() if k in allowed})

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "template_id": self.template_id,
            "preference_type": self.preference_type,
            "rating": self.rating,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
