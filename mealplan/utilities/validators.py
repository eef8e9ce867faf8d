"""
Input validation schemas using Pydantic for the HTTP boundary.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from mealplan.domain.MealTemplate import MealTiming
from mealplan.domain.Plan import PlanConfig
from mealplan.utilities.constants import DATE_FORMAT


def _clean_tags(v):
    return [tag.strip() for tag in v if tag and tag.strip()]


class MealPlanCreateInput(BaseModel):
    """Schema for meal plan creation."""
    name: str = Field(..., min_length=1, max_length=200)
    meals_per_day: int = Field(..., ge=2, le=6)
    snacks_per_day: int = Field(..., ge=0, le=3)
    rotation_frequency_days: int = Field(..., ge=1, le=14)
    include_leftovers: bool
    fixed_meal_times: bool
    dietary_preferences: List[str] = Field(default_factory=list)
    excluded_ingredients: List[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Plan name is required')
        return v.strip()

    @field_validator('dietary_preferences', 'excluded_ingredients')
    @classmethod
    def validate_tags(cls, v):
        """Drop blank entries."""
        return _clean_tags(v)

    def to_config(self) -> PlanConfig:
        return PlanConfig.from_dict(self.model_dump())


class ReplaceMealInput(BaseModel):
    """Schema for swapping the template of one schedule slot."""
    day_of_week: int = Field(..., ge=0, le=6)
    meal_timing: str
    meal_order: int = Field(..., ge=1)
    new_template_id: str = Field(..., min_length=1)

    @field_validator('meal_timing')
    @classmethod
    def validate_meal_timing(cls, v):
        """Reject timings outside the closed set."""
        return MealTiming.parse(v).value


class MealPreferenceInput(BaseModel):
    """Schema for saving a meal preference."""
    template_id: str = Field(..., min_length=1)
    preference_type: str = Field(..., pattern=r'^(favorite|dislike|rating)$')
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class ShoppingListInput(BaseModel):
    """Schema for shopping list generation."""
    week_start_date: str = Field(..., min_length=1)

    @field_validator('week_start_date')
    @classmethod
    def validate_date(cls, v):
        v = v.strip()
        datetime.strptime(v, DATE_FORMAT)
        return v
