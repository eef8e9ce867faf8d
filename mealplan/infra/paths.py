from mealplan.utilities.config import DATA_DIR

# Centralized data file names (single source of truth)
TEMPLATES_FILE_NAME = 'meal_templates.json'
PROFILES_FILE_NAME = 'profiles.json'
PLANS_FILE_NAME = 'plans.json'
SCHEDULES_FILE_NAME = 'schedules.json'
PREFERENCES_FILE_NAME = 'preferences.json'
SHOPPING_LISTS_FILE_NAME = 'shopping_lists.json'

__all__ = [
    'DATA_DIR', 'TEMPLATES_FILE_NAME', 'PROFILES_FILE_NAME', 'PLANS_FILE_NAME',
    'SCHEDULES_FILE_NAME', 'PREFERENCES_FILE_NAME', 'SHOPPING_LISTS_FILE_NAME',
]
