"""Configuration management for the meal plan engine."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALPLAN_DATA_DIR', str(BASE_DIR / 'data'))).resolve()

# Cost estimation
DEFAULT_INGREDIENT_RATE: Final[float] = float(os.getenv('DEFAULT_INGREDIENT_RATE', '1.0'))
# Optional JSON file ({"ingredient name": rate, ...}) merged over the built-in table
RATE_TABLE_FILE: Final[Optional[Path]] = (
    Path(os.environ['RATE_TABLE_FILE']) if os.getenv('RATE_TABLE_FILE') else None
)
