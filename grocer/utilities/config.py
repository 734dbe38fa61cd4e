"""Configuration management for the grocer application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('GROCER_DATA_DIR', str(BASE_DIR / 'data')))
DATA_FILE: Final[str] = os.getenv('GROCER_DATA_FILE', 'groceries.json')
LOG_FILE: Final[str] = os.getenv('GROCER_LOG_FILE', 'grocer.log')

# Logging
LOG_LEVEL: Final[str] = os.getenv('GROCER_LOG_LEVEL', 'INFO').upper()

# Grocery defaults
DEFAULT_CATEGORY: Final[str] = os.getenv('GROCER_DEFAULT_CATEGORY', 'OTHERS').upper()
EXPIRY_WINDOW_DAYS: Final[int] = int(os.getenv('GROCER_EXPIRY_WINDOW_DAYS', '3'))
