from pathlib import Path

from grocer.utilities.config import DATA_DIR as _CONFIG_DATA_DIR, DATA_FILE, LOG_FILE

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()
GROCERIES_FILE = DATA_DIR / DATA_FILE
LOG_PATH = DATA_DIR / LOG_FILE

__all__ = ['DATA_DIR', 'GROCERIES_FILE', 'LOG_PATH']
