from pathlib import Path

from nutrigen.utilities.config import DATA_DIR as _CONFIG_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()
IMAGE_CACHE_FILE = DATA_DIR / 'image_cache.json'
FEEDBACK_FILE = DATA_DIR / 'feedback.json'

__all__ = ['DATA_DIR', 'IMAGE_CACHE_FILE', 'FEEDBACK_FILE']
