"""Configuration management for the NutriGen application."""
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
LOG_LEVEL: Final[str] = os.getenv('NUTRIGEN_LOG_LEVEL', 'INFO').upper()

# Model Configuration
MODEL_NAME: Final[str] = os.getenv('NUTRIGEN_MODEL', 'gpt-4o-mini')
PLAN_TEMPERATURE: Final[float] = float(os.getenv('NUTRIGEN_PLAN_TEMPERATURE', '0.4'))

# Image generation / cache
IMAGE_ENDPOINT: Final[str] = os.getenv('NUTRIGEN_IMAGE_ENDPOINT', 'https://image.pollinations.ai/prompt/')
IMAGE_TIMEOUT: Final[float] = float(os.getenv('NUTRIGEN_IMAGE_TIMEOUT', '60'))
IMAGE_CACHE_MAX_BYTES: Final[int] = int(os.getenv('NUTRIGEN_IMAGE_CACHE_MAX_BYTES', '5000000'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('NUTRIGEN_DATA_DIR', str(BASE_DIR / 'data')))
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'


def get_api_key() -> Optional[str]:
    """Return the model API key, read at call time so it can change at runtime."""
    return os.environ.get('OPENAI_API_KEY') or None
