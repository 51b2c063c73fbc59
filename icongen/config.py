"""
IconGen - Configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name, default):
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


class Config:
    """Application configuration (environment overrides, .env supported)."""
    APP_NAME = 'IconGen'

    # Logging
    LOG_LEVEL = os.environ.get('ICONGEN_LOG_LEVEL', 'INFO').upper()

    # Pipeline: 1 = branches run sequentially
    WORKERS = max(1, _int_env('ICONGEN_WORKERS', 1))

    # Export
    ARCHIVE_NAME = os.environ.get('ICONGEN_ARCHIVE_NAME', 'generated_icons.zip')

    # UI (customtkinter)
    APPEARANCE_MODE = os.environ.get('ICONGEN_APPEARANCE', 'system')
    COLOR_THEME = os.environ.get('ICONGEN_THEME', 'blue')
