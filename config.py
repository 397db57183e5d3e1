"""
Section Editor Configuration
Central configuration for the generated-code editing service
"""

import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file (for local development)
load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name: str, default: str) -> List[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class AppConfig:
    """Application configuration and settings"""

    # ============================================================================
    # APP IDENTITY
    # ============================================================================
    APP_NAME = "Section Editor"
    APP_VERSION = "1.0"
    VERSION = "1.0"  # Alias for compatibility
    TAGLINE = "Structural edits for generated travel document templates"

    # ============================================================================
    # LOGGING
    # ============================================================================
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # ============================================================================
    # HTTP
    # ============================================================================
    CORS_ORIGINS = _env_list('CORS_ORIGINS', '*')
    MAX_CODE_SIZE_KB = int(os.environ.get('MAX_CODE_SIZE_KB', '512'))  # Per request

    # ============================================================================
    # EDITOR BEHAVIOR
    # ============================================================================
    # When enabled the API reports no-op edits as errors instead of echoing
    # the unchanged code back with changed=false
    EDITOR_STRICT_MODE = _env_flag('EDITOR_STRICT_MODE', False)

    # Defaults for newly inserted sections
    DEFAULT_DIRECTION = os.environ.get('DEFAULT_DIRECTION', 'rtl')
    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE', 'ar')
    TEMPLATES_IMPORT_BASE = os.environ.get('TEMPLATES_IMPORT_BASE', '@/app/Templates')

    # ============================================================================
    # VALIDATION
    # ============================================================================
    @classmethod
    def validate_config(cls) -> tuple[bool, list[str]]:
        """
        Validate configuration

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if cls.DEFAULT_DIRECTION not in ('rtl', 'ltr'):
            errors.append(f"DEFAULT_DIRECTION must be 'rtl' or 'ltr', got '{cls.DEFAULT_DIRECTION}'")
        if cls.MAX_CODE_SIZE_KB <= 0:
            errors.append("MAX_CODE_SIZE_KB must be positive")
        if cls.LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"LOG_LEVEL '{cls.LOG_LEVEL}' is not a logging level")

        return (len(errors) == 0, errors)

    @classmethod
    def get_config_summary(cls) -> dict:
        """Get summary of current configuration"""
        return {
            'app_name': cls.APP_NAME,
            'version': cls.APP_VERSION,
            'log_level': cls.LOG_LEVEL,
            'strict_mode': cls.EDITOR_STRICT_MODE,
            'max_code_size_kb': cls.MAX_CODE_SIZE_KB,
            'default_direction': cls.DEFAULT_DIRECTION,
            'default_language': cls.DEFAULT_LANGUAGE,
            'templates_import_base': cls.TEMPLATES_IMPORT_BASE,
        }


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_section_defaults() -> dict:
    """Get default props for inserted sections"""
    return {
        'direction': AppConfig.DEFAULT_DIRECTION,
        'language': AppConfig.DEFAULT_LANGUAGE,
    }


def is_strict_mode() -> bool:
    """Check if no-op edits should be reported as errors"""
    return AppConfig.EDITOR_STRICT_MODE
