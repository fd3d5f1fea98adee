"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word pools (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config, get_config
from .game_settings import (
    ABOUT_COST,
    CATEGORIES,
    DICTIONARIES,
    DIFFICULTIES,
    HINT_COST,
    HINT_REVEAL_CAP,
    MAX_ATTEMPTS,
    WORD_LENGTHS,
    WORD_POOLS,
    get_word_statistics,
    validate_dictionary_integrity,
    validate_word_pool_integrity,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config', 'get_config',
    # Game rules
    'ABOUT_COST', 'CATEGORIES', 'DICTIONARIES', 'DIFFICULTIES', 'HINT_COST', 'HINT_REVEAL_CAP',
    'MAX_ATTEMPTS', 'WORD_LENGTHS', 'WORD_POOLS',
    'get_word_statistics', 'validate_dictionary_integrity', 'validate_word_pool_integrity',
]
