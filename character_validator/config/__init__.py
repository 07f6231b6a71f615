"""Configuration loading and validation."""

from .models import (
    SystemConfig,
    ValidationRulesConfig,
    ViewerConfig,
)
from .loader import ConfigLoader, ConfigLoadError, ConfigValidationError, CharacterFileError

__all__ = [
    "SystemConfig",
    "ValidationRulesConfig",
    "ViewerConfig",
    "ConfigLoader",
    "ConfigLoadError",
    "ConfigValidationError",
    "CharacterFileError",
]
