"""PlantKey configuration package.

This package provides centralized configuration management with:
- Pydantic models for every configurable concern
- YAML parsing and serialization
- Environment overrides for secrets
"""

from .manager import ConfigManager
from .models import PlantKeyConfig

__all__ = [
    "ConfigManager",
    "PlantKeyConfig",
]
