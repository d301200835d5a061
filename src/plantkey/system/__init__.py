"""System domain package.

This package contains system-level components:
- PathResolver: Path resolution and management
- StructlogConfigurator: Structured logging configuration
"""

from plantkey.system import structlog_configurator
from plantkey.system.path_resolver import PathResolver

__all__ = [
    "PathResolver",
    "structlog_configurator",
]
