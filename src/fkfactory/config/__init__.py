"""Config module exports."""

from fkfactory.config.loader import get_default_config, load_config
from fkfactory.config.models import (
    FkFactoryConfig,
    GeneratorConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "get_default_config",
    "load_config",
    "FkFactoryConfig",
    "GeneratorConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
