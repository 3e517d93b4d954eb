"""Core module exports."""

from fkfactory.core.errors import (
    ConfigError,
    ErrorCode,
    FactoryError,
    InternalError,
    MissingRequiredFieldError,
    SchemaError,
)
from fkfactory.core.logging import (
    configure_logging,
    enter_resolution,
    exit_resolution,
    get_logger,
    get_resolution_depth,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FactoryError",
    "InternalError",
    "MissingRequiredFieldError",
    "SchemaError",
    # Logging
    "configure_logging",
    "enter_resolution",
    "exit_resolution",
    "get_logger",
    "get_resolution_depth",
]
