"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FKFACTORY__SECTION__KEY)
3. Project YAML (fkfactory.yaml)
4. Global YAML (~/.config/fkfactory/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    FKFACTORY__<SECTION>__<KEY>=<VALUE>

Examples:
    FKFACTORY__LOGGING__LEVEL=DEBUG
    FKFACTORY__GENERATOR__ID_SUFFIX=_pk
    FKFACTORY__GENERATOR__LOG_SOURCE=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FKFACTORY__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every generated factory and FK auto-creation.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


def _check_identifier_part(value: str, what: str) -> str:
    # "_id" and "with_" are not identifiers on their own but must be valid inside one
    if not ("x" + value + "x").isidentifier():
        raise ValueError(f"{what} must be usable inside a Python identifier, got {value!r}")
    return value


class GeneratorConfig(BaseModel):
    """Naming conventions and options for generated factory methods.

    Env vars:
        FKFACTORY__GENERATOR__ID_SUFFIX: Identifier suffix stripped for entity setters
        FKFACTORY__GENERATOR__SETTER_PREFIX: Prefix of every generated setter
        FKFACTORY__GENERATOR__RESOLVE_METHOD: Name of the async FK-resolving build method
        FKFACTORY__GENERATOR__SUPPRESS_MARKER: fk() flag that disables auto-creation
        FKFACTORY__GENERATOR__DOCSTRINGS: Emit docstrings on generated methods
        FKFACTORY__GENERATOR__LOG_SOURCE: Log generated source at DEBUG
    """

    id_suffix: str = Field(
        default="_id",
        description="Suffix marking FK identifier fields. practice_id -> with_practice().",
    )
    setter_prefix: str = Field(
        default="with_",
        description="Prefix for generated fluent setters.",
    )
    resolve_method: str = Field(
        default="build_with_fks",
        description="Name of the generated async method that resolves FK dependencies.",
    )
    suppress_marker: str = Field(
        default="no_default",
        description="String accepted as the fourth fk() argument to disable auto-creation.",
    )
    docstrings: bool = Field(
        default=True,
        description="Emit docstrings on generated methods (visible in help() and fkf render).",
    )
    log_source: bool = Field(
        default=False,
        description="Log the full generated source of every factory at DEBUG level.",
    )

    @field_validator("id_suffix", "setter_prefix")
    @classmethod
    def validate_identifier_part(cls, v: str) -> str:
        return _check_identifier_part(v, "Naming convention")

    @field_validator("id_suffix")
    @classmethod
    def validate_id_suffix(cls, v: str) -> str:
        # An empty suffix would strip every FK field name down to the bare prefix
        if not v:
            raise ValueError("id_suffix must not be empty")
        return v

    @field_validator("resolve_method")
    @classmethod
    def validate_resolve_method(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"resolve_method must be a Python identifier, got {v!r}")
        return v

    @field_validator("suppress_marker")
    @classmethod
    def validate_suppress_marker(cls, v: str) -> str:
        if not v:
            raise ValueError("suppress_marker must not be empty")
        return v


class FkFactoryConfig(BaseModel):
    """Root configuration for fkfactory.

    All settings can be configured via:
    1. Environment variables: FKFACTORY__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
