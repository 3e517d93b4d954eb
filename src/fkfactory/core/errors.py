"""fkfactory error types with typed error codes.

Error code ranges:
- 1xxx: Schema (raised while a factory declaration is generated)
- 2xxx: Config
- 3xxx: Build (raised by generated build methods)
- 9xxx: Internal

Failures of a nested ``create()`` during FK resolution are not represented
here: they propagate unchanged to the caller.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Schema (1xxx)
    SCHEMA_MISSING_ENTITY = 1001
    SCHEMA_MALFORMED_HEADER = 1002
    SCHEMA_INVALID_CONTAINER = 1003
    SCHEMA_MALFORMED_FK = 1004
    SCHEMA_CONFLICTING_MARKERS = 1005
    SCHEMA_UNKNOWN_TARGET_FIELD = 1006
    SCHEMA_NO_SENTINEL = 1007
    SCHEMA_NO_DEFAULT = 1008
    SCHEMA_SETTER_COLLISION = 1009
    SCHEMA_UNKNOWN_FACTORY = 1010
    SCHEMA_CAPABILITY_MISMATCH = 1011

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Build (3xxx)
    BUILD_MISSING_REQUIRED = 3001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(slots=True, eq=False)
class FactoryError(Exception):
    """Base error with structured context.

    Not frozen: the interpreter and context managers assign
    ``__traceback__`` while the error propagates.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SCHEMA_MALFORMED_FK')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class SchemaError(FactoryError):
    """Malformed or missing factory metadata, reported at generation time."""

    @classmethod
    def missing_entity(cls, factory: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_MISSING_ENTITY,
            message=(
                f"{factory}: missing entity declaration, "
                "use @factory(entity=EntityType) or an inner `class Meta: entity = EntityType`"
            ),
            details={"factory": factory},
        )

    @classmethod
    def malformed_header(cls, factory: str, reason: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_MALFORMED_HEADER,
            message=f"{factory}: malformed factory header: {reason}",
            details={"factory": factory, "reason": reason},
        )

    @classmethod
    def invalid_container(cls, target: Any) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_INVALID_CONTAINER,
            message=f"@factory only works on classes, got {target!r}",
            details={"target": repr(target)},
        )

    @classmethod
    def malformed_fk(cls, factory: str, field_name: str, reason: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_MALFORMED_FK,
            message=f"{factory}.{field_name}: malformed fk(...) arguments: {reason}",
            details={"factory": factory, "field": field_name, "reason": reason},
        )

    @classmethod
    def conflicting_markers(cls, factory: str, field_name: str, markers: list[str]) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_CONFLICTING_MARKERS,
            message=(
                f"{factory}.{field_name}: markers {', '.join(markers)} are mutually exclusive"
            ),
            details={"factory": factory, "field": field_name, "markers": markers},
        )

    @classmethod
    def unknown_target_field(
        cls, factory: str, field_name: str, entity: str, target_field: str
    ) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_UNKNOWN_TARGET_FIELD,
            message=f"{factory}.{field_name}: {entity} has no field named '{target_field}'",
            details={
                "factory": factory,
                "field": field_name,
                "entity": entity,
                "target_field": target_field,
            },
        )

    @classmethod
    def no_sentinel(cls, factory: str, field_name: str, type_name: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_NO_SENTINEL,
            message=(
                f"{factory}.{field_name}: no sentinel policy for {type_name}, "
                "implement sentinel()/is_sentinel() or call register_sentinel()"
            ),
            details={"factory": factory, "field": field_name, "type": type_name},
        )

    @classmethod
    def no_default(cls, factory: str, field_name: str, type_name: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_NO_DEFAULT,
            message=(
                f"{factory}.{field_name}: cannot derive a default for {type_name}, "
                "declare one on the factory class"
            ),
            details={"factory": factory, "field": field_name, "type": type_name},
        )

    @classmethod
    def setter_collision(cls, factory: str, name: str, reason: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_SETTER_COLLISION,
            message=f"{factory}: generated method '{name}' collides: {reason}",
            details={"factory": factory, "name": name, "reason": reason},
        )

    @classmethod
    def unknown_factory(cls, name: str, reason: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_UNKNOWN_FACTORY,
            message=f"Cannot resolve factory '{name}': {reason}",
            details={"name": name, "reason": reason},
        )

    @classmethod
    def capability_mismatch(
        cls, factory: str, field_name: str, target_factory: str, reason: str
    ) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_CAPABILITY_MISMATCH,
            message=f"{factory}.{field_name}: {target_factory} cannot create dependency: {reason}",
            details={
                "factory": factory,
                "field": field_name,
                "target_factory": target_factory,
                "reason": reason,
            },
        )


class ConfigError(FactoryError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MissingRequiredFieldError(FactoryError):
    """A required() field was never set before building.

    This is a caller bug, not a recoverable outcome.
    """

    @classmethod
    def for_field(cls, factory: str, field_name: str, setter: str) -> "MissingRequiredFieldError":
        return cls(
            code=ErrorCode.BUILD_MISSING_REQUIRED,
            message=f"{field_name} is required - use {setter}()",
            details={"factory": factory, "field": field_name, "setter": setter},
        )


class InternalError(FactoryError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
