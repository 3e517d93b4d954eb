"""fkfactory - generated test-data factories with automatic FK resolution."""

from fkfactory.core.errors import FactoryError, MissingRequiredFieldError, SchemaError
from fkfactory.factory import factory, generate
from fkfactory.runtime.protocols import FactoryCreate
from fkfactory.runtime.sentinels import (
    Sentinel,
    is_sentinel,
    register_sentinel,
    sentinel,
    unregister_sentinel,
)
from fkfactory.schema.markers import NO_DEFAULT, fk, pk, required

__all__ = [
    "NO_DEFAULT",
    "FactoryCreate",
    "FactoryError",
    "MissingRequiredFieldError",
    "SchemaError",
    "Sentinel",
    "factory",
    "fk",
    "generate",
    "is_sentinel",
    "pk",
    "register_sentinel",
    "required",
    "sentinel",
    "unregister_sentinel",
]
