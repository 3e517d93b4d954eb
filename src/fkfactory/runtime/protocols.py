"""Creation capability that FK resolution requires from dependency factories."""

from __future__ import annotations

import inspect
from typing import Any, Protocol, TypeVar, runtime_checkable

from fkfactory.core.errors import SchemaError

PoolT = TypeVar("PoolT", contravariant=True)
EntityT = TypeVar("EntityT", covariant=True)


@runtime_checkable
class FactoryCreate(Protocol[PoolT, EntityT]):
    """A factory that can persist the entity it builds.

    Implemented by hand on every factory that other factories reference
    through fk(); usually calls ``build_with_fks(pool)`` and inserts the
    result. Errors raised here propagate unchanged through every level of
    FK resolution.
    """

    async def create(self, pool: PoolT) -> EntityT: ...


def check_capability(
    factory_cls: type,
    entity: type,
    *,
    owner: str,
    field: str,
) -> None:
    """Verify ``factory_cls`` can auto-create ``entity`` for ``owner.field``.

    Raises:
        SchemaError: When create() is missing or not async, or the factory
            is generated for a different entity.
    """
    name = factory_cls.__qualname__
    create = getattr(factory_cls, "create", None)
    if create is None:
        raise SchemaError.capability_mismatch(owner, field, name, "no create(pool) method")
    if not inspect.iscoroutinefunction(create):
        raise SchemaError.capability_mismatch(owner, field, name, "create(pool) must be async")

    schema: Any = getattr(factory_cls, "__factory_schema__", None)
    if schema is not None and not issubclass(schema.entity, entity):
        raise SchemaError.capability_mismatch(
            owner,
            field,
            name,
            f"builds {schema.entity_name}, expected {entity.__qualname__}",
        )
