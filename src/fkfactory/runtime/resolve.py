"""Dependency creation invoked by generated ``build_with_fks`` methods."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from fkfactory.core.logging import enter_resolution, exit_resolution, get_resolution_depth
from fkfactory.runtime import registry
from fkfactory.runtime.protocols import check_capability

if TYPE_CHECKING:
    from fkfactory.schema.models import FkDescriptor

log = structlog.get_logger(__name__)


def resolve_factory(fk: FkDescriptor, *, owner: str, field: str) -> type:
    """The factory class behind an fk() descriptor.

    Class-valued targets were checked at generation time; name-valued
    targets are looked up and checked here.
    """
    target = fk.target_factory
    if isinstance(target, type):
        return target
    factory_cls = registry.lookup(target)
    check_capability(factory_cls, fk.target_entity, owner=owner, field=field)
    return factory_cls


async def create_dependency(fk: FkDescriptor, pool: Any, *, owner: str, field: str) -> Any:
    """Default-construct the target factory and await its create(pool).

    Exceptions from create() propagate unchanged.
    """
    factory_cls = resolve_factory(fk, owner=owner, field=field)
    log.debug(
        "fk_autocreate",
        factory=owner,
        field=field,
        target_factory=factory_cls.__qualname__,
        depth=get_resolution_depth(),
    )
    new = getattr(factory_cls, "new", factory_cls)
    token = enter_resolution()
    try:
        entity = await new().create(pool)
    finally:
        exit_resolution(token)
    log.debug("fk_resolved", factory=owner, field=field, target_field=fk.target_field)
    return entity
