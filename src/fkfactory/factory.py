"""The @factory decorator: parse, generate and install in one step."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

import structlog

from fkfactory.codegen.emit import check_bounds, emit, install
from fkfactory.config.loader import get_default_config
from fkfactory.config.models import GeneratorConfig
from fkfactory.runtime import registry
from fkfactory.schema.categorize import categorize
from fkfactory.schema.parser import parse_factory

log = structlog.get_logger(__name__)

T = TypeVar("T", bound=type)


def generate(cls: T, entity: Any = None, config: GeneratorConfig | None = None) -> T:
    """Generate and install the builder API of ``cls``.

    Raises:
        SchemaError: On malformed declarations; ``cls`` is left untouched.
    """
    config = config or get_default_config().generator
    schema = parse_factory(cls, entity, config=config)
    unit = emit(schema, config)
    check_bounds(unit)
    install(cls, unit)

    cls.__factory_schema__ = schema  # type: ignore[attr-defined]
    cls.__factory_source__ = unit.source  # type: ignore[attr-defined]
    cls.__factory_bounds__ = unit.bounds  # type: ignore[attr-defined]
    cls.__factory_config__ = config  # type: ignore[attr-defined]
    registry.register(cls)

    fields = categorize(schema)
    log.debug(
        "factory_generated",
        factory=schema.factory_name,
        entity=schema.entity_name,
        primary_keys=len(fields.primary_keys),
        foreign_keys=len(fields.foreign_keys),
        optional_scalars=len(fields.optional_scalars),
        required_scalars=len(fields.required_scalars),
    )
    if config.log_source:
        log.debug("factory_source", factory=schema.factory_name, source=unit.source)
    return cls


@overload
def factory(cls: T, /) -> T: ...


@overload
def factory(
    cls: None = None, /, *, entity: Any = None, config: GeneratorConfig | None = None
) -> Callable[[T], T]: ...


def factory(
    cls: Any = None,
    /,
    *,
    entity: Any = None,
    config: GeneratorConfig | None = None,
) -> Any:
    """Turn an annotated class into a factory for ``entity``.

    Usable as ``@factory(entity=Note)`` or bare ``@factory`` with an
    inner ``class Meta: entity = Note``.

    Generates ``new()``, ``with_*`` setters, ``build()`` and the async
    ``build_with_fks(pool)``. The class supplies ``create(pool)`` itself
    when other factories depend on it.
    """

    def wrap(target: T) -> T:
        return generate(target, entity, config)

    if cls is None:
        return wrap
    return wrap(cls)
