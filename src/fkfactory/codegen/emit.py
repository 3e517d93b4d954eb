"""Emission driver: one factory schema -> one generated unit -> installed methods."""

from __future__ import annotations

import linecache
from dataclasses import dataclass
from typing import Any

import structlog

from fkfactory.codegen.builder_api import synthesize_builder_api
from fkfactory.codegen.resolution import (
    CapabilityBound,
    capability_bounds,
    synthesize_resolution,
)
from fkfactory.codegen.source import CodegenContext, Fragment
from fkfactory.config.models import GeneratorConfig
from fkfactory.core.errors import InternalError, SchemaError
from fkfactory.runtime.protocols import check_capability
from fkfactory.schema.categorize import categorize
from fkfactory.schema.models import FactorySchema

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratedUnit:
    """Rendered source of every generated method for one factory."""

    factory_name: str
    entity_name: str
    source: str
    names: tuple[str, ...]
    namespace: dict[str, Any]
    bounds: tuple[CapabilityBound, ...]


def _check_names(schema: FactorySchema, fragments: list[Fragment]) -> None:
    field_names = {spec.name for spec in schema.fields}
    seen: set[str] = set()
    for fragment in fragments:
        if fragment.name in seen:
            raise SchemaError.setter_collision(
                schema.factory_name,
                fragment.name,
                "generated twice (FK field without an id suffix?)",
            )
        if fragment.name in field_names:
            raise SchemaError.setter_collision(
                schema.factory_name, fragment.name, "shadowed by a field of the same name"
            )
        seen.add(fragment.name)


def emit(schema: FactorySchema, config: GeneratorConfig | None = None) -> GeneratedUnit:
    """Synthesize every method of ``schema`` into a single source unit.

    Raises:
        SchemaError: When two generated methods, or a method and a field,
            share a name.
    """
    ctx = CodegenContext(
        schema=schema, fields=categorize(schema), config=config or GeneratorConfig()
    )
    fragments = [*synthesize_builder_api(ctx), *synthesize_resolution(ctx)]
    _check_names(schema, fragments)

    header = f"# Generated by fkfactory: {schema.factory_name} -> {schema.entity_name}"
    source = "\n\n\n".join([header, *(fragment.source for fragment in fragments)]) + "\n"
    return GeneratedUnit(
        factory_name=schema.factory_name,
        entity_name=schema.entity_name,
        source=source,
        names=tuple(fragment.name for fragment in fragments),
        namespace=ctx.namespace,
        bounds=tuple(capability_bounds(ctx)),
    )


def check_bounds(unit: GeneratedUnit) -> None:
    """Check class-valued target factories now; named ones are checked on first use."""
    for bound in unit.bounds:
        if isinstance(bound.factory, type):
            check_capability(bound.factory, bound.entity, owner=unit.factory_name, field=bound.field)


def install(cls: type, unit: GeneratedUnit) -> None:
    """Compile ``unit`` and set its methods on ``cls``.

    Nothing is set unless the whole unit compiles and no generated name
    clashes with something the class defines itself.
    """
    for name in unit.names:
        if name in cls.__dict__:
            raise SchemaError.setter_collision(
                unit.factory_name, name, "already defined on the factory class"
            )

    filename = f"<fkfactory {cls.__module__}.{cls.__qualname__}>"
    # Lets tracebacks and inspect.getsource() show generated lines
    linecache.cache[filename] = (len(unit.source), None, unit.source.splitlines(True), filename)
    try:
        code = compile(unit.source, filename, "exec")
    except SyntaxError as e:
        raise InternalError.unexpected(
            f"generated source does not compile: {e}", factory=unit.factory_name
        ) from e
    namespace = dict(unit.namespace)
    exec(code, namespace)  # noqa: S102

    missing = [name for name in unit.names if name not in namespace]
    if missing:
        raise InternalError.unexpected(
            "generated source did not define every method",
            factory=unit.factory_name,
            missing=missing,
        )
    members = {name: namespace[name] for name in unit.names}
    for name, member in members.items():
        func = member.__func__ if isinstance(member, classmethod) else member
        func.__qualname__ = f"{cls.__qualname__}.{name}"
        func.__module__ = cls.__module__

    for name, member in members.items():
        setattr(cls, name, member)
    log.debug("factory_installed", factory=unit.factory_name, methods=len(members))
