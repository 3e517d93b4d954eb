"""Schema parser: factory declaration -> validated FactorySchema.

Every failure is a SchemaError raised while the decorator runs, so a
malformed declaration never produces a usable factory class.
"""

from __future__ import annotations

import copy
import dataclasses
import inspect
from collections.abc import Callable
from functools import partial
from typing import Any, ClassVar, get_origin, get_type_hints

from fkfactory.config.models import GeneratorConfig
from fkfactory.core.errors import SchemaError
from fkfactory.runtime.sentinels import default_factory_for, has_sentinel, sentinel
from fkfactory.schema.markers import (
    BARE_MARKERS,
    NO_DEFAULT,
    ForeignKeyMarker,
    PrimaryKeyMarker,
    RequiredMarker,
)
from fkfactory.schema.models import FactorySchema, FieldKind, FieldSpec, FkDescriptor
from fkfactory.schema.types import (
    FieldShape,
    collect_annotations,
    concrete_type,
    field_shape,
    strip_annotated,
    type_name,
)

_MISSING = object()

_MARKER_NAMES = {
    PrimaryKeyMarker: "pk()",
    ForeignKeyMarker: "fk()",
    RequiredMarker: "required()",
}


def parse_factory_header(cls: type, entity: Any = None) -> type:
    """Locate the entity type from ``entity=`` or an inner ``Meta.entity``."""
    factory_name = cls.__qualname__
    meta = cls.__dict__.get("Meta")
    meta_entity = getattr(meta, "entity", None) if meta is not None else None

    if entity is None and meta_entity is None:
        raise SchemaError.missing_entity(factory_name)
    if entity is not None and meta_entity is not None and entity is not meta_entity:
        raise SchemaError.malformed_header(
            factory_name, "entity= and Meta.entity name different types"
        )

    found = entity if entity is not None else meta_entity
    if not isinstance(found, type):
        raise SchemaError.malformed_header(factory_name, f"entity must be a class, got {found!r}")
    return found


def entity_field_names(entity: type) -> set[str] | None:
    """Field names of an introspectable entity, or None when unknown."""
    if dataclasses.is_dataclass(entity):
        return {f.name for f in dataclasses.fields(entity)}
    model_fields = getattr(entity, "model_fields", None)  # pydantic
    if isinstance(model_fields, dict):
        return set(model_fields)
    names: set[str] = set()
    for klass in entity.__mro__:
        names.update(inspect.get_annotations(klass))
    return names or None


def _normalize_marker(meta: Any) -> Any:
    for fn, marker in BARE_MARKERS.items():
        if meta is fn:
            return marker
    return meta


def _parse_fk_args(
    factory_name: str,
    field_name: str,
    args: tuple[Any, ...],
    config: GeneratorConfig,
) -> FkDescriptor:
    if len(args) not in (3, 4):
        raise SchemaError.malformed_fk(
            factory_name,
            field_name,
            f'expected (Entity, "field", Factory[, {config.suppress_marker}]), '
            f"got {len(args)} argument(s)",
        )

    target_entity, target_field, target_factory = args[:3]
    if not isinstance(target_entity, type):
        raise SchemaError.malformed_fk(
            factory_name, field_name, f"target entity must be a class, got {target_entity!r}"
        )
    if not isinstance(target_field, str) or not target_field.isidentifier():
        raise SchemaError.malformed_fk(
            factory_name,
            field_name,
            f"target field must be a string naming an attribute, got {target_field!r}",
        )
    if not isinstance(target_factory, type) and not (
        isinstance(target_factory, str) and target_factory
    ):
        raise SchemaError.malformed_fk(
            factory_name,
            field_name,
            f"target factory must be a class or a factory name, got {target_factory!r}",
        )

    suppress = False
    if len(args) == 4:
        flag = args[3]
        if flag is not NO_DEFAULT and flag != config.suppress_marker:
            raise SchemaError.malformed_fk(
                factory_name,
                field_name,
                f"unrecognized flag {flag!r}, expected NO_DEFAULT or '{config.suppress_marker}'",
            )
        suppress = True

    known = entity_field_names(target_entity)
    if known is not None and target_field not in known:
        raise SchemaError.unknown_target_field(
            factory_name, field_name, target_entity.__qualname__, target_field
        )

    return FkDescriptor(
        target_entity=target_entity,
        target_field=target_field,
        target_factory=target_factory,
        suppress_auto_create=suppress,
    )


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _initial_value(
    factory_name: str,
    name: str,
    kind: FieldKind,
    shape: FieldShape,
    declared: Any,
) -> Callable[[], Any]:
    if declared is not _MISSING:
        if shape.needs_duplication and declared is not None:
            return partial(copy.deepcopy, declared)
        return _constant(declared)

    if shape.optional:
        return _constant(None)

    value_type = concrete_type(shape.inner)
    if kind is FieldKind.FOREIGN_KEY and value_type is not None:
        # Plain-shape FKs start at the sentinel so build_with_fks() auto-creates them
        return partial(sentinel, value_type)

    make = default_factory_for(value_type)
    if make is None:
        raise SchemaError.no_default(factory_name, name, type_name(shape.inner))
    return make


def parse_field_attributes(
    factory_name: str,
    name: str,
    annotation: Any,
    declared: Any = _MISSING,
    config: GeneratorConfig | None = None,
) -> FieldSpec:
    """Classify one annotated field."""
    config = config or GeneratorConfig()
    base, metadata = collect_annotations(annotation)
    markers = [m for m in map(_normalize_marker, metadata) if type(m) in _MARKER_NAMES]
    if len(markers) > 1:
        raise SchemaError.conflicting_markers(
            factory_name, name, [_MARKER_NAMES[type(m)] for m in markers]
        )
    marker = markers[0] if markers else None
    shape = field_shape(base)

    fk_descriptor: FkDescriptor | None = None
    unwrap_required = False
    if isinstance(marker, PrimaryKeyMarker):
        kind = FieldKind.PRIMARY_KEY
    elif isinstance(marker, ForeignKeyMarker):
        kind = FieldKind.FOREIGN_KEY
        fk_descriptor = _parse_fk_args(factory_name, name, marker.args, config)
        id_type = concrete_type(shape.inner)
        if id_type is None or not has_sentinel(id_type):
            raise SchemaError.no_sentinel(factory_name, name, type_name(shape.inner))
    elif isinstance(marker, RequiredMarker):
        kind = FieldKind.REQUIRED_SCALAR
        unwrap_required = shape.optional
    elif shape.optional:
        kind = FieldKind.OPTIONAL_SCALAR
    else:
        kind = FieldKind.REQUIRED_SCALAR

    return FieldSpec(
        name=name,
        kind=kind,
        shape=shape,
        initial=_initial_value(factory_name, name, kind, shape, declared),
        fk=fk_descriptor,
        unwrap_required=unwrap_required,
    )


def _declared_default(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return klass.__dict__[name]
    return _MISSING


def _ordered_field_names(cls: type) -> list[str]:
    # Base classes first, like dataclasses; a redeclared field keeps its first position
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name in inspect.get_annotations(klass):
            names.setdefault(name, None)
    return list(names)


def parse_factory(
    cls: Any,
    entity: Any = None,
    *,
    config: GeneratorConfig | None = None,
) -> FactorySchema:
    """Parse a factory declaration.

    Args:
        cls: The decorated factory class.
        entity: Entity type given to the decorator, if any.
        config: Naming conventions; defaults to GeneratorConfig().

    Raises:
        SchemaError: On any malformed or missing metadata.
    """
    if not isinstance(cls, type):
        raise SchemaError.invalid_container(cls)

    factory_name = cls.__qualname__
    entity_type = parse_factory_header(cls, entity)

    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise SchemaError.malformed_header(factory_name, f"cannot resolve annotations: {e}") from e

    fields: list[FieldSpec] = []
    for name in _ordered_field_names(cls):
        hint = hints.get(name)
        if hint is None or get_origin(strip_annotated(hint)[0]) is ClassVar or hint is ClassVar:
            continue
        fields.append(
            parse_field_attributes(
                factory_name, name, hint, _declared_default(cls, name), config
            )
        )

    return FactorySchema(factory_name=factory_name, entity=entity_type, fields=tuple(fields))
