"""Parsed factory schema."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fkfactory.schema.types import FieldShape


class FieldKind(str, Enum):
    PRIMARY_KEY = "pk"
    FOREIGN_KEY = "fk"
    OPTIONAL_SCALAR = "optional"
    REQUIRED_SCALAR = "required"


@dataclass(frozen=True, slots=True)
class FkDescriptor:
    """Arguments of one fk() marker, validated."""

    target_entity: type
    target_field: str
    target_factory: type | str
    suppress_auto_create: bool = False

    @property
    def target_factory_name(self) -> str:
        if isinstance(self.target_factory, type):
            return self.target_factory.__qualname__
        return self.target_factory


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One factory field.

    ``initial`` produces the value a fresh factory holds. ``unwrap_required``
    marks a required() field declared optional on the factory but not on
    the entity.
    """

    name: str
    kind: FieldKind
    shape: FieldShape
    initial: Callable[[], Any]
    fk: FkDescriptor | None = None
    unwrap_required: bool = False

    @property
    def optional(self) -> bool:
        return self.shape.optional


@dataclass(frozen=True, slots=True)
class FactorySchema:
    factory_name: str
    entity: type
    fields: tuple[FieldSpec, ...]

    @property
    def entity_name(self) -> str:
        return self.entity.__qualname__

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)
