"""Field categorizer: partition a schema into the sets code is generated from."""

from __future__ import annotations

from dataclasses import dataclass

from fkfactory.schema.models import FactorySchema, FieldKind, FieldSpec


@dataclass(frozen=True, slots=True)
class CategorizedFields:
    """Four disjoint sets, each in declaration order.

    Non-key fields are split by declared shape, which decides the setter
    signature: a required() field declared ``T | None`` lands in
    ``optional_scalars``.
    """

    primary_keys: tuple[FieldSpec, ...]
    foreign_keys: tuple[FieldSpec, ...]
    optional_scalars: tuple[FieldSpec, ...]
    required_scalars: tuple[FieldSpec, ...]


def categorize(schema: FactorySchema) -> CategorizedFields:
    primary_keys: list[FieldSpec] = []
    foreign_keys: list[FieldSpec] = []
    optional_scalars: list[FieldSpec] = []
    required_scalars: list[FieldSpec] = []

    for spec in schema.fields:
        if spec.kind is FieldKind.PRIMARY_KEY:
            primary_keys.append(spec)
        elif spec.kind is FieldKind.FOREIGN_KEY:
            foreign_keys.append(spec)
        elif spec.optional:
            optional_scalars.append(spec)
        else:
            required_scalars.append(spec)

    return CategorizedFields(
        primary_keys=tuple(primary_keys),
        foreign_keys=tuple(foreign_keys),
        optional_scalars=tuple(optional_scalars),
        required_scalars=tuple(required_scalars),
    )
