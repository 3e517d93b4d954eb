"""Field markers carried in ``typing.Annotated`` metadata.

    @factory(entity=Patient)
    class PatientFactory:
        id: Annotated[PatientId, pk()]
        practice_id: Annotated[PracticeId | None, fk(Practice, "id", PracticeFactory)]
        tenant_id: Annotated[TenantId, fk(Tenant, "id", TenantFactory)]
        provider_id: Annotated[ProviderId | None, fk(Provider, "id", "ProviderFactory", NO_DEFAULT)]
        first_name: Annotated[str | None, required()] = "Auto-Generated"
        nickname: str | None = None

Markers only record their arguments; validation happens when the
factory is generated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class _NoDefault:
    """fk() flag: never auto-create this dependency."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True, slots=True)
class PrimaryKeyMarker:
    pass


@dataclass(frozen=True, slots=True)
class ForeignKeyMarker:
    args: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class RequiredMarker:
    pass


def pk() -> PrimaryKeyMarker:
    """Primary key: build() always uses the type's default, never the factory value."""
    return PrimaryKeyMarker()


def fk(*args: Any) -> ForeignKeyMarker:
    """Foreign key: ``fk(Entity, "field", Factory)`` or ``fk(Entity, "field", Factory, NO_DEFAULT)``.

    ``Factory`` may be the factory class or its registered name.
    """
    return ForeignKeyMarker(args=args)


def required() -> RequiredMarker:
    """Optional on the factory, mandatory on the entity: build() fails if never set."""
    return RequiredMarker()


# Bare functions are accepted in place of calls: Annotated[int, pk]
BARE_MARKERS = {pk: PrimaryKeyMarker(), required: RequiredMarker()}
