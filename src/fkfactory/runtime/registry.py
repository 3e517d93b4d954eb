"""Registry of generated factories, for fk() targets given by name.

Naming a factory instead of passing the class lets a declaration refer
to a factory defined later in the module (or to itself).
"""

from __future__ import annotations

from fkfactory.core.errors import SchemaError

_factories: dict[str, type] = {}


def _key(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def register(cls: type) -> None:
    """Register a generated factory. Re-registering the same name replaces it."""
    _factories[_key(cls)] = cls


def unregister(cls: type) -> None:
    _factories.pop(_key(cls), None)


def lookup(name: str) -> type:
    """Resolve a factory by dotted name, qualified name or bare class name.

    Raises:
        SchemaError: When nothing matches or a short name is ambiguous.
    """
    if name in _factories:
        return _factories[name]

    matches = [
        cls
        for cls in _factories.values()
        if name in (cls.__qualname__, cls.__name__) or _key(cls).endswith("." + name)
    ]
    if not matches:
        raise SchemaError.unknown_factory(name, "no registered factory with that name")
    if len(matches) > 1:
        candidates = ", ".join(sorted(_key(cls) for cls in matches))
        raise SchemaError.unknown_factory(name, f"ambiguous, matches {candidates}")
    return matches[0]


def registered_factories(module: str | None = None) -> list[type]:
    """Registered factories in registration order, optionally for one module."""
    return [cls for cls in _factories.values() if module is None or cls.__module__ == module]
