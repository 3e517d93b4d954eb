"""Shared plumbing for rendering method source.

Generated methods are plain Python source compiled with ``exec`` against
a private globals dict, the way ``dataclasses`` builds ``__init__``.
Every object the source refers to (entity class, default producers,
runtime helpers) is bound into that dict under a stable name.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from fkfactory.config.models import GeneratorConfig
from fkfactory.core.errors import MissingRequiredFieldError
from fkfactory.runtime.resolve import create_dependency
from fkfactory.runtime.sentinels import is_sentinel
from fkfactory.schema.categorize import CategorizedFields
from fkfactory.schema.models import FactorySchema, FieldSpec

INDENT = "    "

_RUNTIME_GLOBALS: dict[str, Any] = {
    "_deepcopy": copy.deepcopy,
    "_is_sentinel": is_sentinel,
    "_create_dependency": create_dependency,
    "_MissingRequiredFieldError": MissingRequiredFieldError,
}


@dataclass(frozen=True, slots=True)
class Fragment:
    """Source of one generated class attribute."""

    name: str
    source: str


@dataclass
class CodegenContext:
    """Inputs shared by the synthesizers for one generation pass."""

    schema: FactorySchema
    fields: CategorizedFields
    config: GeneratorConfig
    namespace: dict[str, Any] = field(default_factory=lambda: dict(_RUNTIME_GLOBALS))

    def bind(self, preferred: str, value: Any) -> str:
        """Bind ``value`` into the globals and return the name to use in source."""
        name = preferred
        suffix = 1
        while name in self.namespace and self.namespace[name] is not value:
            suffix += 1
            name = f"{preferred}_{suffix}"
        self.namespace[name] = value
        return name

    @property
    def entity_ref(self) -> str:
        entity = self.schema.entity
        preferred = entity.__name__
        # Generated method names are bound in the same globals
        if (
            not preferred.isidentifier()
            or preferred in ("new", "build", self.config.resolve_method)
            or preferred.startswith(self.config.setter_prefix)
        ):
            preferred = "_Entity"
        return self.bind(preferred, entity)

    def setter_name(self, name: str) -> str:
        return f"{self.config.setter_prefix}{name}"

    def read(self, spec: FieldSpec, expr: str | None = None) -> str:
        """Expression reading a field value without sharing mutable state."""
        expr = expr or f"self.{spec.name}"
        if spec.shape.needs_duplication:
            return f"_deepcopy({expr})"
        return expr


def docstring(ctx: CodegenContext, text: str, level: int = 1) -> list[str]:
    if not ctx.config.docstrings:
        return []
    return [f'{INDENT * level}"""{text}"""']


def render(header: str, body: list[str]) -> str:
    return "\n".join([header, *body])


def call_lines(callee: str, kwargs: list[tuple[str, str]], level: int, prefix: str = "") -> list[str]:
    """``prefix callee(k=v, ...)`` spread one argument per line."""
    pad = INDENT * level
    if not kwargs:
        return [f"{pad}{prefix}{callee}()"]
    lines = [f"{pad}{prefix}{callee}("]
    lines.extend(f"{pad}{INDENT}{key}={value}," for key, value in kwargs)
    lines.append(f"{pad})")
    return lines
