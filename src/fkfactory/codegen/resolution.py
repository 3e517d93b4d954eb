"""FK-resolution synthesizer: the async ``build_with_fks(pool)`` method.

Each FK field gets one resolution step, emitted in declaration order:

- optional + NO_DEFAULT: keep a present non-sentinel value, else None;
  never creates anything.
- optional: keep a present non-sentinel value, else create the target via
  its factory and take ``target_field`` from the result.
- plain: create when the value is the sentinel, else keep it.

Steps run sequentially; each creation is awaited before the next step
starts, and an exception from one aborts the rest. Target factories run
the same protocol for their own FKs against the same pool, with no cycle
detection.
"""

from __future__ import annotations

from dataclasses import dataclass

from fkfactory.codegen.builder_api import assembly_lines, required_checks
from fkfactory.codegen.source import INDENT, CodegenContext, Fragment, docstring, render
from fkfactory.schema.models import FieldSpec


@dataclass(frozen=True, slots=True)
class CapabilityBound:
    """A target factory that must be able to ``create(pool)`` an entity."""

    field: str
    factory: type | str
    entity: type


def capability_bounds(ctx: CodegenContext) -> list[CapabilityBound]:
    """Bounds for every FK that may auto-create; NO_DEFAULT fields need none."""
    bounds: list[CapabilityBound] = []
    for spec in ctx.fields.foreign_keys:
        if spec.fk is None or spec.fk.suppress_auto_create:
            continue
        bounds.append(
            CapabilityBound(
                field=spec.name, factory=spec.fk.target_factory, entity=spec.fk.target_entity
            )
        )
    return bounds


def _create_lines(ctx: CodegenContext, spec: FieldSpec, target: str, level: int) -> list[str]:
    assert spec.fk is not None
    pad = INDENT * level
    descriptor = ctx.bind(f"_fk_{spec.name}", spec.fk)
    owner = repr(ctx.schema.factory_name)
    return [
        f"{pad}_entity = await _create_dependency("
        f"{descriptor}, pool, owner={owner}, field={spec.name!r})",
        f"{pad}{target} = {ctx.read(spec, f'_entity.{spec.fk.target_field}')}",
    ]


def resolution_step(ctx: CodegenContext, spec: FieldSpec) -> tuple[str, list[str]]:
    """Lines resolving one FK field and the local variable holding the result."""
    assert spec.fk is not None
    target = f"resolved_{spec.name}"
    current = f"self.{spec.name}"
    keep = f"{INDENT * 2}{target} = {ctx.read(spec)}"
    lines = [
        f"{INDENT}# {spec.name}: {spec.fk.target_entity.__qualname__}.{spec.fk.target_field} "
        f"via {spec.fk.target_factory_name}"
    ]

    if not spec.optional:
        lines.append(f"{INDENT}if _is_sentinel({current}):")
        lines.extend(_create_lines(ctx, spec, target, 2))
        lines.append(f"{INDENT}else:")
        lines.append(keep)
        return target, lines

    lines.append(f"{INDENT}if {current} is not None and not _is_sentinel({current}):")
    lines.append(keep)
    lines.append(f"{INDENT}else:")
    if spec.fk.suppress_auto_create:
        lines.append(f"{INDENT * 2}{target} = None")
    else:
        lines.extend(_create_lines(ctx, spec, target, 2))
    return target, lines


def synthesize_resolution(ctx: CodegenContext) -> list[Fragment]:
    name = ctx.config.resolve_method
    resolved: dict[str, str] = {}
    steps: list[str] = []
    for spec in ctx.fields.foreign_keys:
        target, lines = resolution_step(ctx, spec)
        resolved[spec.name] = target
        steps.extend(lines)

    body = [
        *docstring(
            ctx,
            f"Build a {ctx.schema.entity_name}, creating missing FK dependencies via pool.\n\n"
            f"{INDENT}Dependencies are created one at a time in field order; the first\n"
            f"{INDENT}failing create() aborts the rest and its exception propagates.\n{INDENT}",
        ),
        *steps,
        *required_checks(ctx),
        *assembly_lines(ctx, resolved),
    ]
    return [Fragment(name, render(f"async def {name}(self, pool):", body))]
