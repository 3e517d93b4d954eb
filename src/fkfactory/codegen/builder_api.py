"""Builder-API synthesizer: constructor, new(), fluent setters and build()."""

from __future__ import annotations

from fkfactory.codegen.source import (
    INDENT,
    CodegenContext,
    Fragment,
    call_lines,
    docstring,
    render,
)
from fkfactory.config.models import GeneratorConfig
from fkfactory.schema.models import FieldKind, FieldSpec


def fk_entity_setter_name(field_name: str, config: GeneratorConfig) -> str:
    """Name of the setter taking the target entity.

    practice_id -> with_practice; procedure_id_origin -> with_procedure_origin.
    """
    suffix = config.id_suffix
    if field_name.endswith(suffix) and len(field_name) > len(suffix):
        stem = field_name[: -len(suffix)]
    else:
        stem = field_name.replace(f"{suffix}_", "_")
    return f"{config.setter_prefix}{stem}"


def _init(ctx: CodegenContext) -> Fragment:
    body: list[str] = []
    for spec in ctx.schema.fields:
        initial = ctx.bind(f"_initial_{spec.name}", spec.initial)
        body.append(f"{INDENT}self.{spec.name} = {initial}()")
    if not body:
        body.append(f"{INDENT}pass")
    return Fragment("__init__", render("def __init__(self):", body))


def _new(ctx: CodegenContext) -> Fragment:
    body = [
        *docstring(ctx, "Create a new factory with default values."),
        f"{INDENT}return cls()",
    ]
    return Fragment("new", render("@classmethod\ndef new(cls):", body))


def _setter(ctx: CodegenContext, name: str, param: str, assignment: str, doc: str) -> Fragment:
    body = [
        *docstring(ctx, doc),
        f"{INDENT}{assignment}",
        f"{INDENT}return self",
    ]
    return Fragment(name, render(f"def {name}(self, {param}):", body))


def _fk_setters(ctx: CodegenContext, spec: FieldSpec) -> list[Fragment]:
    assert spec.fk is not None
    entity_name = spec.fk.target_entity.__qualname__
    from_entity = ctx.read(spec, f"entity.{spec.fk.target_field}")
    return [
        _setter(
            ctx,
            fk_entity_setter_name(spec.name, ctx.config),
            "entity",
            f"self.{spec.name} = {from_entity}",
            f"Set {spec.name} from a {entity_name} entity.",
        ),
        _setter(
            ctx,
            ctx.setter_name(spec.name),
            "value",
            f"self.{spec.name} = value",
            f"Set {spec.name} directly.",
        ),
    ]


def _scalar_setter(ctx: CodegenContext, spec: FieldSpec) -> Fragment:
    value = "str(value)" if spec.shape.is_text else "value"
    doc = "Set optional field value." if spec.optional else "Set field value."
    return _setter(
        ctx, ctx.setter_name(spec.name), "value", f"self.{spec.name} = {value}", doc
    )


def required_checks(ctx: CodegenContext, level: int = 1) -> list[str]:
    """Raise MissingRequiredFieldError for every required() field left unset."""
    pad = INDENT * level
    lines: list[str] = []
    for spec in ctx.schema.fields:
        if not spec.unwrap_required:
            continue
        args = ", ".join(
            repr(a) for a in (ctx.schema.factory_name, spec.name, ctx.setter_name(spec.name))
        )
        lines.append(f"{pad}if self.{spec.name} is None:")
        lines.append(f"{pad}{INDENT}raise _MissingRequiredFieldError.for_field({args})")
    return lines


def assignment_expr(ctx: CodegenContext, spec: FieldSpec, resolved: dict[str, str]) -> str:
    """Keyword-argument value for one entity field."""
    if spec.kind is FieldKind.PRIMARY_KEY:
        return f"{ctx.bind(f'_initial_{spec.name}', spec.initial)}()"
    if spec.name in resolved:
        return resolved[spec.name]
    return ctx.read(spec)


def assembly_lines(
    ctx: CodegenContext, resolved: dict[str, str] | None = None, level: int = 1
) -> list[str]:
    """``return Entity(field=..., ...)`` in declaration order."""
    resolved = resolved or {}
    kwargs = [(spec.name, assignment_expr(ctx, spec, resolved)) for spec in ctx.schema.fields]
    return call_lines(ctx.entity_ref, kwargs, level, prefix="return ")


def _build(ctx: CodegenContext) -> Fragment:
    entity_name = ctx.schema.entity_name
    body = [
        *docstring(
            ctx,
            f"Build an in-memory {entity_name} without creating dependencies.\n\n"
            f"{INDENT}Optional FK fields are copied as-is. Raises MissingRequiredFieldError\n"
            f"{INDENT}if a required() field was never set.\n{INDENT}",
        ),
        *required_checks(ctx),
        *assembly_lines(ctx),
    ]
    return Fragment("build", render("def build(self):", body))


def synthesize_builder_api(ctx: CodegenContext) -> list[Fragment]:
    """Fragments for __init__, new, every setter and build, in emission order."""
    fragments = [_init(ctx), _new(ctx)]
    for spec in ctx.fields.foreign_keys:
        fragments.extend(_fk_setters(ctx, spec))
    for spec in ctx.fields.optional_scalars:
        fragments.append(_scalar_setter(ctx, spec))
    for spec in ctx.fields.required_scalars:
        fragments.append(_scalar_setter(ctx, spec))
    fragments.append(_build(ctx))
    return fragments
