"""fkf inspect command - show how a factory's fields were classified."""

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from fkfactory.cli.utils import ensure_on_path, load_factory
from fkfactory.codegen.builder_api import fk_entity_setter_name
from fkfactory.config.models import GeneratorConfig
from fkfactory.schema.models import FactorySchema, FieldKind, FieldSpec
from fkfactory.schema.types import type_name


def _setters(spec: FieldSpec, config: GeneratorConfig) -> list[str]:
    if spec.kind is FieldKind.PRIMARY_KEY:
        return []
    setter = f"{config.setter_prefix}{spec.name}"
    if spec.kind is FieldKind.FOREIGN_KEY:
        return [fk_entity_setter_name(spec.name, config), setter]
    return [setter]


def _target(spec: FieldSpec, config: GeneratorConfig) -> str | None:
    if spec.fk is None:
        return None
    target = (
        f"{spec.fk.target_entity.__qualname__}.{spec.fk.target_field} "
        f"via {spec.fk.target_factory_name}"
    )
    if spec.fk.suppress_auto_create:
        target += f" ({config.suppress_marker})"
    return target


def describe_schema(schema: FactorySchema, config: GeneratorConfig) -> dict[str, Any]:
    """JSON-ready description of a parsed factory."""
    return {
        "factory": schema.factory_name,
        "entity": schema.entity_name,
        "fields": [
            {
                "name": spec.name,
                "kind": spec.kind.value,
                "optional": spec.optional,
                "type": type_name(spec.shape.inner),
                "unwrap_required": spec.unwrap_required,
                "setters": _setters(spec, config),
                "target": _target(spec, config),
            }
            for spec in schema.fields
        ],
    }


@click.command()
@click.argument("ref")
@click.option(
    "-p",
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to import modules from",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def inspect_command(ref: str, path: Path, as_json: bool) -> None:
    """Show the categorized fields of a factory.

    REF is MODULE:FACTORY, e.g. tests.factories:NoteFactory.
    """
    ensure_on_path(path)
    factory_cls: Any = load_factory(ref)
    info = describe_schema(factory_cls.__factory_schema__, factory_cls.__factory_config__)

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    table = Table(title=f"{info['factory']} -> {info['entity']}")
    table.add_column("Field")
    table.add_column("Kind")
    table.add_column("Type")
    table.add_column("Setters")
    table.add_column("Target")
    for row in info["fields"]:
        type_text = f"{row['type']} | None" if row["optional"] else row["type"]
        kind = f"{row['kind']} (unwrap)" if row["unwrap_required"] else row["kind"]
        table.add_row(
            row["name"], kind, type_text, ", ".join(row["setters"]), row["target"] or ""
        )
    Console().print(table)
