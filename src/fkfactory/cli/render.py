"""fkf render command - print the generated source of a factory."""

from pathlib import Path

import click

from fkfactory.cli.utils import ensure_on_path, load_factory


@click.command()
@click.argument("ref")
@click.option(
    "-p",
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to import modules from",
)
def render_command(ref: str, path: Path) -> None:
    """Print the source generated for a factory.

    REF is MODULE:FACTORY, e.g. tests.factories:NoteFactory.
    """
    ensure_on_path(path)
    factory_cls = load_factory(ref)
    click.echo(factory_cls.__factory_source__, nl=False)  # type: ignore[attr-defined]
