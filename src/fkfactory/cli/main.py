"""fkfactory CLI - fkf command."""

import click

from fkfactory.cli.check import check_command
from fkfactory.cli.inspect import inspect_command
from fkfactory.cli.render import render_command
from fkfactory.config.loader import load_config
from fkfactory.core.errors import ConfigError
from fkfactory.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="fkf")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """fkfactory - inspect generated test-data factories."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)


cli.add_command(render_command, name="render")
cli.add_command(inspect_command, name="inspect")
cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
