"""fkf check command - import modules and validate every factory they declare."""

import importlib
import json
from pathlib import Path

import click

from fkfactory.cli.utils import ensure_on_path
from fkfactory.core.errors import FactoryError
from fkfactory.core.logging import get_logger
from fkfactory.runtime import registry
from fkfactory.runtime.protocols import check_capability

log = get_logger("check")


@click.command()
@click.argument("modules", nargs=-1, required=True)
@click.option(
    "-p",
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to import modules from",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check_command(modules: tuple[str, ...], path: Path, as_json: bool) -> None:
    """Validate the factories declared in MODULES.

    Importing a module generates its factories; this also resolves every
    fk() target given by name. Exits non-zero when anything fails.
    """
    ensure_on_path(path)
    results: list[dict[str, object]] = []
    failed = False

    for module_name in modules:
        try:
            importlib.import_module(module_name)
        except (FactoryError, ImportError) as e:
            failed = True
            log.debug("check_import_failed", module=module_name, error=str(e))
            results.append({"module": module_name, "factory": None, "ok": False, "error": str(e)})
            continue

        for factory_cls in registry.registered_factories(module_name):
            error = _check_named_targets(factory_cls)
            if error is not None:
                log.debug("check_factory_failed", factory=factory_cls.__qualname__, error=error)
            failed = failed or error is not None
            results.append(
                {
                    "module": module_name,
                    "factory": factory_cls.__qualname__,
                    "ok": error is None,
                    "error": error,
                }
            )

    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        for row in results:
            label = row["factory"] or row["module"]
            if row["ok"]:
                click.echo(f"ok    {row['module']}:{label}")
            else:
                click.echo(f"FAIL  {row['module']}:{label}: {row['error']}")

    if failed:
        raise SystemExit(1)


def _check_named_targets(factory_cls: type) -> str | None:
    for bound in getattr(factory_cls, "__factory_bounds__", ()):
        if isinstance(bound.factory, type):
            continue
        try:
            target = registry.lookup(bound.factory)
            check_capability(
                target, bound.entity, owner=factory_cls.__qualname__, field=bound.field
            )
        except FactoryError as e:
            return str(e)
    return None
