"""CLI utilities."""

import importlib
import sys
from pathlib import Path
from types import ModuleType

import click

from fkfactory.core.errors import FactoryError


def ensure_on_path(path: Path) -> None:
    """Make modules under ``path`` importable."""
    resolved = str(path.resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)


def import_module(name: str) -> ModuleType:
    """Import a module, turning import and schema failures into CLI errors.

    Factories are generated when their module is imported, so a malformed
    declaration surfaces here as a FactoryError.
    """
    try:
        return importlib.import_module(name)
    except FactoryError as e:
        raise click.ClickException(f"{name}: {e}") from e
    except ImportError as e:
        raise click.ClickException(f"Cannot import module '{name}': {e}") from e


def load_factory(ref: str) -> type:
    """Resolve ``package.module:FactoryName`` to a generated factory class.

    Raises:
        click.ClickException: On a malformed reference, a missing attribute,
            or a class that is not a generated factory.
    """
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise click.ClickException(f"Expected MODULE:FACTORY, got '{ref}'")

    target: object = import_module(module_name)
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise click.ClickException(f"'{module_name}' has no attribute '{attr}'") from e

    if not isinstance(target, type) or not hasattr(target, "__factory_schema__"):
        raise click.ClickException(f"'{ref}' is not a generated factory (missing @factory?)")
    return target
