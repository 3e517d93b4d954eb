"""Codegen module - synthesizes and installs factory methods."""

from fkfactory.codegen.builder_api import fk_entity_setter_name, synthesize_builder_api
from fkfactory.codegen.emit import GeneratedUnit, check_bounds, emit, install
from fkfactory.codegen.resolution import CapabilityBound, capability_bounds, synthesize_resolution
from fkfactory.codegen.source import CodegenContext, Fragment

__all__ = [
    "CapabilityBound",
    "CodegenContext",
    "Fragment",
    "GeneratedUnit",
    "capability_bounds",
    "check_bounds",
    "emit",
    "fk_entity_setter_name",
    "install",
    "synthesize_builder_api",
    "synthesize_resolution",
]
