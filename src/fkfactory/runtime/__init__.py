"""Runtime collaborators of generated factory code."""

from fkfactory.runtime.protocols import FactoryCreate, check_capability
from fkfactory.runtime.registry import lookup, register, registered_factories, unregister
from fkfactory.runtime.resolve import create_dependency, resolve_factory
from fkfactory.runtime.sentinels import (
    Sentinel,
    SentinelPolicy,
    default_factory_for,
    has_sentinel,
    is_sentinel,
    policy_for,
    register_sentinel,
    sentinel,
    unregister_sentinel,
)

__all__ = [
    "FactoryCreate",
    "Sentinel",
    "SentinelPolicy",
    "check_capability",
    "create_dependency",
    "default_factory_for",
    "has_sentinel",
    "is_sentinel",
    "lookup",
    "policy_for",
    "register",
    "register_sentinel",
    "registered_factories",
    "resolve_factory",
    "sentinel",
    "unregister",
    "unregister_sentinel",
]
