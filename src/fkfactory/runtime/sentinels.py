"""Sentinel capability: the designated "unset" value of identifier types.

A type supplies its own policy by implementing the ``Sentinel`` protocol
(a ``sentinel()`` classmethod and an ``is_sentinel()`` method). Types that
cannot be changed get one through ``register_sentinel``. Lookup walks the
MRO, so ``class PersonId(int)`` inherits the ``int`` policy unless it
defines its own.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Sentinel(Protocol):
    """Identifier types that know their own unset value."""

    @classmethod
    def sentinel(cls) -> Any: ...

    def is_sentinel(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class SentinelPolicy:
    make: Callable[[], Any]
    test: Callable[[Any], bool]


_policies: dict[type, SentinelPolicy] = {}


def register_sentinel(
    tp: type,
    make: Callable[[], Any],
    test: Callable[[Any], bool] | None = None,
) -> None:
    """Register the sentinel policy for a type.

    Args:
        tp: The identifier type.
        make: Zero-argument callable producing the canonical sentinel.
        test: Predicate reporting whether a value is a sentinel.
              Defaults to equality with ``make()``.
    """
    if test is None:

        def test(value: Any) -> bool:
            return bool(value == make())

    _policies[tp] = SentinelPolicy(make=make, test=test)


def unregister_sentinel(tp: type) -> None:
    _policies.pop(tp, None)


def _self_policy(klass: type, tp: type) -> SentinelPolicy | None:
    if "sentinel" not in klass.__dict__ or "is_sentinel" not in klass.__dict__:
        return None
    # Bind to tp so inherited classmethods build the subclass
    return SentinelPolicy(make=tp.sentinel, test=lambda v: bool(v.is_sentinel()))  # type: ignore[attr-defined]


def policy_for(tp: type) -> SentinelPolicy | None:
    """Most specific policy along the MRO, or None."""
    for klass in tp.__mro__:
        policy = _self_policy(klass, tp) or _policies.get(klass)
        if policy is not None:
            return policy
    return None


def has_sentinel(tp: Any) -> bool:
    return isinstance(tp, type) and policy_for(tp) is not None


def sentinel(tp: type) -> Any:
    """Produce the canonical sentinel of ``tp``."""
    policy = policy_for(tp)
    if policy is None:
        raise TypeError(f"No sentinel policy for {tp.__qualname__}")
    return policy.make()


def is_sentinel(value: Any) -> bool:
    """Whether ``value`` is its type's sentinel."""
    policy = policy_for(type(value))
    if policy is None:
        raise TypeError(f"No sentinel policy for {type(value).__qualname__}")
    return policy.test(value)


def default_factory_for(tp: Any) -> Callable[[], Any] | None:
    """Zero-argument callable producing the default value of ``tp``.

    The sentinel when the type has one, else the type's no-argument
    constructor, else None.
    """
    if not isinstance(tp, type):
        return None
    policy = policy_for(tp)
    if policy is not None:
        return policy.make
    try:
        tp()
    except Exception:
        return None
    return tp


register_sentinel(int, lambda: 0)
# bool subclasses int; without its own policy a bool field would default to 0
register_sentinel(bool, lambda: False)
register_sentinel(str, lambda: "")
register_sentinel(uuid.UUID, lambda: uuid.UUID(int=0))
