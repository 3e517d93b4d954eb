"""Shape questions about declared field types.

Pure functions: no side effects, and "no match" is a False/None answer,
never an error.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, Union, get_args, get_origin

# Immutable primitives read without duplication; everything else is deep-copied.
COPY_TYPES: frozenset[type] = frozenset({bool, int, float, complex, str})

_NONE_TYPE = type(None)


@dataclass(frozen=True, slots=True)
class FieldShape:
    """Derived shape of one declared field type."""

    declared: Any
    inner: Any
    optional: bool
    is_text: bool
    needs_duplication: bool


def strip_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *meta]`` into ``(T, meta)``."""
    if get_origin(tp) is Annotated:
        base, *meta = get_args(tp)
        return base, tuple(meta)
    return tp, ()


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def collect_annotations(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Like strip_annotated, but also strips ``Annotated`` from union members.

    ``Annotated[int, m] | None`` yields ``(int | None, (m,))``.
    """
    base, meta = strip_annotated(tp)
    if not _is_union(base):
        return base, meta
    members: list[Any] = []
    collected = list(meta)
    for member in get_args(base):
        member, member_meta = strip_annotated(member)
        members.append(member)
        collected.extend(member_meta)
    if len(collected) == len(meta):
        return base, meta
    return Union[tuple(members)], tuple(collected)  # noqa: UP007


def unwrap_newtype(tp: Any) -> Any:
    """The runtime type behind ``NewType`` aliases, possibly nested."""
    while hasattr(tp, "__supertype__"):
        tp = tp.__supertype__
    return tp


def optional_inner(tp: Any) -> Any | None:
    """Return the wrapped type of ``T | None``, or None when tp is not optional.

    ``A | B | None`` unwraps to ``A | B``.
    """
    tp, _ = strip_annotated(tp)
    if not _is_union(tp):
        return None
    args = get_args(tp)
    if _NONE_TYPE not in args:
        return None
    rest = tuple(a for a in args if a is not _NONE_TYPE)
    if len(rest) == 1:
        return rest[0]
    return Union[rest]  # noqa: UP007


def is_optional(tp: Any) -> bool:
    return optional_inner(tp) is not None


def deoptionalize(tp: Any) -> Any:
    inner = optional_inner(tp)
    return strip_annotated(tp)[0] if inner is None else inner


def is_text(tp: Any) -> bool:
    tp = unwrap_newtype(strip_annotated(tp)[0])
    return tp is str


def needs_duplication(tp: Any) -> bool:
    tp = unwrap_newtype(strip_annotated(tp)[0])
    return tp not in COPY_TYPES


def concrete_type(tp: Any) -> type | None:
    """The runtime class behind a (de-optionalized) annotation, if there is one.

    ``list[int]`` -> ``list``; unions and type variables -> None.
    ``NewType`` aliases resolve to their supertype.
    """
    tp = unwrap_newtype(strip_annotated(tp)[0])
    origin = get_origin(tp)
    if origin is None:
        return tp if isinstance(tp, type) else None
    if _is_union(tp):
        return None
    return origin if isinstance(origin, type) else None


def type_name(tp: Any) -> str:
    tp, _ = strip_annotated(tp)
    if get_origin(tp) is None and isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def field_shape(tp: Any) -> FieldShape:
    """Compute the shape of one field occurrence."""
    inner = optional_inner(tp)
    optional = inner is not None
    value_type = inner if optional else strip_annotated(tp)[0]
    return FieldShape(
        declared=tp,
        inner=value_type,
        optional=optional,
        is_text=is_text(value_type),
        needs_duplication=needs_duplication(value_type),
    )
