"""Deep copying of nested containers and dataclasses.

A dataclass field declared with ``metadata={"deepcopy": "-"}`` is not copied.
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any, TypeVar

__all__ = ["deep_copy", "deep_clone"]

T = TypeVar("T")


def _skipped(field: dataclasses.Field) -> bool:
    return field.metadata.get("deepcopy") == "-"


def _field_default(field: dataclasses.Field) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return dataclasses.MISSING


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _clone(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_clone(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_clone(item) for item in value)
    if isinstance(value, set):
        return {_clone(item) for item in value}
    if _is_dataclass_instance(value):
        result = copy.copy(value)
        for field in dataclasses.fields(value):
            if _skipped(field):
                default = _field_default(field)
                if default is not dataclasses.MISSING:
                    object.__setattr__(result, field.name, default)
                continue
            object.__setattr__(result, field.name, _clone(getattr(value, field.name)))
        return result
    return value


def deep_copy(dst: T, src: T) -> None:
    """Copy the contents of ``src`` into ``dst`` in place, deeply.

    Both must be of the same mutable type: dict, list, set or dataclass.
    Skipped dataclass fields keep the value they have in ``dst``.
    """
    if type(dst) is not type(src):
        raise TypeError(f"DeepCopy: {type(dst).__name__} != {type(src).__name__}")
    if isinstance(src, dict):
        dst.clear()
        dst.update(_clone(src))
    elif isinstance(src, list):
        dst[:] = _clone(src)
    elif isinstance(src, set):
        dst.clear()
        dst.update(_clone(src))
    elif _is_dataclass_instance(src):
        for field in dataclasses.fields(src):
            if not _skipped(field):
                object.__setattr__(dst, field.name, _clone(getattr(src, field.name)))
    else:
        raise TypeError("DeepCopy: pass a mutable container or dataclass")


def deep_clone(value: T) -> T:
    """Return a deep copy of ``value``.

    Skipped dataclass fields are reset to their default when they have one.
    """
    return _clone(value)