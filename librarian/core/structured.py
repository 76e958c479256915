"""Narrowing helpers for untyped JSON read from the language repo.

Pipeline state files use the protobuf JSON mapping, so every accessor
accepts the lowerCamelCase key and falls back to the snake_case one.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def _snake(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def lookup(table: Mapping[str, object], key: str) -> object:
    """Get ``key`` (lowerCamelCase) or its snake_case spelling."""
    if key in table:
        return table[key]
    return table.get(_snake(key))


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value as stored. None if missing, not a str, or blank."""
    value = lookup(table, key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(lookup(table, key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(lookup(table, key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of strings. None if the value is present but malformed.

    A missing key yields an empty list (proto3 omits empty repeated fields).
    """
    value = lookup(table, key)
    if value is None:
        return []
    items = as_obj_list(value)
    if items is None or not all(isinstance(item, str) for item in items):
        return None
    return [cast(str, item) for item in items]
