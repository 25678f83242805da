"""Helpers for nested message trees.

Message trees are plain dicts whose leaves are strings (or other scalars
read from YAML). These helpers implement the three operations the loader
and translator need: deep merge of layered sources, dot-path lookup and
assignment, and leaf-wise transformation.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from transline.constants import ITEM_SEPARATOR

__all__ = [
    "deep_merge",
    "get_path",
    "map_leaves",
    "set_path",
]


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` on top of ``base`` recursively.

    Mappings are merged key by key. Anything else (strings, numbers, lists,
    or a scalar meeting a mapping) is replaced wholesale by the override.
    Neither input is mutated.

    Args:
        base: Accumulated tree
        override: Tree from a later (higher priority) layer

    Returns:
        New merged tree

    Example:
        >>> deep_merge({"a": {"x": "1", "y": "2"}}, {"a": {"y": "3"}})
        {'a': {'x': '1', 'y': '3'}}
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def get_path(tree: Mapping[str, Any], path: str | None) -> Any:
    """Look up a dot-separated path in a tree.

    A literal key containing dots wins over walking the segments, so flat
    entries like ``{"a.b": "..."}`` stay addressable.

    Args:
        tree: Tree to search
        path: Dot-separated path; None addresses the whole tree

    Returns:
        The value found, or None when any segment is missing
    """
    if path is None:
        return tree
    if path in tree:
        return tree[path]

    current: Any = tree
    for segment in path.split(ITEM_SEPARATOR):
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]
    return current


def set_path(tree: dict[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` at a dot-separated path, creating dicts as needed.

    Intermediate scalars are replaced by dicts, matching how a later layer
    replaces a scalar with a structure during a deep merge.
    """
    segments = path.split(ITEM_SEPARATOR)
    current = tree
    for segment in segments[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child
    current[segments[-1]] = value


def map_leaves(tree: Any, func: Callable[[str], str]) -> Any:
    """Return a copy of ``tree`` with ``func`` applied to every string leaf.

    Lists are traversed; non-string scalars are returned unchanged.
    """
    if isinstance(tree, str):
        return func(tree)
    if isinstance(tree, Mapping):
        return {key: map_leaves(value, func) for key, value in tree.items()}
    if isinstance(tree, list):
        return [map_leaves(value, func) for value in tree]
    return tree
