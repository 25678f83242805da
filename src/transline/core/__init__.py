"""Core utilities shared by the localization and runtime layers.

    core <- localization <- runtime

Exports:
    ParsedKey / parse_key / KeyParser: translation key parsing
    deep_merge / get_path / set_path / map_leaves: message tree helpers

Python 3.13+.
"""

from .keys import KeyParser, ParsedKey, parse_key
from .trees import deep_merge, get_path, map_leaves, set_path

__all__ = [
    "KeyParser",
    "ParsedKey",
    "deep_merge",
    "get_path",
    "map_leaves",
    "parse_key",
    "set_path",
]
