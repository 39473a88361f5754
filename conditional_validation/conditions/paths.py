"""
Dot-path access into nested records.

A path such as ``"data.has_categories"`` addresses nested mapping keys.
When the node at some level is a list or tuple, a decimal segment
indexes into it (``"files.0.name"``). Absence is a normal outcome, never
an error: ``exists`` returns False and ``extract`` returns ``ABSENT``.
"""

from collections.abc import Mapping, Sequence
from typing import Any, List, Tuple


class _Absent:
    """Sentinel type for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

PATH_SEPARATOR = "."


def split_path(path: str) -> List[str]:
    """Split a dot path into its segments. The empty path has none."""
    if not path:
        return []
    return path.split(PATH_SEPARATOR)


def _step(node: Any, segment: str) -> Tuple[bool, Any]:
    if isinstance(node, Mapping):
        if segment in node:
            return True, node[segment]
        return False, ABSENT

    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if segment.isdecimal():
            index = int(segment)
            if index < len(node):
                return True, node[index]
        return False, ABSENT

    return False, ABSENT


def resolve(record: Any, path: str) -> Tuple[bool, Any]:
    """
    Walk ``path`` through ``record``.

    Returns:
        (found, value) where value is ABSENT when found is False
    """
    segments = split_path(path)
    if not segments:
        return False, ABSENT

    node = record
    for segment in segments:
        found, node = _step(node, segment)
        if not found:
            return False, ABSENT
    return True, node


def exists(record: Any, path: str) -> bool:
    """True iff every segment of ``path`` is present, whatever the final value."""
    return resolve(record, path)[0]


def extract(record: Any, path: str) -> Any:
    """Value at ``path``, or ``ABSENT`` when any segment is missing."""
    return resolve(record, path)[1]
