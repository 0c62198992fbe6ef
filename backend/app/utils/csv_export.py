"""
Delimited text export of flat objects (tab separated by default).
"""

from enum import Enum
from typing import Any, Dict, List, Sequence


def _format_value(value: Any, array_separator: str) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        return "[" + array_separator.join(str(item) for item in value) + "]"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def objects_to_csv(
    objects: Sequence[Dict[str, Any]],
    separator: str = "\t",
    array_separator: str = ", ",
) -> str:
    """
    Render dictionaries as delimited text.

    The header is taken from the object with the most keys. Missing keys
    render empty, lists as "[a, b]" and None as "null".
    """
    keys: List[str] = []
    for obj in objects:
        if len(keys) < len(obj):
            keys = list(obj.keys())

    lines = [separator.join(keys)]
    for obj in objects:
        columns = []
        for key in keys:
            if key not in obj:
                columns.append("")
            else:
                columns.append(_format_value(obj[key], array_separator))
        lines.append(separator.join(columns))
    return "\n".join(lines) + "\n"
