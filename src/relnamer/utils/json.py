"""JSON serialization helpers for relnamer.

This module provides helpers for serializing objects to JSON, especially for
types not natively supported by the standard library.
- Used by the CLI ``--json`` output, which mixes pydantic dumps with plain
  Python containers (tag-id sets, paths).
- Sets are emitted as sorted lists so that the output is deterministic.
- Path objects are serialized as strings for compatibility across OSes.

Design:
- Custom encoder handles set/frozenset, Path and Enum members.
- Extendable for additional types as needed.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Self


class ReleaseEncoder(json.JSONEncoder):
    """Custom JSON encoder for relnamer output."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (may be a set, Path, Enum or other type)

        Returns:
            JSON-serializable representation of the object.
            - set/frozenset: sorted list (stable output for tag ids)
            - Path: string (cross-platform compatibility)
            - Enum: its value
            - Otherwise: falls back to base class
        """
        if isinstance(obj, (set, frozenset)):
            return sorted(obj, key=str)
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        # Let the base class default method handle it or raise TypeError
        return super().default(obj)


def dumps(data: Any, *, indent: int | None = 2) -> str:  # noqa: ANN401
    """Serialize *data* with :class:`ReleaseEncoder`."""
    return json.dumps(data, cls=ReleaseEncoder, indent=indent, ensure_ascii=False)
