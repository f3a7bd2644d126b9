"""
structupdate.formats — Convert between plain data, read-only snapshots and JSON.

Supported conversions:
    • Plain Python objects (dict, list, ...) ↔ read-only snapshots
    • JSON strings ↔ Python objects (state documents and command trees)
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


# ═══════════════════════════════════════════════════════════════════
#  PLAIN OBJECTS ↔ READ-ONLY SNAPSHOTS
# ═══════════════════════════════════════════════════════════════════

def freeze(obj: Any) -> Any:
    """
    Deep-convert a Python object into a read-only snapshot.

    Mapping:
        dict/Mapping → MappingProxyType over a new dict
        list/tuple   → tuple
        anything else is returned as is

    `run` keeps these container kinds on every path it copies, so a frozen
    state stays frozen across updates.
    """
    if isinstance(obj, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(item) for item in obj)
    return obj


def thaw(obj: Any) -> Any:
    """
    Deep-convert a snapshot back to plain, mutable Python objects.

    Inverse of freeze:
        thaw(freeze(obj)) == obj
    for JSON-compatible objects.
    """
    if isinstance(obj, Mapping):
        return {k: thaw(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [thaw(item) for item in obj]
    return obj


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ PYTHON OBJECTS
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str) -> Any:
    """
    Parse a JSON state document or command tree.

    Every command except "invoke" can be written in JSON.
    """
    return json.loads(text)


def to_json(obj: Any, **kwargs) -> str:
    """Serialize a state (frozen or not) to a JSON string."""
    return json.dumps(thaw(obj), **kwargs)
