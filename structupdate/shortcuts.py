"""
structupdate.shortcuts — One-command updates along a property path.

Each shortcut wraps a single command under a property path and forwards
to `run`:

    set(state, ["user", "name"], "Bob")
        ≡ run(state, {"user": {"name": {"set": "Bob"}}})

    push(state, "items", 4)
        ≡ run(state, {"items": {"push": 4}})

    merge(state, None, {"ready": True})
        ≡ run(state, {"merge": {"ready": True}})

A path is one of:
    • absent/empty (None, "", (), [])  → operate on `state` itself
    • a single key ("user", 0)          → shorthand for a one-key path
    • a list or tuple of keys           → nested property path
"""

from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Any, Optional, Union

from .core import Command, run

PathLike = Optional[Union[Hashable, Sequence[Hashable]]]

__all__ = [
    "normalize_path", "build_path_command",
    "set", "push", "unshift", "merge", "defaults", "invoke",
]


def normalize_path(path: PathLike) -> tuple:
    """Resolve the accepted path spellings to a tuple of keys."""
    if path is None or path == "":
        return ()
    if isinstance(path, (list, tuple)):
        return tuple(path)
    return (path,)


def build_path_command(path: PathLike, command: Any) -> Any:
    """
    Nest `command` under each key of `path`.

    build_path_command(["a", "b"], {"set": 1}) → {"a": {"b": {"set": 1}}}
    build_path_command(None, {"set": 1})       → {"set": 1}
    """
    result = command
    for key in reversed(normalize_path(path)):
        result = {key: result}
    return result


def _shortcut(command: Command, source: Any, path: PathLike, operand: Any) -> Any:
    return run(source, build_path_command(path, {command.value: operand}))


def set(source: Any, path: PathLike, value: Any) -> Any:
    """Replace the value at `path`."""
    return _shortcut(Command.SET, source, path, value)


def push(source: Any, path: PathLike, value: Any) -> Any:
    """Append `value` to the sequence at `path`."""
    return _shortcut(Command.PUSH, source, path, value)


def unshift(source: Any, path: PathLike, value: Any) -> Any:
    """Prepend `value` to the sequence at `path`."""
    return _shortcut(Command.UNSHIFT, source, path, value)


def merge(source: Any, path: PathLike, value: Mapping) -> Any:
    """Merge `value` into the mapping at `path`; keys from `value` win."""
    return _shortcut(Command.MERGE, source, path, value)


def defaults(source: Any, path: PathLike, value: Mapping) -> Any:
    """Fill keys missing from the mapping at `path` with those of `value`."""
    return _shortcut(Command.DEFAULTS, source, path, value)


def invoke(source: Any, path: PathLike, factory: Callable[[Any], Any]) -> Any:
    """Replace the value at `path` with `factory(old_value)`."""
    return _shortcut(Command.INVOKE, source, path, factory)
