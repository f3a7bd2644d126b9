"""
structupdate.core — Command-driven immutable updates
====================================================

§1  THE PROBLEM
───────────────

Applications that keep their state in one central structure need to
produce a NEW snapshot of that structure for every change, without
touching the old one.  Deep-copying the whole tree on each change is
correct but wasteful, and it destroys the most useful property a
snapshot can have: unchanged parts stay the *same objects*, so a cheap
`is` check tells a consumer that nothing below that point moved.

structupdate solves this with a small declarative grammar.  The caller
describes WHERE and HOW to change the state with a command tree, and
`run` copies exactly the path that leads to each change.


§2  THE GRAMMAR
───────────────

A command tree is a mapping.  Each node is read in one of two ways:

    (1)  TERMINAL:      {"set": 1}, {"push": x}, {"merge": {...}}, ...
         The node carries at least one registered command token.
         The command is applied to the value at this position.

    (2)  PER-PROPERTY:  {"user": {...}, "items": {...}}
         No command token present.  Each key addresses a child of
         the current value, and each value is itself a command node.

    run(state, {"user": {"name": {"set": "Bob"}},
                "items": {"push": 4}})

Disambiguation is purely SYNTACTIC: a node is terminal iff one of its
own keys equals a command token.  A real data property literally named
"set" or "merge" at that level is therefore read as a command.  This is
an accepted limitation of the grammar, not something `run` works
around.

When a node carries several tokens, only the first one in declaration
order (set, push, unshift, merge, defaults, invoke) is applied.  Such
nodes are unsupported; the ordering only makes the outcome predictable.


§3  STRUCTURAL SHARING
──────────────────────

At every level `run` takes a SHALLOW copy of the current container and
replaces only the children named in the command node:

    source                        result
    ──────                        ──────
    {a: {b: {x: 1}},      ──►     {a: {b: {x: 2}},     new, new, new
     c: [1, 2, 3]}                 c: [1, 2, 3]}       same object

Cost is proportional to the width of the touched containers times the
depth of the touched paths, never to the size of the whole tree.

Container kinds survive the copy: a tuple stays a tuple, a read-only
MappingProxyType stays read-only, a dict subclass is copied with
copy.copy.

Author: structupdate contributors
License: MIT
"""

import copy
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  COMMAND REGISTRY
# ═══════════════════════════════════════════════════════════════════

class Command(Enum):
    """
    The closed set of update commands.

    Member VALUES are the tokens recognised in a command tree.  Declaration
    order is the first-match precedence used by `find_command`.
    """
    SET = "set"            # Replace entirely
    PUSH = "push"          # Append to a sequence
    UNSHIFT = "unshift"    # Prepend to a sequence
    MERGE = "merge"        # Shallow merge, new keys win
    DEFAULTS = "defaults"  # Shallow merge, old keys win
    INVOKE = "invoke"      # Compute new value from old via a factory


COMMAND_TOKENS: tuple[str, ...] = tuple(command.value for command in Command)


def _is_sequence(value: Any) -> bool:
    """Sequences that commands may copy: lists, tuples, not strings."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or _is_sequence(value)


def _sequence_items(value: Any, command: Command) -> list:
    if not _is_sequence(value):
        raise TypeError(
            f"{command.value!r} needs a sequence, got {type(value).__name__}"
        )
    if isinstance(value, list):
        return copy.copy(value)  # keeps list subclasses
    return list(value)


def _mapping_items(value: Any, command: Command) -> dict:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(
            f"{command.value!r} needs a mapping, got {type(value).__name__}"
        )
    if isinstance(value, dict):
        return copy.copy(value)  # keeps dict subclasses (OrderedDict, ...)
    return dict(value)


def _like(original: Any, items: Any) -> Any:
    """Rebuild `items` as the container kind of `original`."""
    if isinstance(original, tuple):
        if hasattr(original, "_fields"):
            # namedtuple; a changed length raises TypeError from _make
            return type(original)._make(items)
        return tuple(items)
    if isinstance(original, MappingProxyType):
        return MappingProxyType(items)
    return items


def apply_command(command: Command, old: Any, operand: Any) -> Any:
    """
    Apply one command to a single value and return the new value.

    `old` is never modified.  Type mismatches surface as TypeError at the
    point the copy is attempted; a factory's own exceptions propagate.
    """
    if command is Command.SET:
        return operand

    if command is Command.PUSH:
        items = _sequence_items(old, command)
        items.append(operand)
        return _like(old, items)

    if command is Command.UNSHIFT:
        items = _sequence_items(old, command)
        items.insert(0, operand)
        return _like(old, items)

    if command is Command.MERGE:
        merged = _mapping_items(old, command)
        merged.update(operand)
        return _like(old, merged)

    if command is Command.DEFAULTS:
        filled = _mapping_items(old, command)
        for key, value in operand.items():
            if key not in filled:
                filled[key] = value
        return _like(old, filled)

    if command is Command.INVOKE:
        return operand(old)

    raise ValueError(f"Unknown command: {command!r}")


def find_command(node: Any) -> Optional[tuple[Command, Any]]:
    """
    Return (command, operand) for the first registered token that is a key
    of `node`, scanning in declaration order.  None if `node` is not a
    mapping or carries no token.
    """
    if not isinstance(node, Mapping):
        return None
    for command in Command:
        if command.value in node:
            return command, node[command.value]
    return None


# ═══════════════════════════════════════════════════════════════════
#  INTERPRETER
# ═══════════════════════════════════════════════════════════════════

def _scratch_copy(value: Any) -> Any:
    """One-level mutable copy of a container, None → empty dict."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return copy.copy(value)  # keeps dict subclasses (OrderedDict, ...)
    if isinstance(value, Mapping):
        return dict(value)
    if _is_sequence(value):
        return list(value)
    raise TypeError(f"Cannot update properties of {type(value).__name__}")


def _child(container: Any, key: Any) -> Any:
    """Current value at `key`, or None when absent."""
    if isinstance(container, list):
        try:
            return container[key]
        except IndexError:
            return None
    return container.get(key)


def _or_empty(value: Any) -> Any:
    """None and falsy scalars (0, "", False) → {}; containers kept, even empty."""
    if value is None or (not _is_container(value) and not value):
        return {}
    return value


def run(source: Any, commands: Mapping) -> Any:
    """
    Apply a command tree to `source` and return the updated copy.

    Neither `source` nor `commands` is modified.  Every subtree of `source`
    that no command reaches is shared by reference with the result.

        run({"a": {"b": 1}, "c": [1]}, {"a": {"b": {"set": 2}}})
            → {"a": {"b": 2}, "c": [1]}     (result["c"] is source["c"])

        run([1, 2], {"push": 3})
            → [1, 2, 3]
    """
    # A token at this level applies to `source` itself, no property traversal
    match = find_command(commands)
    if match is not None:
        command, operand = match
        logger.debug("applying %s at top level", command.name)
        return apply_command(command, source, operand)

    if not isinstance(commands, Mapping):
        raise TypeError(f"Command node must be a mapping, got {type(commands).__name__}")

    # Nothing to assign: scalars come back untouched
    if not commands and not _is_container(source):
        return source

    result = _scratch_copy(source)

    for key, property_command in commands.items():
        current = _child(result, key)
        match = find_command(property_command)
        if match is not None:
            command, operand = match
            logger.debug("applying %s to property %r", command.name, key)
            result[key] = apply_command(command, current, operand)
        else:
            logger.debug("descending into property %r", key)
            result[key] = run(_or_empty(current), property_command)

    return _like(source, result)
