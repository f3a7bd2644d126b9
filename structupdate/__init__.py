"""
Immutable updates driven by command trees
=========================================

Produce a new version of a nested structure without touching the old one.

    run({"a": {"b": 1}}, {"a": {"b": {"set": 2}}})   → {"a": {"b": 2}}
    run({"xs": [1, 2]}, {"xs": {"push": 3}})         → {"xs": [1, 2, 3]}
    set({"a": {"b": 1}}, ["a", "b"], 2)              → {"a": {"b": 2}}

Only the touched paths are copied.  Everything else in the result is the
very same object as in the source, so unchanged subtrees can be detected
with a plain identity check.

Commands:
  • set       replace a value
  • push      append to a sequence
  • unshift   prepend to a sequence
  • merge     shallow merge into a mapping (new keys win)
  • defaults  shallow merge into a mapping (existing keys win)
  • invoke    compute the new value from the old one
"""

from structupdate.core import (
    # Registry
    Command,
    COMMAND_TOKENS,
    apply_command,
    find_command,
    # Interpreter
    run,
)
from structupdate.shortcuts import (
    normalize_path, build_path_command,
    set, push, unshift, merge, defaults, invoke,
)
from structupdate.formats import freeze, thaw, from_json, to_json

__version__ = "0.1.0"
# `set` is importable by name but kept out of `import *`, it would shadow the builtin
__all__ = [
    "Command", "COMMAND_TOKENS", "apply_command", "find_command",
    "run",
    "normalize_path", "build_path_command",
    "push", "unshift", "merge", "defaults", "invoke",
    "freeze", "thaw", "from_json", "to_json",
]
