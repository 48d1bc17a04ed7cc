"""Dotted-path access to the nested answers mapping.

A question named ``"foo.bar.q1"`` stores its answer at
``answers["foo"]["bar"]["q1"]``; intermediate mappings are created on write
and existing siblings are left in place.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

_MISSING = object()


def _split(path: str) -> list[str]:
    return path.split(".")


def get_answer(answers: MutableMapping[str, Any], path: str, default: Any = None) -> Any:
    node: Any = answers
    for key in _split(path):
        if not isinstance(node, MutableMapping) or key not in node:
            return default
        node = node[key]
    return node


def has_answer(answers: MutableMapping[str, Any], path: str) -> bool:
    return get_answer(answers, path, _MISSING) is not _MISSING


def set_answer(answers: MutableMapping[str, Any], path: str, value: Any) -> None:
    keys = _split(path)
    node = answers
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, MutableMapping):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value
