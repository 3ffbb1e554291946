"""Ranks host commands against a typed query when picking a command for a gesture."""

from __future__ import annotations
from collections.abc import Sequence
from typing import List

from config.settings import SUGGESTION_EMPTY_QUERY_LIMIT, SUGGESTION_LIMIT

from .dispatcher import Command


def fuzzy_match(text: str, pattern: str) -> bool:
    """True if every character of `pattern` appears in `text` in order."""
    remaining = iter(text)
    return all(ch in remaining for ch in pattern)


def suggest_commands(
    commands: Sequence[Command],
    query: str,
    limit: int = SUGGESTION_LIMIT,
) -> List[Command]:
    """
    Orders matches as: exact, prefix, substring, fuzzy subsequence.
    An empty query lists commands sorted by name.
    """
    ordered = sorted(commands, key=lambda c: (c.name or c.id).lower())
    if not query or not query.strip():
        return ordered[:SUGGESTION_EMPTY_QUERY_LIMIT]

    q = query.lower()
    exact: List[Command] = []
    prefix: List[Command] = []
    contains: List[Command] = []
    fuzzy: List[Command] = []

    for command in ordered:
        name = (command.name or command.id).lower()
        cid = command.id.lower()
        if q in (name, cid):
            exact.append(command)
        elif name.startswith(q) or cid.startswith(q):
            prefix.append(command)
        elif q in name or q in cid:
            contains.append(command)
        elif fuzzy_match(name, q) or fuzzy_match(cid, q):
            fuzzy.append(command)

    return (exact + prefix + contains + fuzzy)[:limit]
