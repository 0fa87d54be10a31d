"""
Structural balancing of truncated JSON text.

Two passes over the text:
    1. quote balancing  - close a string left open at the end of the text.
    2. bracket balancing - inject a placeholder after a dangling ``:`` and
       close every open ``{`` / ``[`` innermost first.

Only ever appends to the text. Every appended token is reported as an
``Insertion`` so an incremental caller can retract it before the next chunk.
"""
from __future__ import annotations
import json
from typing import Any

from .types import (
    DEFAULT_CONFIG,
    BalanceOutcome,
    BalancerConfig,
    Insertion,
    InsertionKind,
)

_CLOSERS = {"{": "}", "[": "]"}


def render_placeholder(value: Any) -> str:
    """Literal text injected for a configured placeholder value."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    return json.dumps(value)


def balance_quotes(text: str, delimiters: frozenset[str]) -> tuple[str, list[Insertion]]:
    in_string = False
    string_char = ""
    escaped = False

    for char in text:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char in delimiters:
            if not in_string:
                in_string = True
                string_char = char
            elif char == string_char:
                in_string = False
                string_char = ""

    if in_string:
        text += string_char
        return text, [Insertion(len(text) - 1, string_char, InsertionKind.QUOTE)]
    return text, []


def balance_brackets(text: str, delimiters: frozenset[str], placeholder: str = "null") -> tuple[str, list[Insertion]]:
    stack: list[str] = []
    insertions: list[Insertion] = []
    in_string = False
    string_char = ""
    escaped = False
    last_significant = ""

    for char in text:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue

        if char in delimiters:
            if not in_string:
                in_string = True
                string_char = char
            elif char == string_char:
                in_string = False
                string_char = ""

        # an opening quote is skipped here, a closing quote is significant
        if in_string:
            continue

        if char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in ("}", "]"):
            # stray closers are left in place
            if stack and stack[-1] == char:
                stack.pop()

        if not char.isspace():
            last_significant = char

    if stack and last_significant == ":":
        text += placeholder
        insertions.append(Insertion(len(text) - len(placeholder), placeholder, InsertionKind.VALUE))

    while stack:
        closer = stack.pop()
        text += closer
        insertions.append(Insertion(len(text) - 1, closer, InsertionKind.BRACKET))

    return text, insertions


def balance(text: str, config: BalancerConfig = DEFAULT_CONFIG) -> BalanceOutcome:
    """
    Appends the minimal closing tokens needed to make ``text`` structurally
    complete.

    Empty or whitespace-only text is returned unchanged. Never raises and
    never decodes JSON.

    Args:
        text: A possibly truncated JSON fragment.
        config: Balancing options; only ``balance_quotes``, ``quote_type``
            and ``dummy_values.null`` are consulted.

    Returns:
        The balanced text and the insertions made, in creation order.

    Example:
        >>> balance('{"name": "test", "value":').text
        '{"name": "test", "value":null}'
    """
    if not text or text.isspace():
        return BalanceOutcome(text=text)

    delimiters = config.quote_type.delimiters
    insertions: list[Insertion] = []

    if config.balance_quotes:
        text, added = balance_quotes(text, delimiters)
        insertions.extend(added)

    placeholder = render_placeholder(config.dummy_values.null)
    text, added = balance_brackets(text, delimiters, placeholder)
    insertions.extend(added)

    return BalanceOutcome(text=text, insertions=tuple(insertions))
