"""
Stateful wrapper applying the balancer to a growing stream.
Each appended chunk retracts the previous round's synthetic suffix, folds the
chunk in, and rebalances the combined text.
Provides `append_chunk()`, `reset()`, `get_current_data()` and
`update_config()` public accessors.
"""
from __future__ import annotations
import json
import logging
from typing import Any

from .balancer import balance
from .types import (
    DEFAULT_CONFIG,
    BalancedText,
    BalancerConfig,
    ConfigOverrides,
    Insertion,
    ParsedValue,
    Result,
    SessionState,
    merge_config,
)

logger = logging.getLogger(__name__)


def retract_insertions(text: str, insertions: list[Insertion]) -> tuple[str, int]:
    """
    Removes previously appended synthetic tokens from the tail of ``text``.

    Insertions are unwound from the highest position down. Each one is
    removed only if ``text`` still ends with its literal at exactly its
    recorded position, so caller-supplied content is never touched.

    Returns:
        The retracted text and the number of insertions removed.
    """
    removed = 0
    for insertion in sorted(insertions, key=lambda i: i.position, reverse=True):
        if insertion.end == len(text) and text.endswith(insertion.value):
            text = text[: insertion.position]
            removed += 1
    return text, removed


def _build_config(config: ConfigOverrides, overrides: dict[str, Any]) -> BalancerConfig:
    merged = merge_config(DEFAULT_CONFIG, config)
    return merge_config(merged, overrides or None)


class StreamingJsonSession:
    def __init__(self, config: ConfigOverrides = None, **overrides: Any):
        self._config = _build_config(config, overrides)
        self._state = SessionState()

    @property
    def config(self) -> BalancerConfig:
        return self._config

    @property
    def balanced_text(self) -> str:
        return self._state.last_balanced_text

    @property
    def pending_insertions(self) -> tuple[Insertion, ...]:
        return tuple(self._state.pending_insertions)

    def update_config(self, overrides: ConfigOverrides = None, **kwargs: Any) -> None:
        """Merges fields over the current config. Applies from the next append."""
        self._config = merge_config(merge_config(self._config, overrides), kwargs or None)

    def reset(self) -> None:
        """Clears all session state; the next append is treated as a first chunk."""
        self._state = SessionState()

    def get_current_data(self) -> Result:
        """Last computed result, or an empty ``BalancedText`` before any append."""
        return self._state.last_result

    def append_chunk(self, chunk: str) -> Result:
        """
        Folds ``chunk`` into the stream and returns the new snapshot.

        Raises:
            TypeError: If ``chunk`` is not a string.
        """
        if not isinstance(chunk, str):
            raise TypeError(f"chunk must be str, not {type(chunk).__name__}")

        previous = self._state
        retracted = 0
        if not previous.last_balanced_text:
            combined = chunk
        else:
            base, retracted = retract_insertions(
                previous.last_balanced_text, previous.pending_insertions
            )
            combined = base + chunk

        outcome = balance(combined, self._config)
        logger.debug(
            "Appended chunk of %d chars: retracted %d, inserted %d synthetic token(s)",
            len(chunk), retracted, len(outcome.insertions),
        )

        state = SessionState(
            last_balanced_text=outcome.text,
            pending_insertions=list(outcome.insertions),
        )
        state.last_result = self._snapshot(state)
        self._state = state
        return state.last_result

    def _snapshot(self, state: SessionState) -> Result:
        text = state.last_balanced_text
        if not self._config.return_parsed_value:
            return BalancedText(text=text)

        try:
            state.last_parsed_value = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as e:
            # nesting past the decoder's recursion limit fails the same way
            logger.warning("JSON parsing failed, returning balanced string: %s", e)
            logger.warning("Attempted to parse: %s", text)
            return BalancedText(text=text, error=str(e))
        return ParsedValue(value=state.last_parsed_value, text=text)


def create_session(config: ConfigOverrides = None, **overrides: Any) -> StreamingJsonSession:
    """Creates a new session for one stream."""
    return StreamingJsonSession(config, **overrides)


def balance_once(text: str, config: ConfigOverrides = None, **overrides: Any) -> Result:
    """
    One-shot repair of ``text``; same as appending it once to a fresh session.

    Example:
        >>> balance_once('{"items": [1, 2').text
        '{"items": [1, 2]}'
    """
    return StreamingJsonSession(config, **overrides).append_chunk(text)
