"""
Core types for streaming-json.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union


class ConfigError(ValueError):
    """Raised when a configuration override is unknown or invalid."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class QuoteType(str, Enum):
    DOUBLE = "double"
    SINGLE = "single"
    BOTH   = "both"

    @property
    def delimiters(self) -> frozenset[str]:
        """Characters treated as string delimiters for this quote type."""
        if self is QuoteType.DOUBLE:
            return frozenset('"')
        if self is QuoteType.SINGLE:
            return frozenset("'")
        return frozenset("\"'")


@dataclass(frozen=True)
class DummyValues:
    """
    Placeholder table for incomplete structures.

    Only ``null`` is injected today (after a dangling ``:``); the other
    entries are carried so configurations written against the full table
    keep working.
    """
    string:  str = '""'
    number:  int | float = 0
    boolean: bool = False
    null:    Any = None


@dataclass(frozen=True)
class BalancerConfig:
    balance_quotes:      bool = True
    quote_type:          QuoteType = QuoteType.BOTH
    return_parsed_value: bool = False
    dummy_values:        DummyValues = field(default_factory=DummyValues)

    def __post_init__(self):
        if not isinstance(self.quote_type, QuoteType):
            try:
                object.__setattr__(self, "quote_type", QuoteType(self.quote_type))
            except ValueError:
                raise ConfigError(
                    f"Invalid quote_type {self.quote_type!r}; "
                    f"expected one of {[q.value for q in QuoteType]}"
                ) from None
        if isinstance(self.dummy_values, Mapping):
            object.__setattr__(
                self, "dummy_values", _merge_dummy_values(DummyValues(), self.dummy_values)
            )
        elif not isinstance(self.dummy_values, DummyValues):
            raise ConfigError(f"Invalid dummy_values {self.dummy_values!r}")


DEFAULT_CONFIG = BalancerConfig()

ConfigOverrides = Union[BalancerConfig, Mapping[str, Any], None]


def _merge_dummy_values(base: DummyValues, overrides: Mapping[str, Any]) -> DummyValues:
    known = {f.name for f in fields(DummyValues)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown dummy_values key(s): {sorted(unknown)}")
    return replace(base, **overrides)


def merge_config(base: BalancerConfig = DEFAULT_CONFIG, overrides: ConfigOverrides = None) -> BalancerConfig:
    """
    Returns a new config with ``overrides`` merged over ``base``.

    ``overrides`` may be a full ``BalancerConfig`` (which replaces ``base``
    outright), a mapping of field names, or ``None``. A ``dummy_values``
    mapping is merged key by key over the current placeholders.

    Raises:
        ConfigError: On unknown field names or an invalid ``quote_type``.
    """
    if overrides is None:
        return base
    if isinstance(overrides, BalancerConfig):
        return overrides

    known = {f.name for f in fields(BalancerConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown config key(s): {sorted(unknown)}")

    changes = dict(overrides)
    dummy = changes.get("dummy_values")
    if isinstance(dummy, Mapping):
        changes["dummy_values"] = _merge_dummy_values(base.dummy_values, dummy)
    return replace(base, **changes)


# ---------------------------------------------------------------------------
# Synthetic insertions
# ---------------------------------------------------------------------------

class InsertionKind(str, Enum):
    QUOTE   = "quote"
    BRACKET = "bracket"
    VALUE   = "value"


@dataclass(frozen=True)
class Insertion:
    """A token appended by the balancer that did not come from the input."""
    position: int   # offset of the first inserted character
    value:    str
    kind:     InsertionKind

    @property
    def end(self) -> int:
        return self.position + len(self.value)


@dataclass(frozen=True)
class BalanceOutcome:
    text:       str
    insertions: tuple[Insertion, ...] = ()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ParsedValue:
    """Decoded JSON value for the current snapshot of the stream."""
    value: Any
    text:  str
    type: Literal["parsed"] = "parsed"

@dataclass
class BalancedText:
    """Balanced text; ``error`` is set when decoding was requested and failed."""
    text:  str
    error: Optional[str] = None
    type: Literal["text"] = "text"


Result = ParsedValue | BalancedText


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

@dataclass
class SessionState:
    last_balanced_text: str = ""
    last_parsed_value:  Any = None
    pending_insertions: list[Insertion] = field(default_factory=list)
    last_result:        Result = field(default_factory=lambda: BalancedText(text=""))
