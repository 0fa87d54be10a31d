"""
streaming-json: keeps streamed, truncated JSON parseable at every chunk.
"""
from .types import (
    QuoteType, DummyValues, BalancerConfig, DEFAULT_CONFIG, ConfigError, merge_config,
    InsertionKind, Insertion, BalanceOutcome, ParsedValue, BalancedText, Result,
)
from .balancer import balance
from .session import StreamingJsonSession, create_session, balance_once
from .utils import parse_streaming_json, setup_logging

__all__ = [
    "QuoteType", "DummyValues", "BalancerConfig", "DEFAULT_CONFIG", "ConfigError", "merge_config",
    "InsertionKind", "Insertion", "BalanceOutcome", "ParsedValue", "BalancedText", "Result",
    "balance", "balance_once", "create_session", "StreamingJsonSession",
    "parse_streaming_json", "setup_logging",
]
