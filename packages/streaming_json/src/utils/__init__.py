from .partial_json import parse_streaming_json
from .logging_utils import setup_logging

__all__ = [
    "parse_streaming_json",
    "setup_logging",
]
