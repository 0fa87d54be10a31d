import json
from json_repair import repair_json

from ..balancer import balance

def parse_streaming_json(partial_json: str | None) -> dict:
    """
    Attempts to parse potentially incomplete JSON during streaming.
    Always returns a valid object, even if the JSON is incomplete.

    The fragment is balanced first, so a truncated object decodes to its
    completed prefix. Output the strict decoder still rejects (trailing
    commas, single-quoted strings) goes through json_repair.
    """
    if not partial_json or not partial_json.strip():
        return {}

    balanced = balance(partial_json).text
    try:
        parsed = json.loads(balanced)
    except (json.JSONDecodeError, RecursionError):
        # Try repairing
        try:
            parsed = repair_json(balanced, return_objects=True)
        except Exception:
            return {}
    return parsed if isinstance(parsed, dict) else {}
