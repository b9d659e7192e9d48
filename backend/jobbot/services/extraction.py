"""
Pull a JSON value out of free-form completion text.

Models sometimes wrap the requested JSON in prose or code fences. The span
taken is greedy, from the first opening bracket to the last closing one in
the whole response. Two separate JSON blocks in one response therefore fail
to parse; that policy is kept as-is for compatibility.
"""
import json
import re
from typing import Any

from jobbot.errors import InvalidJson, NoJsonFound

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


def _extract(text: str, pattern: re.Pattern, kind: str) -> Any:
    match = pattern.search(text or "")
    if not match:
        raise NoJsonFound(f"No JSON {kind} found in model response")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise InvalidJson(f"Invalid JSON {kind} in model response: {exc.msg}") from exc


def extract_json_object(text: str) -> dict:
    return _extract(text, _OBJECT_RE, "object")


def extract_json_array(text: str) -> list:
    return _extract(text, _ARRAY_RE, "array")
