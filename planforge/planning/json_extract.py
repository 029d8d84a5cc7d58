# planforge/planning/json_extract.py
"""JSON extraction from remote reasoning output."""

import json
import re
from typing import Any, Literal

from planforge.errors import MalformedResponseError, MissingFieldError

_FENCE = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE)
_BARE = {
    "object": re.compile(r"\{.*\}", re.DOTALL),
    "array": re.compile(r"\[.*\]", re.DOTALL),
}

Shape = Literal["object", "array"]


def _scan_order(raw_output: str, prefer: Shape | None) -> list[Shape]:
    if prefer is not None:
        return [prefer, "array" if prefer == "object" else "object"]
    first_brace, first_bracket = raw_output.find("{"), raw_output.find("[")
    if first_bracket != -1 and (first_brace == -1 or first_bracket < first_brace):
        return ["array", "object"]
    return ["object", "array"]


def extract_json(raw_output: str, prefer: Shape | None = None) -> Any:
    """
    Extract JSON from model output, handling common formatting variations.

    Tries, in order:
    1. Direct JSON parse (if output is pure JSON)
    2. Code fence extraction (```json ... ```)
    3. Bare object and array scans ({...} and [...]), ``prefer`` first;
       without a preference the bracket that opens first is scanned first

    Raises:
        MalformedResponseError: If no strategy yields valid JSON
    """
    try:
        return json.loads(raw_output.strip())
    except json.JSONDecodeError:
        pass

    fence_match = _FENCE.search(raw_output)
    if fence_match:
        try:
            return json.loads(fence_match.group(1).strip())
        except json.JSONDecodeError:
            pass

    for shape in _scan_order(raw_output, prefer):
        bare_match = _BARE[shape].search(raw_output)
        if bare_match:
            try:
                return json.loads(bare_match.group(0))
            except json.JSONDecodeError:
                continue

    preview = raw_output[:200].replace("\n", "\\n")
    raise MalformedResponseError(
        f"Could not extract valid JSON from output ({len(raw_output)} chars). "
        f"Preview: {preview}"
    )


def extract_json_object(raw_output: str, required_keys: tuple[str, ...] = ()) -> dict[str, Any]:
    """Extract a JSON object and check its required top-level keys.

    Raises:
        MalformedResponseError: If the payload is not an object
        MissingFieldError: If a required key is absent or empty
    """
    data = extract_json(raw_output, prefer="object")
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")
    for key in required_keys:
        if data.get(key) in (None, "", {}):
            raise MissingFieldError(key)
    return data
