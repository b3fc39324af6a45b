"""Post-processing of raw provider text."""

import json
import re
from typing import Any

_OPENING_FENCE = re.compile(r"^\s*```[\w+-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\r?\n?[ \t]*```\s*$")
_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around ``text``.

    Only a fence at the very start (optionally language-tagged) and one at the
    very end are removed. Clean text is returned unchanged, so the function is
    idempotent.
    """
    text = _OPENING_FENCE.sub("", text, count=1)
    return _CLOSING_FENCE.sub("", text, count=1)


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Parse a JSON object out of model output, tolerating surrounding noise.

    Tries, in order: the fence-stripped text as-is, the first complete object
    starting at the first ``{`` (ignores trailing chatter), and the widest
    ``{...}`` span. Returns None when nothing parses to an object.
    """
    cleaned = strip_code_fences(text).strip()

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    start = cleaned.find("{")
    if start != -1:
        try:
            parsed, _ = json.JSONDecoder().raw_decode(cleaned, start)
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    match = _GREEDY_OBJECT.search(cleaned)
    if match:
        try:
            parsed = json.loads(match.group(0))
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    return None
