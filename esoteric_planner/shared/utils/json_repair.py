"""
LLM JSON Repair

Best-effort parsing of JSON produced by a language model.

Models asked for "ONLY a JSON array" still tend to return:
- Markdown fences:            ```json [ ... ] ```
- Unquoted hashtags:          "hashtags": [#таро, #эзотерика]
- Single-quoted strings:      "hashtags": ['#таро']
- Trailing commas:            {"day": 1,}
- Chatter around the payload: "Вот ваш план: [ ... ] Удачи!"

Parsing Strategy (arrays):
==========================
    raw text
       │  extract outermost [ ... ]          (none → JSONRepairError)
       ▼
    attempt 1: json.loads as-is
       │ fail
       ▼
    attempt 2: clean_json_response()  (fences, hashtag arrays, trailing commas)
       │ fail
       ▼
    attempt 3: aggressive hashtag split + trailing commas
       │ fail
       ▼
    JSONRepairError("Failed to parse AI response as JSON")

Usage:
======
    from esoteric_planner.shared.utils.json_repair import parse_json_array

    days = parse_json_array(completion.content)
"""

import json
import re
from typing import Any

from esoteric_planner.shared.core.logging import get_logger


logger = get_logger("json_repair")

HASHTAGS_ARRAY_RE = re.compile(r'"hashtags"\s*:\s*\[([^\]]*)\]')
HASHTAGS_ARRAY_NONEMPTY_RE = re.compile(r'"hashtags"\s*:\s*\[([^\]]+)\]')
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class JSONRepairError(ValueError):
    """The model output could not be turned into JSON."""


def _split_outside_quotes(content: str) -> list[str]:
    items: list[str] = []
    current = ""
    in_quotes = False

    for char in content:
        if char == '"' and (not current or current[-1] != "\\"):
            in_quotes = not in_quotes
            current += char
        elif char == "," and not in_quotes:
            if current.strip():
                items.append(current.strip())
            current = ""
        else:
            current += char

    if current.strip():
        items.append(current.strip())
    return items


def _quote_item(item: str) -> str:
    item = item.strip()
    if len(item) >= 2 and item.startswith('"') and item.endswith('"'):
        return item
    if len(item) >= 2 and item.startswith("'") and item.endswith("'"):
        return f'"{item[1:-1]}"'
    escaped = item.replace('"', '\\"')
    return f'"{escaped}"'


def fix_hashtags_array(text: str) -> str:
    """
    Quote every item of every "hashtags": [...] array.

    Example:
        '"hashtags": [#таро, \\'#луна\\', "#ok"]'
        → '"hashtags": ["#таро", "#луна", "#ok"]'
    """

    def _fix(match: re.Match) -> str:
        items = [_quote_item(item) for item in _split_outside_quotes(match.group(1))]
        return f'"hashtags": [{", ".join(items)}]'

    return HASHTAGS_ARRAY_RE.sub(_fix, text)


def remove_trailing_commas(text: str) -> str:
    """Drop commas directly before a closing brace or bracket."""
    return TRAILING_COMMA_RE.sub(r"\1", text)


def clean_json_response(text: str) -> str:
    """
    Apply the standard clean-up: strip fences, fix hashtags, trailing commas.
    """
    cleaned = re.sub(r"```json\s*", "", text, flags=re.IGNORECASE)
    cleaned = re.sub(r"```\s*", "", cleaned)
    cleaned = fix_hashtags_array(cleaned)
    return remove_trailing_commas(cleaned)


def _aggressive_hashtag_fix(text: str) -> str:
    def _fix(match: re.Match) -> str:
        parts = []
        for part in match.group(1).split(","):
            part = part.strip()
            if part.startswith("#"):
                part = f'"{part}"'
            elif len(part) >= 2 and part.startswith('"') and part.endswith('"'):
                pass
            elif part and not part.startswith('"'):
                part = f'"{part}"'
            if part:
                parts.append(part)
        return f'"hashtags": [{", ".join(parts)}]'

    return remove_trailing_commas(HASHTAGS_ARRAY_NONEMPTY_RE.sub(_fix, text))


def parse_json_array(text: str) -> list[Any]:
    """
    Extract and parse the JSON array contained in a model response.

    Raises:
        JSONRepairError: If no array is present or every attempt fails
    """
    match = JSON_ARRAY_RE.search(text or "")
    if not match:
        logger.error("No JSON array found in response", sample=(text or "")[:500])
        raise JSONRepairError("Invalid response format from AI")

    raw = match.group(0)

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.info("First parse attempt failed, cleaning JSON")

    try:
        return json.loads(clean_json_response(raw))
    except json.JSONDecodeError:
        logger.info("Second parse attempt failed, fixing hashtag arrays")

    try:
        return json.loads(_aggressive_hashtag_fix(raw))
    except json.JSONDecodeError as e:
        logger.error("All parse attempts failed", error=str(e), sample=raw[:500])
        raise JSONRepairError("Failed to parse AI response as JSON") from e


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Clean a model response and parse the JSON object it contains.

    Raises:
        JSONRepairError: If no object is present or it cannot be parsed
    """
    cleaned = clean_json_response(text or "")
    match = JSON_OBJECT_RE.search(cleaned)
    if not match:
        logger.error("No JSON object found in response", sample=(text or "")[:500])
        raise JSONRepairError("Invalid response format from AI")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse JSON object", error=str(e), sample=match.group(0)[:500])
        raise JSONRepairError("Failed to parse AI response as JSON") from e

    if not isinstance(parsed, dict):
        raise JSONRepairError("Invalid response format from AI")
    return parsed
