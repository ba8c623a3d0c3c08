import json
import re
from typing import Any, Optional

from appbuilder.errors import InvalidJson, NoJsonFound, preview


# Fences are stripped before scanning, so ``` runs inside JSON string values
# (e.g. a fenced snippet in the "code" field) are stripped as well.
CODE_FENCE_RE = re.compile(
    r"```(?:json|html|javascript|js)?[ \t]*\n?([\s\S]*?)```",
    re.IGNORECASE,
)

BOM = "\ufeff"

CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    """
    Replace every ``` fenced block with its inner contents and drop a
    leading byte-order mark.
    """
    cleaned = CODE_FENCE_RE.sub(r"\1", text)
    if cleaned.startswith(BOM):
        cleaned = cleaned[len(BOM):]
    return cleaned


def extract_json_string(text: str) -> Optional[str]:
    """
    Return the first balanced JSON object or array in LLM output.

    Prose before and after the JSON is ignored, as are markdown fences.
    Returns None when there is no opening brace/bracket or when the
    text ends before the opening one is closed.
    """
    if not text or not isinstance(text, str):
        return None

    cleaned = strip_code_fences(text)

    starts = [i for i in (cleaned.find("{"), cleaned.find("[")) if i != -1]
    if not starts:
        return None
    start = min(starts)

    open_char = cleaned[start]
    close_char = CLOSERS[open_char]

    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(cleaned)):
        ch = cleaned[i]

        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return cleaned[start:i + 1]

    return None


def extract_json(text: str) -> Any:
    """
    Extract and parse the first JSON value from LLM output.

    Raises NoJsonFound when nothing balanced is present and InvalidJson
    when the balanced candidate does not parse.
    """
    candidate = extract_json_string(text)
    if candidate is None:
        raise NoJsonFound(raw=preview(text or ""))

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise InvalidJson(details=str(e), candidate=preview(candidate)) from e
