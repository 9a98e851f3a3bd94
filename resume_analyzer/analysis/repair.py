from __future__ import annotations

import json
from typing import Any


class MalformedResponse(ValueError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def repair_json(text: str) -> Any:
    """Parse the JSON object embedded in free-form model output.

    The slice runs from the first ``{`` to the last ``}``, which tolerates
    markdown fences and surrounding prose. Braces inside that prose can still
    produce a bad slice; the parse error is then reported as malformed.
    """
    if not isinstance(text, str):
        raise MalformedResponse("no JSON object found")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise MalformedResponse("no JSON object found")

    try:
        return json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"invalid JSON: {exc}") from exc
