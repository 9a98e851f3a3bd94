from __future__ import annotations

import re

NAME_PLACEHOLDER = "there"

_TITLE_CASE_NAME_RE = re.compile(r"[A-Z][a-z]+(?: [A-Z][a-z]+)+")
_UPPER_CASE_NAME_RE = re.compile(r"[A-Z][A-Z\s]+")
_MAX_LINES = 5
_MAX_UPPER_NAME_CHARS = 50


def extract_candidate_name(text: str) -> str:
    """Best-effort candidate name from the top of a resume; first match wins."""
    if not isinstance(text, str):
        return NAME_PLACEHOLDER

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    for line in lines[:_MAX_LINES]:
        if _TITLE_CASE_NAME_RE.fullmatch(line):
            return line
        if (
            _UPPER_CASE_NAME_RE.fullmatch(line)
            and len(line.split(" ")) >= 2
            and len(line) < _MAX_UPPER_NAME_CHARS
        ):
            return line
    return NAME_PLACEHOLDER
