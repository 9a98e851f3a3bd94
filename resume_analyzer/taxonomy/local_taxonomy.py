
from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .provider import IndustryKnowledgeBase


class LocalIndustryKnowledgeBase(IndustryKnowledgeBase):
    def __init__(self, tables_path: str | Path | None = None) -> None:
        path = Path(tables_path) if tables_path else Path(__file__).with_name("industries.json")
        keywords, projects = self._load_tables(path)
        self._keywords: Mapping[str, tuple[str, ...]] = MappingProxyType(keywords)
        self._projects: Mapping[str, tuple[str, ...]] = MappingProxyType(projects)

    @staticmethod
    def _load_tables(path: Path) -> tuple[dict[str, tuple[str, ...]], dict[str, tuple[str, ...]]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid industry tables '{path}': expected a top-level mapping.")

        keywords: dict[str, tuple[str, ...]] = {}
        projects: dict[str, tuple[str, ...]] = {}
        for tag, entry in raw.items():
            key = str(tag).strip().lower()
            keywords[key] = _as_str_tuple(entry, "keywords")
            projects[key] = _as_str_tuple(entry, "projects")
        return keywords, projects

    def industries(self) -> frozenset[str]:
        return frozenset(self._keywords)

    def keywords_for(self, industry: str) -> tuple[str, ...]:
        return self._keywords.get(industry, ())

    def projects_for(self, industry: str) -> tuple[str, ...]:
        return self._projects.get(industry, ())


def _as_str_tuple(entry: Any, field: str) -> tuple[str, ...]:
    if not isinstance(entry, dict):
        return ()
    values = entry.get(field)
    if not isinstance(values, list):
        return ()
    return tuple(str(value) for value in values if str(value).strip())
