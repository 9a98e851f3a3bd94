from __future__ import annotations

from resume_analyzer.analysis.names import extract_candidate_name
from resume_analyzer.core.analysis_config import get_analysis_int
from resume_analyzer.schemas import AnalysisRecord
from resume_analyzer.taxonomy import IndustryKnowledgeBase, get_default_knowledge_base


def _supplemental_keywords(found: list[str], canonical: tuple[str, ...], limit: int) -> list[str]:
    # Substring match: a found "JavaScript" also covers a canonical "Java".
    found_lower = [item.lower() for item in found]
    absent = [
        keyword
        for keyword in canonical
        if not any(keyword.lower() in item for item in found_lower)
    ]
    return absent[:limit]


def enrich_analysis(
    record: AnalysisRecord,
    resume_text: str = "",
    *,
    knowledge_base: IndustryKnowledgeBase | None = None,
) -> AnalysisRecord:
    """Backfill missing keywords and project ideas from the industry tables.

    Returns a new record; lists are only extended. Unknown industries leave
    keywords and project ideas untouched.
    """
    kb = knowledge_base or get_default_knowledge_base()
    update: dict[str, object] = {}

    if not record.candidate_name.strip():
        update["candidate_name"] = extract_candidate_name(resume_text)

    canonical = kb.keywords_for(record.industry)
    if canonical:
        extra = _supplemental_keywords(
            record.keywords.found,
            canonical,
            get_analysis_int("limits.supplemental_keywords", 8),
        )
        existing = {item.lower() for item in record.keywords.missing}
        additions = [keyword for keyword in extra if keyword.lower() not in existing]
        if additions:
            update["keywords"] = record.keywords.model_copy(
                update={"missing": [*record.keywords.missing, *additions]}
            )

    projects = kb.projects_for(record.industry)
    if not record.project_ideas and projects:
        update["project_ideas"] = list(projects[: get_analysis_int("limits.project_ideas", 5)])

    return record.model_copy(update=update, deep=True)
