from __future__ import annotations

import math
from typing import Any, Iterable

from resume_analyzer.analysis.names import extract_candidate_name
from resume_analyzer.schemas import (
    VALID_SUGGESTION_TYPES,
    AnalysisRecord,
    AtsCompatibility,
    AtsScore,
    ContentQuality,
    ContentScore,
    EducationSection,
    ExperienceSection,
    FormattingAnalysis,
    JobMatchDetails,
    Keywords,
    SectionAnalysis,
    SkillsSection,
    Suggestion,
    SummarySection,
)
from resume_analyzer.schemas.analysis import MAX_SUGGESTIONS
from resume_analyzer.taxonomy import IndustryKnowledgeBase, get_default_knowledge_base

DEFAULT_INDUSTRY = "general"
DEFAULT_EXPERIENCE_LEVEL = "mid"
DEFAULT_API_SOURCE = "AI"


def clamp(value: Any, default: int) -> int:
    """Clamp a numeric value to [0, 100]; anything that is not a real number yields ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    # Halves round up.
    return int(math.floor(min(100, max(0, value)) + 0.5))


def clamp_optional(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return clamp(value, 0)


def dedupe_casefold(values: Iterable[str], *, exclude: Iterable[str] = ()) -> list[str]:
    """Keep the first occurrence of each value, ignoring case and anything in ``exclude``."""
    seen = {item.lower() for item in exclude}
    output: list[str] = []
    for value in values:
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        output.append(value)
    return output


class _Loose:
    """Read-only view over an untrusted JSON mapping with typed, defaulting accessors."""

    def __init__(self, value: Any):
        self._data: dict[str, Any] = value if isinstance(value, dict) else {}

    def has_mapping(self, key: str) -> bool:
        return isinstance(self._data.get(key), dict)

    def section(self, key: str) -> _Loose:
        return _Loose(self._data.get(key))

    def number(self, key: str, default: int) -> int:
        return clamp(self._data.get(key), default)

    def optional_number(self, key: str) -> int | None:
        return clamp_optional(self._data.get(key))

    def flag(self, key: str) -> bool:
        return bool(self._data.get(key))

    def flag_default_true(self, key: str) -> bool:
        # Only an explicit false marks non-compliance.
        return self._data.get(key) is not False

    def text(self, key: str, default: str = "") -> str:
        value = self._data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return default

    def optional_text(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def strings(self, key: str) -> list[str]:
        value = self._data.get(key)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str) and item.strip()]

    def records(self, key: str) -> list[_Loose]:
        value = self._data.get(key)
        if not isinstance(value, list):
            return []
        return [_Loose(item) for item in value]


def _normalize_suggestion(item: _Loose) -> Suggestion:
    raw_type = item.optional_text("type")
    return Suggestion(
        type=raw_type if raw_type in VALID_SUGGESTION_TYPES else "minor",
        title=item.optional_text("title") or "",
        description=item.optional_text("description") or "",
        example=item.optional_text("example"),
    )


def _normalize_industry(value: str, knowledge_base: IndustryKnowledgeBase) -> str:
    tag = value.strip().lower()
    if tag in knowledge_base.industries():
        return tag
    return DEFAULT_INDUSTRY


def _normalize_sections(sections: _Loose) -> SectionAnalysis:
    summary = sections.section("summary")
    experience = sections.section("experience")
    skills = sections.section("skills")
    education = sections.section("education")
    return SectionAnalysis(
        summary=SummarySection(
            exists=summary.flag("exists"),
            length=summary.text("length", "medium"),
            keyword_rich=summary.flag("keywordRich"),
            concise=summary.flag("concise"),
        ),
        experience=ExperienceSection(
            uses_action_verbs=experience.flag("usesActionVerbs"),
            quantified_achievements=experience.flag("quantifiedAchievements"),
            focus_on_accomplishments=experience.flag("focusOnAccomplishments"),
            proper_formatting=experience.flag_default_true("properFormatting"),
        ),
        skills=SkillsSection(
            includes_hard_skills=skills.flag("includesHardSkills"),
            includes_soft_skills=skills.flag("includesSoftSkills"),
            industry_relevant=skills.flag("industryRelevant"),
            properly_categorized=skills.flag("properlyCategorized"),
        ),
        education=EducationSection(
            dates_clear=education.flag_default_true("datesClear"),
            degrees_listed=education.flag_default_true("degreesListed"),
            institutions_named=education.flag_default_true("institutionsNamed"),
            relevant_certifications=education.flag("relevantCertifications"),
        ),
    )


def normalize_analysis(
    raw: Any,
    resume_text: str = "",
    *,
    api_source: str | None = None,
    knowledge_base: IndustryKnowledgeBase | None = None,
) -> AnalysisRecord:
    """Turn loosely-typed model output into a complete ``AnalysisRecord``.

    Total over every input: missing or mistyped fields fall back to their
    documented defaults, scores are clamped to [0, 100], suggestions are
    capped and ``keywords.missing`` is deduplicated case-insensitively.
    """
    kb = knowledge_base or get_default_knowledge_base()
    data = _Loose(raw)

    ats = data.section("atsScore")
    content = data.section("contentScore")
    compat = data.section("atsCompatibility")
    formatting = data.section("formattingAnalysis")
    quality = data.section("contentQuality")
    keywords = data.section("keywords")

    found = keywords.strings("found")
    job_details = data.section("jobMatchDetails")

    return AnalysisRecord(
        candidate_name=data.text("candidateName") or extract_candidate_name(resume_text),
        score=data.number("score", 50),
        api_source=api_source or data.text("apiSource", DEFAULT_API_SOURCE),
        industry=_normalize_industry(data.text("industry", DEFAULT_INDUSTRY), kb),
        experience_level=data.text("experienceLevel", DEFAULT_EXPERIENCE_LEVEL),
        ats_score=AtsScore(
            keywords=ats.number("keywords", 50),
            format=ats.number("format", 55),
            overall=ats.number("overall", 52),
        ),
        content_score=ContentScore(
            grammar=content.number("grammar", 60),
            clarity=content.number("clarity", 55),
            action_verbs=content.number("actionVerbs", 50),
        ),
        ats_compatibility=AtsCompatibility(
            overall_score=compat.number("overallScore", 52),
            formatting_score=compat.number("formattingScore", 55),
            keyword_score=compat.number("keywordScore", 50),
            content_score=compat.number("contentScore", 55),
            improvement_checklist=compat.strings("improvementChecklist"),
        ),
        formatting_analysis=FormattingAnalysis(
            has_tables=formatting.flag("hasTables"),
            has_graphics=formatting.flag("hasGraphics"),
            has_headers=formatting.flag("hasHeaders"),
            has_footers=formatting.flag("hasFooters"),
            uses_standard_sections=formatting.flag_default_true("usesStandardSections"),
            uses_bullet_points=formatting.flag_default_true("usesBulletPoints"),
            font_compatible=formatting.flag_default_true("fontCompatible"),
            has_special_characters=formatting.flag("hasSpecialCharacters"),
        ),
        section_analysis=_normalize_sections(data.section("sectionAnalysis")),
        content_quality=ContentQuality(
            quantified_achievements=quality.number("quantifiedAchievements", 30),
            action_verb_usage=quality.number("actionVerbUsage", 50),
            vague_phrases=quality.strings("vaguePhrases"),
            generic_statements=quality.strings("genericStatements"),
        ),
        suggestions=[_normalize_suggestion(item) for item in data.records("suggestions")[:MAX_SUGGESTIONS]],
        keywords=Keywords(
            found=found,
            missing=dedupe_casefold(keywords.strings("missing"), exclude=found),
            job_specific=keywords.strings("jobSpecific"),
        ),
        strengths=data.strings("strengths"),
        weaknesses=data.strings("weaknesses"),
        recommendations=data.strings("recommendations"),
        project_ideas=data.strings("projectIdeas"),
        trending_technologies=data.strings("trendingTechnologies"),
        job_match_score=data.optional_number("jobMatchScore"),
        job_match_details=(
            JobMatchDetails(
                matching_keywords=job_details.strings("matchingKeywords"),
                missing_keywords=job_details.strings("missingKeywords"),
                tailoring_tips=job_details.strings("tailoringTips"),
            )
            if data.has_mapping("jobMatchDetails")
            else None
        ),
    )
