from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SuggestionType = Literal["critical", "important", "minor"]
VALID_SUGGESTION_TYPES: frozenset[str] = frozenset({"critical", "important", "minor"})
MAX_SUGGESTIONS = 10


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AtsScore(_CamelModel):
    keywords: int = Field(default=50, ge=0, le=100)
    format: int = Field(default=55, ge=0, le=100)
    overall: int = Field(default=52, ge=0, le=100)


class ContentScore(_CamelModel):
    grammar: int = Field(default=60, ge=0, le=100)
    clarity: int = Field(default=55, ge=0, le=100)
    action_verbs: int = Field(default=50, ge=0, le=100)


class AtsCompatibility(_CamelModel):
    overall_score: int = Field(default=52, ge=0, le=100)
    formatting_score: int = Field(default=55, ge=0, le=100)
    keyword_score: int = Field(default=50, ge=0, le=100)
    content_score: int = Field(default=55, ge=0, le=100)
    improvement_checklist: list[str] = Field(default_factory=list)


class FormattingAnalysis(_CamelModel):
    has_tables: bool = False
    has_graphics: bool = False
    has_headers: bool = False
    has_footers: bool = False
    uses_standard_sections: bool = True
    uses_bullet_points: bool = True
    font_compatible: bool = True
    has_special_characters: bool = False


class SummarySection(_CamelModel):
    exists: bool = False
    length: str = "medium"
    keyword_rich: bool = False
    concise: bool = False


class ExperienceSection(_CamelModel):
    uses_action_verbs: bool = False
    quantified_achievements: bool = False
    focus_on_accomplishments: bool = False
    proper_formatting: bool = True


class SkillsSection(_CamelModel):
    includes_hard_skills: bool = False
    includes_soft_skills: bool = False
    industry_relevant: bool = False
    properly_categorized: bool = False


class EducationSection(_CamelModel):
    dates_clear: bool = True
    degrees_listed: bool = True
    institutions_named: bool = True
    relevant_certifications: bool = False


class SectionAnalysis(_CamelModel):
    summary: SummarySection = Field(default_factory=SummarySection)
    experience: ExperienceSection = Field(default_factory=ExperienceSection)
    skills: SkillsSection = Field(default_factory=SkillsSection)
    education: EducationSection = Field(default_factory=EducationSection)


class ContentQuality(_CamelModel):
    quantified_achievements: int = Field(default=30, ge=0, le=100)
    action_verb_usage: int = Field(default=50, ge=0, le=100)
    vague_phrases: list[str] = Field(default_factory=list)
    generic_statements: list[str] = Field(default_factory=list)


class Suggestion(_CamelModel):
    type: SuggestionType = "minor"
    title: str = ""
    description: str = ""
    example: str | None = None


class Keywords(_CamelModel):
    found: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    job_specific: list[str] = Field(default_factory=list)


class JobMatchDetails(_CamelModel):
    matching_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    tailoring_tips: list[str] = Field(default_factory=list)


class AnalysisRecord(_CamelModel):
    """Fully defaulted, range-checked resume analysis.

    Every score is an integer in [0, 100] and ``keywords.missing`` holds no
    case-insensitive duplicates, so storage and report layers can consume the
    record without re-validating it.
    """

    candidate_name: str = Field(min_length=1)
    score: int = Field(default=50, ge=0, le=100)
    api_source: str = "AI"
    industry: str = "general"
    experience_level: str = "mid"
    ats_score: AtsScore = Field(default_factory=AtsScore)
    content_score: ContentScore = Field(default_factory=ContentScore)
    ats_compatibility: AtsCompatibility = Field(default_factory=AtsCompatibility)
    formatting_analysis: FormattingAnalysis = Field(default_factory=FormattingAnalysis)
    section_analysis: SectionAnalysis = Field(default_factory=SectionAnalysis)
    content_quality: ContentQuality = Field(default_factory=ContentQuality)
    suggestions: list[Suggestion] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)
    keywords: Keywords = Field(default_factory=Keywords)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    project_ideas: list[str] = Field(default_factory=list)
    trending_technologies: list[str] = Field(default_factory=list)
    job_match_score: int | None = Field(default=None, ge=0, le=100)
    job_match_details: JobMatchDetails | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
