from .analysis import (
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
    VALID_SUGGESTION_TYPES,
)

__all__ = [
    "AnalysisRecord",
    "AtsCompatibility",
    "AtsScore",
    "ContentQuality",
    "ContentScore",
    "EducationSection",
    "ExperienceSection",
    "FormattingAnalysis",
    "JobMatchDetails",
    "Keywords",
    "SectionAnalysis",
    "SkillsSection",
    "Suggestion",
    "SummarySection",
    "VALID_SUGGESTION_TYPES",
]
