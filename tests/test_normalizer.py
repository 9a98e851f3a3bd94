import math
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.analysis.normalizer import clamp, dedupe_casefold, normalize_analysis  # noqa: E402
from resume_analyzer.analysis.repair import repair_json  # noqa: E402
from resume_analyzer.schemas import AnalysisRecord, Suggestion  # noqa: E402

RESUME_TEXT = "Jane Doe\nBackend Engineer\nBuilt payment APIs in Python and SQL for 5 years."


def _full_payload() -> dict:
    return {
        "candidateName": "Jane Doe",
        "score": 78.4,
        "industry": "Software",
        "experienceLevel": "senior",
        "atsScore": {"keywords": 70, "format": 75, "overall": 72},
        "contentScore": {"grammar": 80, "clarity": 70, "actionVerbs": 65},
        "atsCompatibility": {
            "overallScore": 72,
            "formattingScore": 75,
            "keywordScore": 70,
            "contentScore": 70,
            "improvementChecklist": ["Use standard section headers"],
        },
        "formattingAnalysis": {"hasTables": True, "usesBulletPoints": False},
        "sectionAnalysis": {
            "summary": {"exists": True, "length": "short", "keywordRich": True, "concise": True},
            "experience": {"usesActionVerbs": True, "properFormatting": False},
            "skills": {"includesHardSkills": True},
            "education": {"datesClear": False, "relevantCertifications": True},
        },
        "contentQuality": {
            "quantifiedAchievements": 30,
            "actionVerbUsage": 60,
            "vaguePhrases": ["responsible for"],
            "genericStatements": ["team player"],
        },
        "suggestions": [
            {"type": "critical", "title": "Add numbers", "description": "Quantify impact.", "example": "Cut latency 30%"},
            {"type": "important", "title": "Add summary", "description": "Lead with a summary."},
        ],
        "keywords": {"found": ["Python", "SQL"], "missing": ["Docker", "AWS"], "jobSpecific": ["Payments"]},
        "strengths": ["Clear skills section"],
        "weaknesses": ["No summary"],
        "recommendations": ["Add measurable results"],
        "projectIdeas": ["Open source contribution"],
        "trendingTechnologies": ["Kubernetes"],
        "jobMatchScore": 81,
        "jobMatchDetails": {"matchingKeywords": ["Python"], "missingKeywords": ["Terraform"], "tailoringTips": []},
    }


class ClampTests(unittest.TestCase):
    def test_clamps_to_range(self):
        self.assertEqual(clamp(150, 50), 100)
        self.assertEqual(clamp(-5, 50), 0)
        self.assertEqual(clamp(42, 50), 42)

    def test_non_numbers_use_default(self):
        self.assertEqual(clamp(math.nan, 55), 55)
        self.assertEqual(clamp(None, 55), 55)
        self.assertEqual(clamp("80", 55), 55)
        self.assertEqual(clamp(True, 55), 55)
        self.assertEqual(clamp([80], 55), 55)

    def test_floats_are_rounded_and_infinity_is_bounded(self):
        self.assertEqual(clamp(72.6, 50), 73)
        self.assertEqual(clamp(math.inf, 50), 100)
        self.assertEqual(clamp(-math.inf, 50), 0)
        self.assertEqual(clamp(10**400, 50), 100)

    def test_halves_round_up(self):
        self.assertEqual(clamp(72.5, 0), 73)
        self.assertEqual(clamp(73.5, 0), 74)
        self.assertEqual(clamp(0.5, 50), 1)
        self.assertEqual(clamp(99.5, 50), 100)

    def test_result_always_in_range(self):
        for value in (-1e9, -1, 0, 0.4, 50, 99.5, 100, 101, 1e9):
            result = clamp(value, 50)
            self.assertGreaterEqual(result, 0)
            self.assertLessEqual(result, 100)


class DedupeTests(unittest.TestCase):
    def test_keeps_first_occurrence_case_insensitively(self):
        self.assertEqual(dedupe_casefold(["Docker", "docker", "AWS"], exclude=["aws"]), ["Docker"])


class NormalizeAnalysisTests(unittest.TestCase):
    def test_degenerate_inputs_yield_documented_defaults(self):
        for raw in (None, {}, [], "not json", 42, {"atsScore": None, "keywords": "Python"}):
            record = normalize_analysis(raw, "")
            self.assertEqual(record.candidate_name, "there")
            self.assertEqual(record.score, 50)
            self.assertEqual(record.industry, "general")
            self.assertEqual(record.experience_level, "mid")
            self.assertEqual((record.ats_score.keywords, record.ats_score.format, record.ats_score.overall), (50, 55, 52))
            self.assertEqual(
                (record.content_score.grammar, record.content_score.clarity, record.content_score.action_verbs),
                (60, 55, 50),
            )
            self.assertEqual(record.ats_compatibility.overall_score, 52)
            self.assertEqual(record.ats_compatibility.formatting_score, 55)
            self.assertEqual(record.ats_compatibility.keyword_score, 50)
            self.assertEqual(record.ats_compatibility.content_score, 55)
            self.assertEqual(record.content_quality.quantified_achievements, 30)
            self.assertEqual(record.content_quality.action_verb_usage, 50)
            self.assertEqual(record.suggestions, [])
            self.assertEqual(record.keywords.found, [])
            self.assertIsNone(record.job_match_score)
            self.assertIsNone(record.job_match_details)

    def test_boolean_default_polarity(self):
        record = normalize_analysis({}, RESUME_TEXT)
        formatting = record.formatting_analysis
        self.assertFalse(formatting.has_tables)
        self.assertFalse(formatting.has_graphics)
        self.assertFalse(formatting.has_headers)
        self.assertFalse(formatting.has_footers)
        self.assertFalse(formatting.has_special_characters)
        self.assertTrue(formatting.uses_standard_sections)
        self.assertTrue(formatting.uses_bullet_points)
        self.assertTrue(formatting.font_compatible)

        sections = record.section_analysis
        self.assertFalse(sections.summary.exists)
        self.assertEqual(sections.summary.length, "medium")
        self.assertTrue(sections.experience.proper_formatting)
        self.assertFalse(sections.skills.properly_categorized)
        self.assertTrue(sections.education.dates_clear)
        self.assertTrue(sections.education.degrees_listed)
        self.assertTrue(sections.education.institutions_named)
        self.assertFalse(sections.education.relevant_certifications)

    def test_only_explicit_false_marks_non_compliance(self):
        record = normalize_analysis(
            {"formattingAnalysis": {"fontCompatible": 0, "usesStandardSections": None, "usesBulletPoints": False}},
            RESUME_TEXT,
        )
        self.assertTrue(record.formatting_analysis.font_compatible)
        self.assertTrue(record.formatting_analysis.uses_standard_sections)
        self.assertFalse(record.formatting_analysis.uses_bullet_points)

    def test_full_payload_is_carried_over(self):
        record = normalize_analysis(_full_payload(), RESUME_TEXT)
        self.assertEqual(record.candidate_name, "Jane Doe")
        self.assertEqual(record.score, 78)
        self.assertEqual(record.industry, "software")
        self.assertEqual(record.experience_level, "senior")
        self.assertTrue(record.formatting_analysis.has_tables)
        self.assertFalse(record.formatting_analysis.uses_bullet_points)
        self.assertEqual(record.section_analysis.summary.length, "short")
        self.assertFalse(record.section_analysis.experience.proper_formatting)
        self.assertFalse(record.section_analysis.education.dates_clear)
        self.assertEqual(record.suggestions[0].example, "Cut latency 30%")
        self.assertIsNone(record.suggestions[1].example)
        self.assertEqual(record.keywords.job_specific, ["Payments"])
        self.assertEqual(record.job_match_score, 81)
        self.assertEqual(record.job_match_details.missing_keywords, ["Terraform"])

    def test_suggestions_are_capped_from_the_head(self):
        raw = {"suggestions": [{"type": "important", "title": f"s{i}"} for i in range(14)]}
        record = normalize_analysis(raw, RESUME_TEXT)
        self.assertEqual(len(record.suggestions), 10)
        self.assertEqual([item.title for item in record.suggestions], [f"s{i}" for i in range(10)])

    def test_unknown_suggestion_type_becomes_minor(self):
        raw = {"suggestions": [{"type": "urgent", "title": "T"}, {"title": "no type"}, "junk", {"type": "CRITICAL"}]}
        record = normalize_analysis(raw, RESUME_TEXT)
        self.assertEqual([item.type for item in record.suggestions], ["minor", "minor", "minor", "minor"])
        self.assertEqual(record.suggestions[2].model_dump(), Suggestion().model_dump())

    def test_missing_keywords_are_deduplicated(self):
        raw = {"keywords": {"found": ["Python"], "missing": ["docker", "Docker", "python", "AWS", 7]}}
        record = normalize_analysis(raw, RESUME_TEXT)
        self.assertEqual(record.keywords.missing, ["docker", "AWS"])

    def test_unknown_industry_falls_back_to_general(self):
        self.assertEqual(normalize_analysis({"industry": "Astronomy"}, RESUME_TEXT).industry, "general")
        self.assertEqual(normalize_analysis({"industry": " DATA "}, RESUME_TEXT).industry, "data")

    def test_candidate_name_falls_back_to_resume_text(self):
        self.assertEqual(normalize_analysis({"candidateName": "  "}, RESUME_TEXT).candidate_name, "Jane Doe")

    def test_string_lists_drop_non_strings(self):
        record = normalize_analysis({"strengths": ["Clear", 3, None, "", "Concise"], "weaknesses": "none"}, RESUME_TEXT)
        self.assertEqual(record.strengths, ["Clear", "Concise"])
        self.assertEqual(record.weaknesses, [])

    def test_job_match_score_is_clamped_or_absent(self):
        self.assertEqual(normalize_analysis({"jobMatchScore": 130}, RESUME_TEXT).job_match_score, 100)
        self.assertIsNone(normalize_analysis({"jobMatchScore": "high"}, RESUME_TEXT).job_match_score)
        self.assertIsNone(normalize_analysis({"jobMatchDetails": ["x"]}, RESUME_TEXT).job_match_details)

    def test_api_source_argument_wins(self):
        self.assertEqual(normalize_analysis({"apiSource": "Model"}, RESUME_TEXT).api_source, "Model")
        self.assertEqual(normalize_analysis({}, RESUME_TEXT, api_source="gemini:x").api_source, "gemini:x")
        self.assertEqual(normalize_analysis({}, RESUME_TEXT).api_source, "AI")

    def test_normalization_is_idempotent(self):
        for raw in (_full_payload(), {}, {"score": 150, "suggestions": [{"type": "bad"}]}):
            once = normalize_analysis(raw, RESUME_TEXT)
            twice = normalize_analysis(once.to_payload(), RESUME_TEXT)
            self.assertEqual(once.to_payload(), twice.to_payload())

    def test_model_output_end_to_end(self):
        raw = '```json\n{"score":150,"suggestions":[{"type":"bad"}]}\n```'
        record = normalize_analysis(repair_json(raw), "")
        self.assertEqual(record.score, 100)
        self.assertEqual(
            record.to_payload()["suggestions"],
            [{"type": "minor", "title": "", "description": "", "example": None}],
        )
        expected = AnalysisRecord(candidate_name="there", score=100, suggestions=[Suggestion()])
        self.assertEqual(record.to_payload(), expected.to_payload())


if __name__ == "__main__":
    unittest.main()
