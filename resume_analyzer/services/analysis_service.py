from __future__ import annotations

import logging
from dataclasses import dataclass

from resume_analyzer.ai.fallback import FallbackChain
from resume_analyzer.analysis.enricher import enrich_analysis
from resume_analyzer.analysis.normalizer import normalize_analysis
from resume_analyzer.analysis.prompt import build_analysis_messages, build_cover_letter_messages
from resume_analyzer.analysis.repair import MalformedResponse, repair_json
from resume_analyzer.core.analysis_config import get_analysis_float, get_analysis_int, get_analysis_value
from resume_analyzer.schemas import AnalysisRecord
from resume_analyzer.storage.analysis_store import AnalysisStore
from resume_analyzer.taxonomy import IndustryKnowledgeBase

logger = logging.getLogger(__name__)


class AnalysisInputError(ValueError):
    def __init__(self, message: str, *, code: str):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class AnalysisResult:
    record: AnalysisRecord
    analysis_id: str | None = None


def is_paid_tier(tier: str | None) -> bool:
    paid = get_analysis_value("tiers.paid", ["pro", "lifetime"])
    if not isinstance(paid, list):
        paid = ["pro", "lifetime"]
    return (tier or "free").strip().lower() in {str(item).lower() for item in paid}


def _max_tokens_by_kind(path: str) -> dict[str, int]:
    raw = get_analysis_value(path, {})
    if not isinstance(raw, dict):
        return {}
    return {str(kind).lower(): int(limit) for kind, limit in raw.items() if isinstance(limit, int)}


def _require_cover_letter(text: str) -> str:
    letter = (text or "").strip()
    if not letter:
        raise MalformedResponse("empty cover letter")
    return letter


class ResumeAnalysisService:
    def __init__(
        self,
        chain: FallbackChain,
        *,
        knowledge_base: IndustryKnowledgeBase | None = None,
        store: AnalysisStore | None = None,
    ):
        self._chain = chain
        self._knowledge_base = knowledge_base
        self._store = store

    def analyze(
        self,
        resume_text: str,
        *,
        job_description: str | None = None,
        tier: str = "free",
        user_email: str | None = None,
        original_name: str | None = None,
    ) -> AnalysisResult:
        min_chars = get_analysis_int("limits.min_resume_chars", 50)
        if len((resume_text or "").strip()) < min_chars:
            raise AnalysisInputError(
                "Could not extract enough text from the resume. "
                "Please ensure it is not scanned/image-based or password-protected.",
                code="resume_too_short",
            )

        # Job matching is a paid feature; free requests ignore the description.
        effective_jd = (job_description or "").strip() if is_paid_tier(tier) else ""

        result = self._chain.run(
            build_analysis_messages(resume_text, effective_jd or None),
            repair_json,
            temperature=get_analysis_float("generation.analysis.temperature", 0.2),
            max_tokens=get_analysis_int("generation.analysis.max_tokens", 3500),
            max_tokens_by_kind=_max_tokens_by_kind("generation.analysis.max_tokens_by_kind"),
        )

        record = normalize_analysis(
            result.value,
            resume_text,
            api_source=result.backend,
            knowledge_base=self._knowledge_base,
        )
        record = enrich_analysis(record, resume_text, knowledge_base=self._knowledge_base)
        if not effective_jd:
            record = record.model_copy(update={"job_match_score": None, "job_match_details": None})

        logger.info(
            "resume_analysis_completed backend=%s industry=%s score=%s job_match=%s",
            result.backend,
            record.industry,
            record.score,
            bool(effective_jd),
        )
        return AnalysisResult(record=record, analysis_id=self._persist(record, user_email, original_name))

    def _persist(self, record: AnalysisRecord, user_email: str | None, original_name: str | None) -> str | None:
        if self._store is None:
            return None
        try:
            return self._store.save(record, user_email=user_email, original_name=original_name)
        except Exception as exc:  # noqa: BLE001 - the analysis is still returned when saving fails
            logger.warning("resume_analysis_save_failed: %s", exc)
            return None

    def generate_cover_letter(
        self,
        resume_text: str,
        job_description: str,
        *,
        tier: str = "free",
        user_name: str | None = None,
    ) -> str:
        if not is_paid_tier(tier):
            raise AnalysisInputError(
                "Cover Letter Generator is a Pro feature. Please upgrade to access.",
                code="paid_tier_required",
            )
        if not (resume_text or "").strip() or not (job_description or "").strip():
            raise AnalysisInputError("Resume text and job description are required", code="missing_input")

        result = self._chain.run(
            build_cover_letter_messages(resume_text, job_description, user_name),
            _require_cover_letter,
            temperature=get_analysis_float("generation.cover_letter.temperature", 0.7),
            max_tokens=get_analysis_int("generation.cover_letter.max_tokens", 1500),
        )
        logger.info("cover_letter_generated backend=%s chars=%s", result.backend, len(result.value))
        return result.value
