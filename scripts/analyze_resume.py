from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from resume_analyzer.ai.factory import get_fallback_chain
from resume_analyzer.ai.fallback import AllBackendsFailed
from resume_analyzer.core.observability import configure_logging
from resume_analyzer.services.analysis_service import AnalysisInputError, ResumeAnalysisService
from resume_analyzer.storage.analysis_store import default_store


def _read_text(path: str | None) -> str | None:
    if not path:
        return None
    return Path(path).read_text(encoding="utf-8")


def main() -> int:
    parser = argparse.ArgumentParser(description="Analyze extracted resume text and print the JSON report.")
    parser.add_argument("--resume", required=True, help="Path to a UTF-8 text file with the resume text")
    parser.add_argument("--job-description", help="Path to a UTF-8 job description (paid tiers only)")
    parser.add_argument("--tier", default="free", help="Subscription tier: free, pro or lifetime")
    parser.add_argument("--user-email", help="Owner of the stored analysis")
    parser.add_argument("--no-save", action="store_true", help="Skip persisting the analysis.")
    parser.add_argument("--cover-letter", action="store_true", help="Generate a cover letter instead (paid tiers).")
    args = parser.parse_args()

    configure_logging()
    resume_text = _read_text(args.resume) or ""
    job_description = _read_text(args.job_description)

    service = ResumeAnalysisService(
        get_fallback_chain(),
        store=None if args.no_save else default_store(),
    )

    try:
        if args.cover_letter:
            print(service.generate_cover_letter(resume_text, job_description or "", tier=args.tier))
            return 0
        result = service.analyze(
            resume_text,
            job_description=job_description,
            tier=args.tier,
            user_email=args.user_email,
            original_name=Path(args.resume).name,
        )
    except AnalysisInputError as exc:
        print(f"error ({exc.code}): {exc}", file=sys.stderr)
        return 1
    except AllBackendsFailed as exc:
        print(f"AI analysis failed.\n{exc}", file=sys.stderr)
        print("Check that GEMINI_API_KEY and OPENAI_API_KEY are valid and have available quota.", file=sys.stderr)
        return 1

    payload = {"id": result.analysis_id, **result.record.to_payload()}
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
