import logging
from dataclasses import dataclass
from typing import Literal

from resume_analyzer.core.analysis_config import get_analysis_value
from resume_analyzer.core.config import Settings

logger = logging.getLogger(__name__)

BackendKind = Literal["gemini", "openai"]


@dataclass(frozen=True)
class BackendConfig:
    kind: BackendKind
    model: str
    api_key: str
    base_url: str | None = None
    timeout_s: float = 60.0
    max_retries: int = 0

    @property
    def name(self) -> str:
        return f"{self.kind}:{self.model}"


def _gemini_backends(cfg: Settings) -> list[BackendConfig]:
    if not cfg.gemini_api_key:
        logger.info("analysis_backend_skipped kind=gemini reason=missing_api_key")
        return []
    return [
        BackendConfig(
            kind="gemini",
            model=model,
            api_key=cfg.gemini_api_key,
            base_url=cfg.gemini_base_url,
            timeout_s=cfg.ai_timeout_s,
            max_retries=cfg.ai_max_retries,
        )
        for model in cfg.gemini_models
    ]


def _openai_backends(cfg: Settings) -> list[BackendConfig]:
    if not cfg.openai_api_key:
        logger.info("analysis_backend_skipped kind=openai reason=missing_api_key")
        return []
    return [
        BackendConfig(
            kind="openai",
            model=cfg.openai_model,
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
            timeout_s=cfg.ai_timeout_s,
            max_retries=cfg.ai_max_retries,
        )
    ]


_BACKEND_BUILDERS = {
    "gemini": _gemini_backends,
    "openai": _openai_backends,
}


def load_backend_chain(cfg: Settings) -> list[BackendConfig]:
    """Ordered backend list: configured kinds in preference order, unconfigured ones skipped."""
    order = get_analysis_value("backends.order", ["gemini", "openai"])
    if not isinstance(order, list):
        order = ["gemini", "openai"]

    chain: list[BackendConfig] = []
    for kind in order:
        builder = _BACKEND_BUILDERS.get(str(kind).strip().lower())
        if builder is None:
            raise ValueError(f"Unsupported backend kind '{kind}' in backends.order")
        chain.extend(builder(cfg))
    return chain
