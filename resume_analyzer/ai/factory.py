import logging

from resume_analyzer.ai.config import BackendConfig, load_backend_chain
from resume_analyzer.ai.fallback import FallbackChain
from resume_analyzer.ai.types import AIClient
from resume_analyzer.core.config import Settings, settings

from resume_analyzer.ai.providers.openai_provider import OpenAIProvider
from resume_analyzer.ai.providers.gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)


def build_client(config: BackendConfig) -> AIClient:
    if config.kind == "gemini":
        return GeminiProvider.from_config(config)

    if config.kind == "openai":
        return OpenAIProvider.from_config(config)

    raise ValueError(f"Unsupported backend kind='{config.kind}'")


def build_clients(configs: list[BackendConfig]) -> list[AIClient]:
    return [build_client(config) for config in configs]


def get_fallback_chain(cfg: Settings | None = None) -> FallbackChain:
    cfg = cfg or settings
    chain = FallbackChain(
        build_clients(load_backend_chain(cfg)),
        retry_delay_s=cfg.rate_limit_retry_delay_s,
    )
    logger.info("analysis_chain_ready backends=%s", ",".join(chain.backends) or "none")
    return chain
