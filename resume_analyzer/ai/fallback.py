from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from resume_analyzer.ai.types import AIClient, ChatMessage, ProviderError, RateLimitedError
from resume_analyzer.analysis.repair import MalformedResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BackendFailure:
    backend: str
    reason: str


@dataclass(frozen=True)
class ChainResult(Generic[T]):
    value: T
    backend: str


class AllBackendsFailed(RuntimeError):
    def __init__(self, failures: Sequence[BackendFailure]):
        self.failures = list(failures)
        if not self.failures:
            message = "No AI backend configured. Set GEMINI_API_KEY or OPENAI_API_KEY."
        else:
            lines = [f"- {failure.backend}: {failure.reason}" for failure in self.failures]
            message = "All AI backends failed.\n" + "\n".join(lines)
        super().__init__(message)

    @property
    def backends_tried(self) -> list[str]:
        return [failure.backend for failure in self.failures]


class FallbackChain:
    """Try each backend in order until one returns output the parser accepts.

    One call is in flight at a time. A rate-limited backend is retried once
    after a fixed delay before the chain moves on.
    """

    def __init__(
        self,
        clients: Sequence[AIClient],
        *,
        retry_delay_s: float = 10.0,
        sleep: Callable[[float], Any] = time.sleep,
    ):
        self._clients = list(clients)
        self._retry_delay_s = retry_delay_s
        self._sleep = sleep

    @property
    def backends(self) -> list[str]:
        return [client.name for client in self._clients]

    def _generate(self, client: AIClient, messages: Sequence[ChatMessage], **options: Any) -> str:
        try:
            return client.generate(messages, **options)
        except RateLimitedError as exc:
            logger.warning(
                "analysis_backend_rate_limited backend=%s retry_in_s=%s: %s",
                client.name,
                self._retry_delay_s,
                exc,
            )
            self._sleep(self._retry_delay_s)
            return client.generate(messages, **options)

    def run(
        self,
        messages: Sequence[ChatMessage],
        parse: Callable[[str], T],
        *,
        temperature: float = 0.2,
        max_tokens: int = 3500,
        max_tokens_by_kind: Mapping[str, int] | None = None,
    ) -> ChainResult[T]:
        limits = max_tokens_by_kind or {}
        failures: list[BackendFailure] = []
        for client in self._clients:
            started = time.perf_counter()
            try:
                text = self._generate(
                    client,
                    messages,
                    temperature=temperature,
                    max_tokens=limits.get(getattr(client, "kind", ""), max_tokens),
                )
                value = parse(text)
            except (ProviderError, MalformedResponse) as exc:
                failures.append(BackendFailure(backend=client.name, reason=str(exc)))
                logger.warning("analysis_backend_failed backend=%s: %s", client.name, exc)
                continue

            logger.info(
                "analysis_backend_succeeded backend=%s latency_ms=%s failed_before=%s",
                client.name,
                int((time.perf_counter() - started) * 1000),
                len(failures),
            )
            return ChainResult(value=value, backend=client.name)

        error = AllBackendsFailed(failures)
        logger.error("analysis_backends_exhausted tried=%s", error.backends_tried)
        raise error
