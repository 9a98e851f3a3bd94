from __future__ import annotations

from typing import Any, Optional, Sequence

import openai
from openai import OpenAI

from resume_analyzer.ai.config import BackendConfig
from resume_analyzer.ai.types import ChatMessage, ProviderError, RateLimitedError


class OpenAIProvider:
    kind = "openai"
    label = "OpenAI"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 0,
        client: Any = None,
    ):
        self._model = model
        self.name = f"{self.kind}:{model}"
        if client is not None:
            self._client = client
            return

        key = (api_key or "").strip()
        if not key:
            raise ProviderError(f"{self.label} API key is missing", backend=self.name)
        self._client = OpenAI(
            api_key=key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @classmethod
    def from_config(cls, config: BackendConfig) -> "OpenAIProvider":
        return cls(
            model=config.model,
            api_key=config.api_key,
            base_url=config.base_url,
            timeout_s=config.timeout_s,
            max_retries=config.max_retries,
        )

    def _temperature(self, requested: float) -> float:
        return requested

    def generate(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 3500,
    ) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                temperature=self._temperature(temperature),
                max_tokens=max_tokens,
            )
        except openai.RateLimitError as exc:
            raise RateLimitedError(
                f"{self.label} rate limited ({exc.status_code}): {exc.message}", backend=self.name
            ) from exc
        except openai.APIStatusError as exc:
            raise ProviderError(
                f"{self.label} API error ({exc.status_code}): {exc.message}", backend=self.name
            ) from exc
        except openai.OpenAIError as exc:
            raise ProviderError(f"{self.label} request failed: {exc}", backend=self.name) from exc

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not str(content).strip():
            reason = getattr(choices[0], "finish_reason", None) if choices else None
            raise ProviderError(
                f"{self.label} returned no text. Finish reason: {reason or 'unknown'}",
                backend=self.name,
            )
        return str(content)
