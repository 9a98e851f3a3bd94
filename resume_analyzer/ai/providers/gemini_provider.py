from resume_analyzer.ai.providers.openai_provider import OpenAIProvider


class GeminiProvider(OpenAIProvider):
    """Gemini through its OpenAI-compatible endpoint, reusing the OpenAI SDK."""

    kind = "gemini"
    label = "Gemini"

    def _temperature(self, requested: float) -> float:
        # 2.5 models always run at temperature 1.
        if self._model.startswith("gemini-2.5"):
            return 1.0
        return requested
