from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class ProviderError(RuntimeError):
    def __init__(self, message: str, *, backend: str):
        super().__init__(message)
        self.backend = backend


class RateLimitedError(ProviderError):
    pass


class AIClient(Protocol):
    name: str

    def generate(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_tokens: int = 3500,
    ) -> str: ...
