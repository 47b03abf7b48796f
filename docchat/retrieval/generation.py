"""Claude-powered answer generation over retrieved documentation context."""

from __future__ import annotations

from typing import Protocol

from anthropic import Anthropic, APIError
from anthropic.types import TextBlock

from docchat.config import Settings
from docchat.exceptions import GenerationError


class Generator(Protocol):
    """Anything that turns a question plus context into an answer."""

    def generate(self, user_message: str, context: str) -> str: ...


class AnthropicGenerator:
    """Answer questions with Claude, grounded in the supplied context.

    Timeouts and retries are delegated to the Anthropic client. Every failure
    surfaces as :class:`GenerationError`.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        system_prompt: str,
        max_tokens: int = 1024,
        timeout: float = 30.0,
        max_retries: int = 2,
        client: Anthropic | None = None,
    ) -> None:
        self._client = client or Anthropic(api_key=api_key, timeout=timeout, max_retries=max_retries)
        self._model = model
        self._system_prompt = system_prompt
        self._max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> AnthropicGenerator:
        return cls(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            system_prompt=settings.system_prompt,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
            max_retries=settings.llm_max_retries,
        )

    def generate(self, user_message: str, context: str) -> str:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=(
                    f"{self._system_prompt}\n\n"
                    "Rules:\n"
                    "- Answer based on the provided documentation context. If the answer "
                    "isn't in the context, say so.\n"
                    "- Mention the video and timestamp when citing a video transcript.\n"
                    "- Be concise and direct."
                ),
                messages=[
                    {
                        "role": "user",
                        "content": f"Context:\n\n{context}\n\nQuestion: {user_message}",
                    }
                ],
            )
        except APIError as exc:
            raise GenerationError(f"LLM unavailable: {exc.message}") from exc

        # response.content is a union of block types; plain text is always requested
        if not response.content or not isinstance(response.content[0], TextBlock):
            kind = type(response.content[0]).__name__ if response.content else "no content"
            raise GenerationError(f"Expected TextBlock from Claude, got {kind}")

        return response.content[0].text
