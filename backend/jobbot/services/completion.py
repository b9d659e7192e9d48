import logging
from dataclasses import dataclass

import anthropic

from jobbot.config import settings
from jobbot.errors import CompletionError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-6"

# USD per token: (input, output)
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "claude-sonnet-4-6": (0.000003, 0.000015),
}


def compute_cost(input_tokens: int, output_tokens: int, model: str = DEFAULT_MODEL) -> float:
    input_rate, output_rate = MODEL_PRICING.get(model, MODEL_PRICING[DEFAULT_MODEL])
    return input_tokens * input_rate + output_tokens * output_rate


@dataclass
class Completion:
    text: str
    input_tokens: int
    output_tokens: int
    model: str

    @property
    def cost(self) -> float:
        return compute_cost(self.input_tokens, self.output_tokens, self.model)


class CompletionClient:
    """Thin wrapper over the Anthropic Messages API: one user prompt in, text out."""

    def __init__(self, model: str | None = None, api_key: str | None = None, client=None):
        self.model = model or settings.model
        self._api_key = api_key or settings.anthropic_api_key or None
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self._api_key)
        return self._client

    def complete(self, prompt: str, max_tokens: int) -> Completion:
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as exc:
            logger.error("Completion request failed: %s", exc)
            raise CompletionError(f"Completion request failed: {exc}") from exc

        text = next(
            (block.text for block in message.content if getattr(block, "type", None) == "text"),
            "",
        )
        completion = Completion(
            text=text,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
            model=self.model,
        )
        logger.debug(
            "Completion used %d input / %d output tokens",
            completion.input_tokens,
            completion.output_tokens,
        )
        return completion
