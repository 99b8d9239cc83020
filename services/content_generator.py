# ─────────────────────────────────────────────────────────────────────────────
# File: content_generator.py
# Directory: services
# Purpose: Ask the chat model for a topic introduction and return its text.
#
# Upstream:
#   - ENV: —
#   - Imports: openai, services.errors
#
# Downstream:
#   - services.orchestrator
#   - main
#
# Contents:
#   - ContentGenerator
# ─────────────────────────────────────────────────────────────────────────────
from __future__ import annotations

from openai import AsyncOpenAI, OpenAIError

from services.errors import GenerationError


class ContentGenerator:
    """One prompt in, one completion out. No retries, no streaming."""

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    async def generate(self, prompt: str) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as exc:
            raise GenerationError(f"Completion request failed: {exc}") from exc

        if not response.choices:
            raise GenerationError("Completion returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise GenerationError("Completion returned no text")
        return content

    async def aclose(self) -> None:
        await self.client.close()
