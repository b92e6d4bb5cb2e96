"""
Volcengine Ark provider: interior-design analysis of text and/or a room photo.

Ark exposes an OpenAI-compatible chat-completions API, so the stock
openai.AsyncOpenAI client is pointed at the Ark base URL.

Two call modes:
  analyse       system instruction asks for strict JSON; the reply is parsed
                into {"analysis", "products"} and degrades to text on bad JSON
  analyse_text  no system instruction; the reply text is returned untouched
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import openai

from providers.base import (
    NO_RESPONSE_CONTENT, SYSTEM_PROMPT,
    AnalysisOutcome, ContentPart, build_content,
    first_choice_content, parse_analysis_reply,
)

logger = logging.getLogger(__name__)

ARK_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
DEFAULT_MODEL = "doubao-seed-1-6-251015"
DEFAULT_REASONING_EFFORT = "medium"


class ArkProvider:
    """
    One instance = one endpoint + credential + model.
    Holds no per-call state, so concurrent calls on the same instance are independent.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = ARK_BASE_URL,
        reasoning_effort: str = DEFAULT_REASONING_EFFORT,
    ):
        self.name             = "ark"
        self.model_id         = model
        self.reasoning_effort = reasoning_effort
        self._client          = openai.AsyncOpenAI(api_key=api_key, base_url=base_url)

    @property
    def full_name(self) -> str:
        return f"{self.name}/{self.model_id}"

    async def analyse(
        self,
        text: Optional[str] = None,
        image_data: Optional[str] = None,
    ) -> AnalysisOutcome:
        """Structured mode. Only InvalidInputError and SDK errors escape."""
        parts = build_content(text, image_data)
        response = await self._complete([
            {"role": "system", "content": SYSTEM_PROMPT},
            _user_turn(parts),
        ])
        raw = first_choice_content(response) or ""
        return parse_analysis_reply(raw, self.full_name)

    async def analyse_text(
        self,
        text: Optional[str] = None,
        image_data: Optional[str] = None,
    ) -> str:
        """Plain-text mode: raw reply, or NO_RESPONSE_CONTENT when empty."""
        parts = build_content(text, image_data)
        response = await self._complete([_user_turn(parts)])
        return first_choice_content(response) or NO_RESPONSE_CONTENT

    async def _complete(self, messages: list[dict]):
        t0 = time.monotonic()
        try:
            response = await self._client.chat.completions.create(
                model=self.model_id,
                reasoning_effort=self.reasoning_effort,
                messages=messages,
            )
        except Exception as exc:
            logger.error("[%s] API call failed: %s", self.full_name, exc)
            raise

        latency_ms = int((time.monotonic() - t0) * 1000)
        usage = getattr(response, "usage", None)
        logger.info(
            "[%s] OK latency=%dms tokens=%s/%s",
            self.full_name, latency_ms,
            getattr(usage, "prompt_tokens", "?"),
            getattr(usage, "completion_tokens", "?"),
        )
        return response


def _user_turn(parts: list[ContentPart]) -> dict:
    return {"role": "user", "content": [p.to_message() for p in parts]}
