"""
Shared types for the content analyzer.

  - content parts (image / text) and the ordered sequence builder
  - the interior-design system instruction
  - the fence-strip + parse step and its two-state outcome
  - image data normalisation (data URL / http URL / bare base64)
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import openai

logger = logging.getLogger(__name__)

# ── Errors ─────────────────────────────────────────────────────────────────────


class InvalidInputError(ValueError):
    """Neither text nor image data was supplied."""


# SDK failures (connectivity, auth, quota, bad request) propagate unwrapped.
RemoteCallError = openai.OpenAIError


# ── Prompt ─────────────────────────────────────────────────────────────────────

SYSTEM_PROMPT = """你是一位资深的室内软装设计师。请根据用户的描述和图片进行专业分析。
必须以纯 JSON 格式返回结果，不要包含 markdown 代码块标记（如 ```json），格式如下：
{
    "analysis": "这里是你的详细分析建议，使用 Markdown 格式排版，包括风格定位、配色建议、布局优化等。",
    "products": [
        {
            "name": "商品名称（如：北欧极简落地灯）",
            "reason": "推荐理由（简短说明为什么选这个）",
            "keywords": "用于电商搜索的关键词（如：落地灯 极简 黄铜）"
        }
    ]
}
请确保返回的是合法的 JSON 字符串。"""

NO_RESPONSE_CONTENT = "no response content"


# ── Content parts ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImagePart:
    url: str
    kind: str = field(default="image", init=False)

    def to_message(self) -> dict:
        return {"type": "image_url", "image_url": {"url": self.url}}


@dataclass(frozen=True)
class TextPart:
    value: str
    kind: str = field(default="text", init=False)

    def to_message(self) -> dict:
        return {"type": "text", "text": self.value}


ContentPart = Union[ImagePart, TextPart]


def build_content(
    text: Optional[str] = None,
    image_data: Optional[str] = None,
) -> list[ContentPart]:
    """
    Assemble the user turn: image first, text second.
    Empty strings count as absent. Raises InvalidInputError when nothing is left.
    """
    check_input(text, image_data)
    parts: list[ContentPart] = []
    if image_data:
        parts.append(ImagePart(normalise_image_data(image_data)))
    if text:
        parts.append(TextPart(text))
    return parts


def check_input(text: Optional[str], image_data: Optional[str]) -> None:
    """Raise InvalidInputError when both inputs are absent or empty."""
    if not text and not image_data:
        raise InvalidInputError("Provide text or an image")


# ── Image data ─────────────────────────────────────────────────────────────────

def sniff_media_type(image_bytes: bytes) -> str:
    """Guess the MIME type from magic bytes; JPEG when unknown."""
    if image_bytes[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    return "image/jpeg"


def encode_image(image_bytes: bytes) -> str:
    """Raw image bytes → data URL."""
    b64 = base64.b64encode(image_bytes).decode()
    return f"data:{sniff_media_type(image_bytes)};base64,{b64}"


def normalise_image_data(image_data: str) -> str:
    """
    Data URLs and http(s) URLs pass through unchanged.
    Bare base64 is wrapped into a data URL with a sniffed media type;
    anything that does not decode is passed through as-is for the endpoint to judge.
    """
    value = image_data.strip()
    if value.startswith(("data:", "http://", "https://")):
        return value
    try:
        head = base64.b64decode(value[:64] + "=" * (-len(value[:64]) % 4), validate=True)
    except (binascii.Error, ValueError):
        return value
    return f"data:{sniff_media_type(head)};base64,{value}"


# ── Reply parsing ──────────────────────────────────────────────────────────────

_FENCE_RE = re.compile(r"```json\n?|\n?```")


def strip_code_fence(raw: str) -> str:
    """Remove ```json / ``` markers wherever they appear, then trim."""
    return _FENCE_RE.sub("", raw).strip()


@dataclass(frozen=True)
class ParsedAnalysis:
    """
    Reply parsed as JSON. Shape is whatever the model returned: usually a dict,
    but a bare `null`, number or array passes through unchanged.
    """
    payload: Any
    raw: str
    is_fallback = False


@dataclass(frozen=True)
class FallbackAnalysis:
    """Reply was not JSON; the cleaned text is wrapped as the analysis."""
    payload: dict
    raw: str
    is_fallback = True


AnalysisOutcome = Union[ParsedAnalysis, FallbackAnalysis]


def parse_analysis_reply(raw: str, provider_name: str) -> AnalysisOutcome:
    """
    Strip markdown fences and parse the reply.
    Never raises: non-JSON replies become a FallbackAnalysis.
    """
    cleaned = strip_code_fence(raw)
    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        logger.warning("[%s] Non-JSON reply, falling back to text (%s): %s",
                       provider_name, exc, raw[:300])
        return FallbackAnalysis(payload={"analysis": cleaned, "products": []}, raw=raw)
    return ParsedAnalysis(payload=data, raw=raw)


def first_choice_content(response) -> Optional[str]:
    """Text of the first choice, or None when choices/message/content is missing."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None
    return getattr(message, "content", None) or None
