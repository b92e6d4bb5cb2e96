"""
content_analyzer.py: module-level entry points for callers.

The Ark provider is built from config on first use and cached; reset_provider()
drops the cache (e.g. after changing ARK_API_KEY in tests).
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import config
from providers.ark_provider import ArkProvider
from providers.base import check_input

logger = logging.getLogger(__name__)

_provider: Optional[ArkProvider] = None


def get_provider() -> ArkProvider:
    global _provider
    if _provider is None:
        if not config.ARK_API_KEY:
            raise RuntimeError("No Ark API key configured. Set ARK_API_KEY in the environment or .env")
        _provider = ArkProvider(
            config.ARK_API_KEY,
            model=config.ARK_MODEL,
            base_url=config.ARK_BASE_URL,
            reasoning_effort=config.ARK_REASONING_EFFORT,
        )
        logger.info("Loaded provider: %s", _provider.full_name)
    return _provider


def reset_provider() -> None:
    global _provider
    _provider = None


async def analyze_content(
    text: Optional[str] = None,
    image_data: Optional[str] = None,
) -> Any:
    """
    Structured recommendation: {"analysis": str, "products": [{name, reason, keywords}]}.

    A reply that is not JSON comes back as {"analysis": <text>, "products": []};
    only bad input and API failures raise. Parsed JSON is not validated, so a
    model that answers with a bare array or null gets that value back.
    """
    check_input(text, image_data)   # before touching config
    outcome = await get_provider().analyse(text, image_data)
    return outcome.payload


async def analyze_content_text(
    text: Optional[str] = None,
    image_data: Optional[str] = None,
) -> str:
    """Free-text reply with no system instruction."""
    check_input(text, image_data)
    return await get_provider().analyse_text(text, image_data)
