"""
Shared pytest fixtures.

Every test gets a clean provider cache and a known Ark configuration so tests
never depend on the developer's .env or real credentials.
"""
from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def ark_config(monkeypatch):
    """Pin config values and drop any cached provider around each test."""
    import config
    import content_analyzer

    monkeypatch.setattr(config, "ARK_API_KEY", "ark-test-key")
    monkeypatch.setattr(config, "ARK_BASE_URL", "https://ark.example.test/api/v3")
    monkeypatch.setattr(config, "ARK_MODEL", "test-model")
    monkeypatch.setattr(config, "ARK_REASONING_EFFORT", "medium")
    content_analyzer.reset_provider()
    yield config
    content_analyzer.reset_provider()


def make_completion(content, usage=None):
    """Fake chat-completion response with a single choice (content may be None)."""
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)], usage=usage)


def make_empty_completion():
    return SimpleNamespace(choices=[], usage=None)


def mock_transport(provider, response=None, side_effect=None) -> AsyncMock:
    """Swap the provider's SDK client for a mock; returns the create() mock."""
    create = AsyncMock(return_value=response, side_effect=side_effect)
    client = MagicMock()
    client.chat.completions.create = create
    provider._client = client
    return create
