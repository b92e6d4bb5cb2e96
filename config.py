"""
Central configuration: reads from .env file / environment once at import.

Values are handed to ArkProvider as constructor arguments by
content_analyzer.get_provider(); nothing else should read os.environ.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# ── Ark (Volcengine) inference endpoint ───────────────────────────────────────
# Create a key in the Ark console → API Key management.
ARK_API_KEY: str | None = os.getenv("ARK_API_KEY") or None
ARK_BASE_URL: str       = os.getenv("ARK_BASE_URL", "https://ark.cn-beijing.volces.com/api/v3")

# Model / endpoint id and the reasoning hint sent with every request
ARK_MODEL: str            = os.getenv("ARK_MODEL", "doubao-seed-1-6-251015")
ARK_REASONING_EFFORT: str = os.getenv("ARK_REASONING_EFFORT", "medium")

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
