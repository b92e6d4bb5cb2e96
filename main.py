"""
main.py: one-shot command-line runner.

  python main.py --text "north-facing living room, feels cramped" --image room.jpg
  python main.py --image https://example.com/room.png --plain

Structured mode prints the recommendation payload as JSON; --plain prints the
model's reply as-is. Requires ARK_API_KEY (env or .env).
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import config
import content_analyzer
from providers.base import encode_image

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    handlers=[logging.StreamHandler(sys.stderr)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interior-design analysis of a description and/or room photo")
    parser.add_argument("--text", default=None, help="Description of the room or the question to ask")
    parser.add_argument("--image", default=None, help="Local image file, http(s) URL or data URL")
    parser.add_argument("--plain", action="store_true", help="Return the model's reply without JSON parsing")
    return parser


def load_image_arg(value: Optional[str]) -> Optional[str]:
    """Local files are read and encoded; anything else is passed through."""
    if not value:
        return None
    if value.startswith(("data:", "http://", "https://")):
        return value
    path = Path(value)
    try:
        is_file = path.is_file()
    except OSError:
        # bare base64 can exceed PATH_MAX
        return value
    if is_file:
        return encode_image(path.read_bytes())
    return value


async def run(args: argparse.Namespace) -> str:
    image_data = load_image_arg(args.image)
    if args.plain:
        return await content_analyzer.analyze_content_text(args.text, image_data)
    result = await content_analyzer.analyze_content(args.text, image_data)
    return json.dumps(result, ensure_ascii=False, indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.text and not args.image:
        parser.error("provide --text and/or --image")

    try:
        output = asyncio.run(run(args))
    except Exception as exc:
        logger.error("Analysis failed: %s", exc)
        print(json.dumps({"error": str(exc)}, ensure_ascii=False))
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
