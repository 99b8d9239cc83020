# ──────────────────────────────────────────────────────────────────────────────
# File: main.py
# Purpose: Command-line entrypoint: backfill empty topic files of one roadmap,
#          drafting them with OpenAI when OPEN_AI_API_KEY is set.
#
# Usage
#   python main.py <roadmap-id> [--roadmaps-dir DIR] [--model NAME]
#
# Exit codes
#   • 0  every group settled without error ("Done")
#   • 1  missing/unknown roadmap id, or any failure during the run
#
# Notes
#   • Without a key every empty file gets "# <label>" and no API call is made.
#   • Keep this file small and boring; complex logic belongs in services/.
# ──────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

# ── Stdlib --------------------------------------------------------------------
import argparse
import asyncio
import sys
import traceback
from pathlib import Path
from typing import List, Optional

# ── Local ---------------------------------------------------------------------
from core.logging import quiet_http_loggers
from services.content_generator import ContentGenerator
from services.errors import InvalidArgumentError
from services.orchestrator import RunReport, fill_roadmap
from services.settings import Settings, load_settings, resolve_roadmap_dir
from utils.openai_client import create_openai_client


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadmap-content",
        description="Fill empty roadmap topic files with a heading or an OpenAI-drafted introduction.",
    )
    parser.add_argument("roadmap_id", nargs="?", help="Directory name under the roadmaps root")
    parser.add_argument("--roadmaps-dir", default=None,
                        help="Roadmaps root (default: $ROADMAPS_DIR or ./src/data/roadmaps)")
    parser.add_argument("--model", default=None,
                        help="Chat model (default: $ROADMAP_CONTENT_MODEL or gpt-4)")
    return parser


async def run(settings: Settings, roadmap_dir: Path, roadmap_id: str) -> RunReport:
    generator: Optional[ContentGenerator] = None
    if settings.generation_enabled:
        generator = ContentGenerator(create_openai_client(settings.api_key), settings.model)
    try:
        return await fill_roadmap(roadmap_dir, roadmap_id, generator=generator)
    finally:
        if generator is not None:
            await generator.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    quiet_http_loggers()
    settings = load_settings(roadmaps_dir=args.roadmaps_dir, model=args.model)

    try:
        roadmap_dir = resolve_roadmap_dir(settings.roadmaps_dir, args.roadmap_id)
    except InvalidArgumentError as exc:
        print(exc, file=sys.stderr)
        if args.roadmap_id:
            print(f"Allowed keys are {', '.join(exc.allowed)}", file=sys.stderr)
        return 1

    try:
        asyncio.run(run(settings, roadmap_dir, args.roadmap_id))
    except Exception:
        traceback.print_exc()
        return 1

    print("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
