#!/usr/bin/env python3
"""
CLI entrypoint for extracting behavioral scores from plain-text reports.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config import ExtractionConfig
from confidence import confidence_score
from extractor import ReportExtractor
from gates import check_input_text, extraction_summary
from logging_utils import log_exception, setup_run_logging
from pillars import Pillar


def enable_debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)
    for logger_name in logging.Logger.manager.loggerDict:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract DISC, motivator and attribute scores from report text.")
    parser.add_argument("source", type=str, help="Path to a UTF-8 text file, or '-' for stdin.")
    parser.add_argument(
        "--pillar",
        choices=[pillar.value for pillar in Pillar],
        help="Re-extract a single pillar instead of the full profile.",
    )
    parser.add_argument(
        "--min-chars",
        type=int,
        default=ExtractionConfig.MIN_INPUT_CHARS,
        help="Reject input shorter than this many characters.",
    )
    parser.add_argument("--log-dir", type=str, default=None, help="Write a run log into this directory.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    if args.log_dir:
        run_logger, _log_path = setup_run_logging(args.log_dir, args.source)
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s", stream=sys.stderr)
        run_logger = logging.getLogger("extraction_run")

    if args.debug:
        enable_debug_logging()
        run_logger.debug("Debug logging enabled.")

    try:
        text = read_source(args.source)
    except (OSError, UnicodeDecodeError) as exc:
        log_exception(run_logger, exc, context="read_source", source=args.source)
        print(f"❌ Could not read {args.source}: {exc}", file=sys.stderr)
        return 1

    issues = check_input_text(text, min_chars=args.min_chars)
    if issues:
        run_logger.warning(f"Input rejected: {', '.join(issues)}")
        print(f"❌ Input rejected ({', '.join(issues)}). Paste the full report text.", file=sys.stderr)
        return 1

    extractor = ReportExtractor()
    try:
        if args.pillar:
            payload = extractor.extract_pillar(text, args.pillar).model_dump(mode="json")
        else:
            draft = extractor.extract(text)
            payload = {
                "draft": draft.model_dump(mode="json"),
                "provenance": draft.provenance,
                "summary": extraction_summary(draft),
                "confidence": confidence_score(draft),
            }
    except Exception as exc:
        log_exception(run_logger, exc, context="extract", source=args.source, pillar=args.pillar)
        print("❌ Extraction failed. Check logs for details.", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
