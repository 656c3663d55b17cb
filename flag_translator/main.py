"""Command-line entry point: ``python -m flag_translator`` or ``flag-translator``."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flag-translator",
        description="Reply with a translation when someone reacts to a message with a country flag.",
    )
    parser.add_argument("--provider", choices=["google", "mymemory", "deepl"], help="override TRANSLATION_PROVIDER")
    parser.add_argument("--log-level", help="override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--port", type=int, help="override PORT for the status server")
    parser.add_argument("--no-status", action="store_true", help="do not start the HTTP status server")
    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    """Push command-line overrides into the environment read by ``FlagTranslatorConfig.from_env``."""

    if args.provider:
        os.environ["TRANSLATION_PROVIDER"] = args.provider
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    if args.port:
        os.environ["PORT"] = str(args.port)
    if args.no_status:
        os.environ["STATUS_SERVER_ENABLED"] = "false"


def main(argv: Optional[Sequence[str]] = None) -> None:
    # Running from a source checkout without installing.
    if str(PROJECT_ROOT) not in sys.path:
        sys.path.insert(0, str(PROJECT_ROOT))

    apply_overrides(build_parser().parse_args(argv))

    from flag_translator.runner import run_flag_translator

    run_flag_translator()


if __name__ == "__main__":
    main()
