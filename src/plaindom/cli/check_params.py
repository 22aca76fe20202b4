"""CLI entrypoint that reports inconsistent DNM parameter combinations."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv

from plaindom.dnm.config import PRESETS, DNMSettings
from plaindom.dnm.parameters import check, log_diagnostics

load_dotenv()

logger = logging.getLogger(__name__)


def _cli_overrides(args: argparse.Namespace) -> dict[str, bool]:
    overrides: dict[str, bool] = {}
    if args.stem_once:
        overrides["stem_words_once"] = True
    if args.stem_full:
        overrides["stem_words_full"] = True
    if args.lowercase:
        overrides["convert_to_lowercase"] = True
    if args.no_back_mapping:
        overrides["support_back_mapping"] = False
    return overrides


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build DNM parameters and print configuration diagnostics")
    parser.add_argument("--preset", choices=sorted(PRESETS), help="Preset name (defaults to DNM_PRESET or 'default')")
    parser.add_argument("--stem-once", action="store_true", help="Apply the stemmer once")
    parser.add_argument("--stem-full", action="store_true", help="Apply the stemmer until it stabilizes")
    parser.add_argument("--lowercase", action="store_true", help="Convert text to lowercase")
    parser.add_argument("--no-back-mapping", action="store_true", help="Disable plaintext-to-DOM back mapping")
    parser.add_argument("--strict", action="store_true", help="Exit with status 1 when diagnostics are reported")
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)

    try:
        settings = DNMSettings.from_env(preset=args.preset)
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    settings = settings.with_overrides(**_cli_overrides(args))

    params = settings.build_parameters()
    diagnostics = check(params)
    log_diagnostics(diagnostics, logger)

    payload = {
        "preset": settings.preset,
        "parameters": params.to_dict(),
        "diagnostics": [diagnostic.to_dict() for diagnostic in diagnostics],
    }
    print(json.dumps(payload, ensure_ascii=True, indent=2))

    if args.strict and diagnostics:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
