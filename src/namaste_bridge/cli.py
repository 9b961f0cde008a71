"""Command-line interface for namaste-bridge."""

import argparse
import json
import logging
import sys
from pathlib import Path

from namaste_bridge import __version__
from namaste_bridge.config import BridgeConfig
from namaste_bridge.core import ConversionPipeline
from namaste_bridge.exceptions import NamasteBridgeError, NoValidDataError, PersistenceError
from namaste_bridge.mapping.engine import MappingConfig, MappingEngine
from namaste_bridge.schema import Submitter
from namaste_bridge.storage import build_store


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = BridgeConfig.from_env()
    if args.command == "convert":
        return _convert(args, config)
    return _search(args, config)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="namaste-bridge",
        description="Map NAMASTE codes to ICD-11 TM2 and Biomedicine and export FHIR bundles",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"namaste-bridge {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a NAMASTE CSV/TSV file")
    convert.add_argument("file", help="Path to the NAMASTE code file")
    convert.add_argument("--email", required=True, help="Submitter email recorded in the bundle")
    convert.add_argument("--user-id", help="Submitter id used for storage (default: email)")
    convert.add_argument("--output", "-o", help="Write the FHIR bundle to this path")
    convert.add_argument("--json", action="store_true", help="Output mapping results as JSON")

    search = subparsers.add_parser("search", help="Search reference NAMASTE codes")
    search.add_argument("query", help="Code or term fragment")
    search.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    search.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def _convert(args: argparse.Namespace, config: BridgeConfig) -> int:
    path = Path(args.file)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1

    submitter = Submitter(user_id=args.user_id or args.email, email=args.email)
    pipeline = ConversionPipeline(store=build_store(config), config=config)
    warnings: list[str] = []

    try:
        outcome = pipeline.run(path.read_bytes(), path.name, submitter)
        results, bundle = outcome.results, outcome.bundle
        warnings = outcome.warnings
    except NoValidDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except PersistenceError as e:
        print(f"Warning: {e}", file=sys.stderr)
        results, bundle = e.results, e.bundle
        warnings = ["persistence_failed"]
    except NamasteBridgeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output and bundle is not None:
        Path(args.output).write_text(bundle.to_json(), encoding="utf-8")

    if args.json:
        print(json.dumps([result.model_dump() for result in results], indent=2, ensure_ascii=False))
    else:
        _print_results(results)
        if warnings:
            print(f"  Warnings: {', '.join(warnings)}")
            print()

    return 0


def _search(args: argparse.Namespace, config: BridgeConfig) -> int:
    engine = MappingEngine(
        config=MappingConfig(
            reference_version=config.reference_version,
            search_limit=config.search_result_limit,
        )
    )
    results = engine.search(args.query, limit=args.limit)

    if args.json:
        print(json.dumps([result.model_dump() for result in results], indent=2, ensure_ascii=False))
    else:
        _print_results(results)
    return 0


def _print_results(results) -> None:
    """Print mapping results as an aligned table."""
    print()
    print("  namaste-bridge")
    print()

    if not results:
        print("  No results.")
        print()
        return

    for result in results:
        tm2 = _format_target(result.secondary_code, result.secondary_term)
        bio = _format_target(result.tertiary_code, result.tertiary_term)
        print(f"  {result.source_code:<10} {result.source_term}")
        print(f"  {'':<10} TM2: {tm2}")
        print(f"  {'':<10} Bio: {bio}")
        print(f"  {'':<10} {result.mapping_status} ({result.confidence_score:.0%})")

    print()


def _format_target(code: str | None, term: str | None) -> str:
    """Format a target as 'code - term'."""
    if not code:
        return "-"
    return f"{code} - {term}" if term else code


if __name__ == "__main__":
    sys.exit(main())
