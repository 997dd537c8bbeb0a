"""CLI entrypoints for doclinks commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from . import __version__
from .config import ConfigError, LinkCheckConfig, load_config, merge_config
from .logging import configure_logging
from .orchestrator import CheckReport, Orchestrator
from .reporters import REPORTERS, report_console, report_json, report_markdown


def _collect(parser: argparse.ArgumentParser, flag: str, dest: str, help_text: str) -> None:
    parser.add_argument(flag, dest=dest, action="append", default=[], metavar="VALUE", help=help_text)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doclinks",
        description="Extract and validate links in Markdown and MDX documentation.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check links in a documentation directory.")
    check.add_argument("directory", help="Directory to scan for documentation files.")
    check.add_argument("-c", "--config", help="Path to a config file.")
    scope = check.add_mutually_exclusive_group()
    scope.add_argument("-i", "--internal-only", action="store_true", help="Only check internal links.")
    scope.add_argument("-e", "--external-only", action="store_true", help="Only check external links.")
    _collect(check, "--ignore", "ignore", "Ignore URL pattern (can be repeated).")
    _collect(check, "--ignore-domain", "ignore_domain", "Ignore domain (can be repeated).")
    _collect(check, "--route-prefix", "route_prefix", "Route prefix for absolute paths (can be repeated).")
    _collect(check, "--component", "component", "Custom JSX component with an href prop (can be repeated).")
    check.add_argument("--redirects", help="Redirect map file (.json, .ts or .js).")
    check.add_argument(
        "--fail-on-redirects",
        action="store_true",
        help="Treat links covered by the redirect map as failures.",
    )
    check.add_argument("-t", "--timeout", type=_non_negative_int, help="External request timeout in ms.")
    check.add_argument("--retries", type=_non_negative_int, help="Retries after a failed network attempt.")
    check.add_argument("--concurrency", type=_non_negative_int, help="Maximum parallel requests.")
    check.add_argument("-f", "--format", choices=REPORTERS, default="console", help="Output format.")
    check.add_argument("-o", "--output", help="Write the report to a file.")
    check.add_argument("--no-progress", action="store_true", help="Hide progress messages.")
    check.add_argument("--log-file", help="Also write progress and debug logs to this file.")
    check.add_argument(
        "--no-fail",
        action="store_true",
        help="Exit with status 0 even when broken links are found.",
    )
    check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show all links, not just broken ones, and enable debug logging.",
    )
    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "timeout": args.timeout,
        "retries": args.retries,
        "concurrency": args.concurrency,
        "redirects_file": args.redirects,
    }
    if args.internal_only:
        overrides["internal_only"] = True
        overrides["external_only"] = False
    if args.external_only:
        overrides["external_only"] = True
        overrides["internal_only"] = False
    if args.fail_on_redirects:
        overrides["fail_on_redirects"] = True
    if args.ignore:
        overrides["ignore_patterns"] = args.ignore
    if args.ignore_domain:
        overrides["ignore_domains"] = args.ignore_domain
    if args.route_prefix:
        overrides["route_prefixes"] = args.route_prefix
    if args.component:
        overrides["custom_components"] = args.component
    return overrides


def _render(report: CheckReport, args: argparse.Namespace) -> str:
    if args.format == "json":
        return report_json(report)
    if args.format == "markdown":
        return report_markdown(report)
    return ""


def run_check(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        config: LinkCheckConfig = load_config(args.config)
        config = merge_config(config, _cli_overrides(args))
    except ConfigError as exc:
        parser.exit(2, f"doclinks: {exc}\n")

    orchestrator = Orchestrator()
    try:
        report = orchestrator.run_check(args.directory, config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(2, f"doclinks: {exc}\n")

    if not report.files:
        print("No documentation files found")
        return 0

    output = _render(report, args)
    if args.format == "console":
        report_console(report, verbose=bool(args.verbose))
    elif args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Report written to {args.output}")
    else:
        print(output)

    if report.summary.has_failures(fail_on_redirects=config.fail_on_redirects) and not args.no_fail:
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for doclinks commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.no_progress),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "check":
        sys.exit(run_check(args, parser))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
