"""CLI entry point: python -m kakomon [options]"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from kakomon import settings
from kakomon.config import Config, ConfigError, load_config, parse_config
from kakomon.runner import RunSummary, run

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kakomon",
        description=(
            "Fetch past-exam question pages, extract today's item and post it\n"
            "to a Slack incoming webhook."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, metavar="JSON",
                        help=f"Configuration JSON (default: ${settings.CONFIG_ENV_VAR})")
    parser.add_argument("--url", action="append", default=None, metavar="URL",
                        help="Page to fetch; repeat for several (replaces fetch_urls)")
    parser.add_argument("--dry-run", action="store_true", default=False,
                        help="Print payloads instead of posting them")
    parser.add_argument("--timeout", type=float, default=settings.DOWNLOAD_TIMEOUT,
                        metavar="SECONDS",
                        help=f"Network timeout (default: {settings.DOWNLOAD_TIMEOUT})")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    return parser


def _resolve_config(args: argparse.Namespace) -> Config:
    """Build the run configuration from CLI flags and the environment."""
    if args.config:
        config = parse_config(args.config)
    elif args.dry_run and args.url and not os.environ.get(settings.CONFIG_ENV_VAR):
        # Nothing is posted in a dry run, so the webhook is never contacted
        config = Config(webhook_url="https://localhost/dry-run", fetch_urls=[])
    else:
        config = load_config()

    if args.url:
        try:
            config = Config(webhook_url=config.webhook_url, fetch_urls=args.url)
        except ValueError as exc:
            raise ConfigError(f"invalid --url: {exc}") from exc
    return config


def _print_payloads(summary: RunSummary) -> None:
    from rich.console import Console

    console = Console()
    for payload in summary.payloads:
        console.print_json(data=payload)


def _print_summary(summary: RunSummary, *, dry_run: bool) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title="Dry run" if dry_run else "Run summary")
    table.add_column("Outcome")
    table.add_column("Pages", justify="right")
    table.add_row("built" if dry_run else "sent",
                  str(len(summary.payloads) if dry_run else summary.sent))
    table.add_row("no item", str(summary.skipped))
    table.add_row("failed", str(summary.failed), style="red" if summary.failed else None)
    Console(stderr=True).print(table)

    for url, message in summary.errors.items():
        print(f"ERROR: {url}: {message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT)

    try:
        config = _resolve_config(args)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    summary = run(config, dry_run=args.dry_run, timeout=args.timeout)

    if args.dry_run:
        _print_payloads(summary)
    _print_summary(summary, dry_run=args.dry_run)

    return 0 if summary.ok else 2


if __name__ == "__main__":
    sys.exit(main())
