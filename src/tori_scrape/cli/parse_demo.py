from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from dateutil import parser as dateparser

from tori_scrape.config import Settings
from tori_scrape.models import Item, ParseOutcome
from tori_scrape.services import Parser, get_locale
from tori_scrape.services.dates import resolve_timezone
from tori_scrape.utils.log import setup_logging
from tori_scrape.utils.pipelines import jsonify, outcome_summary

logger = logging.getLogger(__name__)

# Saved pages are named like 2024-01-30-123020-dump.html (site local time)
DUMP_STAMP = re.compile(r"(\d{4}-\d{2}-\d{2}-\d{6})")

EXIT_OK = 0
EXIT_LISTING_FAILURES = 1
EXIT_DOCUMENT_ERROR = 2


def reference_from_filename(path: Path, zone: str) -> Optional[datetime]:
    m = DUMP_STAMP.search(path.name)
    if not m:
        return None
    naive = datetime.strptime(m.group(1), "%Y-%m-%d-%H%M%S")
    return naive.replace(tzinfo=resolve_timezone(zone))


def parse_fetched_at(value: str, zone: str) -> datetime:
    ts = dateparser.isoparse(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=resolve_timezone(zone))
    return ts


def format_item(item: Item) -> str:
    price = item.price.text if item.price is not None else "-"
    return (
        f"{item.posted_at:%Y-%m-%d %H:%M}Z  {item.item_id:>10}  {price:>12}  "
        f"{item.title} ({item.location}, {item.direction})  {item.href}"
    )


def render(outcome: ParseOutcome, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(jsonify(outcome), ensure_ascii=False, indent=2)
    lines = [format_item(it) for it in outcome.items]
    for f in outcome.failures:
        lines.append(f"! #{f.index} {f.stage}: {f.detail}")
    if outcome.error is not None:
        lines.append(f"!! {outcome.error.stage}: {outcome.error.detail}")
    return "\n".join(lines)


def build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tori-parse", description="Parse a saved tori.fi search results page"
    )
    parser.add_argument("file", type=Path, help="Path to the saved HTML page")
    parser.add_argument(
        "--fetched-at",
        help="When the page was fetched (ISO 8601). Defaults to the "
        "YYYY-MM-DD-HHMMSS stamp in the file name, in site local time",
    )
    parser.add_argument("--encoding", default=settings.encoding)
    parser.add_argument("--timezone", default=settings.timezone)
    parser.add_argument("--locale", default=settings.locale, choices=["fi", "sv", "en"])
    parser.add_argument("--base-url", default=settings.base_url)
    parser.add_argument(
        "--strict", action="store_true", help="Abort on the first broken listing"
    )
    parser.add_argument("--format", choices=["json", "text"], default="text")
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_arg_parser(settings).parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.fetched_at:
            reference = parse_fetched_at(args.fetched_at, args.timezone)
        else:
            reference = reference_from_filename(args.file, args.timezone)
        if reference is None:
            print(
                f"error: cannot infer fetch time from {args.file.name!r}; pass --fetched-at",
                file=sys.stderr,
            )
            return EXIT_DOCUMENT_ERROR
        parser = Parser(
            reference,
            timezone=args.timezone,
            locale=get_locale(args.locale),
            strict=args.strict,
            base_url=args.base_url,
        )
        text = args.file.read_text(encoding=args.encoding)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DOCUMENT_ERROR

    outcome = parser.parse(text)
    logger.info("Parsed %s: %s", args.file, outcome_summary(outcome))
    print(render(outcome, args.format))

    if outcome.error is not None:
        return EXIT_DOCUMENT_ERROR
    if outcome.failures:
        return EXIT_LISTING_FAILURES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
