#!/usr/bin/env python3
"""Inspect the chat filter's word lists and try messages against it.

Usage:
    python scripts/filter_admin.py [--config PATH] stats
    python scripts/filter_admin.py [--config PATH] test <message...>

Examples:
    # Show how many words, patterns and whitelisted phrases are loaded
    python scripts/filter_admin.py stats

    # Show what every filter level does to a message
    python scripts/filter_admin.py test "you are a d4rn fool"
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

from chatfilter.application.services.message_filter_service import MessageFilterService
from chatfilter.bootstrap.filter_service import create_filter_service
from chatfilter.config.filter_config import load_filter_config
from chatfilter.domain.errors import FilterConfigurationError, WordListSourceError
from chatfilter.domain.models.filter_level import FilterLevel
from chatfilter.domain.models.word_category import WordCategory
from chatfilter.infrastructure.observability import (
    configure_structlog,
    get_logger_for_service,
)


def format_stats(service: MessageFilterService) -> list[str]:
    """Lines describing the loaded word lists."""
    stats = service.stats()
    lines = [
        f"Words: {stats.word_count}",
        f"Patterns: {stats.pattern_count}",
        f"Whitelisted phrases: {stats.whitelist_count}",
        f"Default level: {service.default_level.value}",
    ]
    for category in WordCategory:
        lines.append(f"  {category.display_name}: {stats.words_by_category[category]}")
    return lines


def format_test(service: MessageFilterService, message: str) -> list[str]:
    """Lines showing the message filtered at every level."""
    lines = [f"Message: {message}"]
    for level in FilterLevel:
        result = service.analyze(message, level)
        filtered = service.censor(result)
        lines.append(f"{level.value}: {filtered}")
        if result.has_matches:
            matches = ", ".join(
                f"{m.matched_text} ({m.category.value})" for m in result.matches
            )
            lines.append(f"  matches: {matches}")

    blocked = service.contains_slurs(message)
    lines.append(f"Slurs: {'YES (would be blocked)' if blocked else 'No'}")
    return lines


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Inspect chat filter word lists and test messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the filter settings YAML (default: config/filter.yml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("stats", help="Show loaded word list sizes")
    test_parser = subparsers.add_parser("test", help="Filter a message at every level")
    test_parser.add_argument("message", nargs="+", help="Message text")

    args = parser.parse_args()

    try:
        config = load_filter_config(args.config)
    except FilterConfigurationError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    configure_structlog(environment=config.environment)
    log = get_logger_for_service("filter_admin", component="cli")

    try:
        service = create_filter_service(config)
    except WordListSourceError as exc:
        log.error("word_list_load_failed", source=exc.source, reason=exc.reason)
        print(f"Error: {exc}")
        sys.exit(1)

    if args.command == "stats":
        lines = format_stats(service)
    else:
        lines = format_test(service, " ".join(args.message))

    print("\n".join(lines))


if __name__ == "__main__":
    main()
