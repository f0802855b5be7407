#!/usr/bin/env python3
"""
MedPulse - Content intelligence for a medical community.

Command-line entry point for the heuristic analysis tools:
  - Sentiment, summaries and readability reports for a piece of text
  - Knowledge-base insights for a query
  - Trending topics and re-ranked search over the data store
  - Karma stats for a user

Usage:
    python main.py analyze "Treatment was effective"
    python main.py summarize - < post.txt       # Read text from stdin
    python main.py report "Draft text..."
    python main.py insights "diabetes management"
    python main.py trending
    python main.py search "heart attack" --type posts
    python main.py karma USER_ID
    python main.py --show-config
"""

import argparse
import sys

from medpulse.config import print_config_summary, validate_config
from medpulse.models.post import CONTENT_TYPES
from medpulse.services import AIService, KarmaService
from medpulse.storage import StorageError


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="medpulse",
        description="Heuristic content intelligence for medical community posts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s analyze "The new treatment was effective"
  %(prog)s summarize - < post.txt      Summarize text read from stdin
  %(prog)s search "heart" --type posts Search posts only
  %(prog)s -v trending                 Trending topics with fallback warnings
        """,
    )

    # Output options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show fallback warnings and storage details",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    for name, help_text in (
        ("analyze", "Classify the sentiment of TEXT"),
        ("summarize", "Summarize TEXT and store the summary"),
        ("report", "Readability and tone report for TEXT"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("text", metavar="TEXT", help="Text to process, or - to read stdin")

    summarize = commands.choices["summarize"]
    summarize.add_argument(
        "--post-id",
        default="cli",
        help="Post the summary is stored under (default: cli)",
    )

    insights = commands.add_parser("insights", help="Knowledge-base insights for QUERY")
    insights.add_argument("query", metavar="QUERY")

    commands.add_parser("trending", help="Trending topics over the recent window")

    search = commands.add_parser("search", help="Search with medical re-ranking")
    search.add_argument("query", metavar="QUERY")
    search.add_argument(
        "--type", "-t",
        dest="content_type",
        choices=CONTENT_TYPES,
        default="all",
        help="Restrict results to one content type (default: all)",
    )

    karma = commands.add_parser("karma", help="Karma stats for USER_ID")
    karma.add_argument("user_id", metavar="USER_ID")

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("MedPulse Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def read_text(value: str) -> str:
    """Return the argument, or stdin when the argument is '-'."""
    if value == "-":
        return sys.stdin.read()
    return value


# =============================================================================
# Command Handlers
# =============================================================================

def run_analyze(args, service: AIService) -> int:
    result = service.analyze_content(read_text(args.text))
    print(f"Sentiment: {result.analysis.label} ({result.analysis.score:.2f})")
    if not result.success:
        print(f"⚠️  Not stored: {result.error}")
    return 0


def run_summarize(args, service: AIService) -> int:
    result = service.generate_summary(args.post_id, read_text(args.text))
    if not result.summary:
        print(f"❌ {result.error}")
        return 1

    print(result.summary)
    if not result.success:
        print(f"\n⚠️  Not stored: {result.error}")
    return 0


def run_report(args, service: AIService) -> int:
    report = service.content_report(read_text(args.text))
    print(f"Words:          {report.word_count}")
    print(f"Sentences:      {report.sentence_count}")
    print(f"Readability:    {report.readability:.1f} ({report.readability_level})")
    print(f"Medical terms:  {report.medical_terms_count}")
    print(f"Sentiment:      {report.sentiment.label} ({report.sentiment.score:.2f})")
    if report.suggestion:
        print(f"\nSuggestion: {report.suggestion}")
    return 0


def run_insights(args, service: AIService) -> int:
    insights = service.get_medical_insights(args.query)
    if not insights:
        print("No insights for this query.")
        return 0

    for insight in insights:
        print(f"{insight.condition} [{insight.evidence_level}, confidence {insight.confidence:.2f}]")
        print(f"  Treatments:   {', '.join(insight.treatments)}")
        print(f"  Interactions: {', '.join(insight.interactions)}")
    return 0


def run_trending(args, service: AIService) -> int:
    outcome = service.get_trending_topics()
    if outcome.used_fallback:
        print("⚠️  Showing demo topics (posts unavailable)")

    if not outcome.items:
        print("No trending topics.")
        return 0

    for rank, topic in enumerate(outcome.items, 1):
        print(
            f"{rank:>2}. {topic.topic:<20} {topic.mentions:>4} mentions  "
            f"{topic.sentiment:<8} +{topic.growth_rate:.0f}%"
        )
    return 0


def run_search(args, service: AIService) -> int:
    outcome = service.intelligent_search(args.query, args.content_type)
    if outcome.used_fallback:
        print("⚠️  Showing demo results (search unavailable)")

    if not outcome.items:
        print("No results.")
        return 0

    for result in outcome.items:
        print(f"[{result.ai_relevance_score:.2f}] {result.title} ({result.result_type})")
    return 0


def run_karma(args, service: KarmaService) -> int:
    try:
        stats = service.get_stats(args.user_id)
    except StorageError as e:
        print(f"❌ Could not load karma: {e}")
        return 1

    progress = stats.rank_progress
    print(f"User:      {args.user_id}")
    print(f"Karma:     {stats.total_karma}")
    print(f"Rank:      {stats.rank}")
    if progress.points_needed:
        print(f"Next:      {progress.next_rank} in {progress.points_needed} points ({progress.progress:.0f}%)")
    else:
        print(f"Next:      {progress.next_rank}")
    print(
        f"Breakdown: posts {stats.breakdown.post_karma}, "
        f"comments {stats.breakdown.comment_karma}, votes {stats.breakdown.vote_karma}"
    )
    return 0


AI_COMMANDS = {
    "analyze": run_analyze,
    "summarize": run_summarize,
    "report": run_report,
    "insights": run_insights,
    "trending": run_trending,
    "search": run_search,
}


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error, 130 = interrupted).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "karma":
            return run_karma(args, KarmaService(verbose=args.verbose or None))

        service = AIService(verbose=args.verbose or None)
        if args.verbose:
            print(f"Storage: {service.storage.name}\n")
        return AI_COMMANDS[args.command](args, service)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
