"""
Command-line interface for CampaignLens.

Usage:
    campaignlens analyze campaign.json --known-fraud corpus.json --skip-ai

Author: Yobie Benjamin
Date: 2026-10-18
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from campaignlens.config.settings import get_settings
from campaignlens.core.types import FraudReport, Recommendation
from campaignlens.detector import CampaignFraudDetector
from campaignlens.utils.logging import configure_logging

EXIT_CODES = {
    Recommendation.APPROVE: 0,
    Recommendation.REVIEW: 1,
    Recommendation.REJECT: 2,
}
EXIT_ERROR = 3

RISK_COLORS = {
    "low": "green",
    "medium": "yellow",
    "high": "red",
    "critical": "bold red",
}


def _load_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def render_report(report: FraudReport, console: Console) -> None:
    """Print a report as rich tables."""
    color = RISK_COLORS.get(report.risk_level.value, "white")
    console.print(Panel(
        report.summary,
        title=f"Campaign {report.campaign_id}",
        border_style=color,
    ))

    verdict = Table(show_header=False)
    verdict.add_column("Field", style="cyan")
    verdict.add_column("Value")
    verdict.add_row("Risk score", f"{report.overall_risk_score}/100")
    verdict.add_row("Risk level", f"[{color}]{report.risk_level.value}[/{color}]")
    verdict.add_row("Recommendation", report.recommendation.value)
    verdict.add_row("Timestamp", report.timestamp)
    console.print(verdict)

    analysis = report.analysis
    if analysis.pattern_analysis.detected:
        patterns = Table(title="Scam patterns")
        patterns.add_column("Category", style="cyan")
        patterns.add_column("Severity")
        patterns.add_column("Matched text")
        for pattern in analysis.pattern_analysis.detected:
            patterns.add_row(pattern.category.value, pattern.severity.value, pattern.matched_text)
        console.print(patterns)

    if analysis.structure_validation.issues:
        issues = Table(title="Structural issues")
        issues.add_column("Type", style="cyan")
        issues.add_column("Severity")
        issues.add_column("Message")
        for issue in analysis.structure_validation.issues:
            issues.add_row(issue.type, issue.severity.value, issue.message)
        console.print(issues)

    if analysis.known_fraud_check.matches:
        matches = Table(title="Known fraud matches")
        matches.add_column("Entry", style="cyan")
        matches.add_column("Title %")
        matches.add_column("Description %")
        matches.add_column("Reason")
        for match in analysis.known_fraud_check.matches:
            matches.add_row(
                match.entry_id,
                match.title_similarity,
                match.description_similarity,
                match.reason,
            )
        console.print(matches)

    if analysis.ai_analysis.skipped:
        console.print(f"[dim]AI analysis skipped: {analysis.ai_analysis.reason}[/dim]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campaignlens",
        description="Fraud risk scoring for crowdfunding campaign submissions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a campaign JSON file")
    analyze.add_argument("campaign", type=Path, help="Path to campaign JSON")
    analyze.add_argument(
        "--known-fraud",
        type=Path,
        help="Path to JSON list of known fraudulent campaigns",
    )
    analyze.add_argument("--skip-ai", action="store_true", help="Skip AI analysis")
    analyze.add_argument(
        "--api-key",
        default=os.getenv("GEMINI_API_KEY"),
        help="Gemini API key (defaults to $GEMINI_API_KEY)",
    )
    analyze.add_argument("--json", action="store_true", help="Print the raw JSON report")
    analyze.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (defaults to configured level)",
    )
    return parser


async def run_analyze(args: argparse.Namespace, console: Console) -> int:
    settings = get_settings()
    observability = settings.observability
    if args.log_level:
        observability = observability.model_copy(update={"log_level": args.log_level})
    log = configure_logging(observability)

    campaign = _load_json(args.campaign)
    corpus = _load_json(args.known_fraud) if args.known_fraud else []
    log.debug(f"Loaded campaign from {args.campaign} with {len(corpus)} known fraud entries")

    detector = CampaignFraudDetector(settings=settings)
    report = await detector.detect(
        campaign,
        skip_ai=args.skip_ai,
        api_key=args.api_key,
        known_fraud_campaigns=corpus,
    )

    if args.json:
        console.print_json(json.dumps(report.to_dict()))
    else:
        render_report(report, console)

    if report.error:
        return EXIT_ERROR
    return EXIT_CODES[report.recommendation]


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the campaignlens console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    try:
        return asyncio.run(run_analyze(args, console))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read input:[/red] {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
