"""Command-line interface implementation for the scorecard tooling."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from ..adapters import CheckExecutionError, ManifestLoaderError, ResourceCheck
from ..checks import CheckPackError, CheckPackManager
from ..models import CheckOutcome, Grade, ResourceRecord
from ..normalization import ManifestNormalizer
from ..scorecard import Scorecard
from ..service import ScoringResult, ScoringService

LOG_LEVEL_ENV = "KUBE_SCORECARD_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# SGR foreground codes keyed by GradeDisplay.color.
ANSI_COLORS = {
    "red": "\033[31m",
    "yellow": "\033[33m",
    "green": "\033[32m",
}
ANSI_RESET = "\033[0m"


@dataclass(slots=True)
class ScorecardReport:
    """Scored resources plus contextual metadata."""

    scorecard: Scorecard
    metadata: Mapping[str, Any]

    @property
    def lowest_grade(self) -> Grade | None:
        if not len(self.scorecard):
            return None
        return self.scorecard.lowest_grade()

    def counts_by_grade(self) -> dict[str, int]:
        return {grade.name: count for grade, count in self.scorecard.counts_by_grade().items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "summary": {
                "total_resources": len(self.scorecard),
                "lowest_grade": self.lowest_grade.name if self.lowest_grade else None,
                "counts": self.counts_by_grade(),
            },
            "resources": [_serialize_record(record) for record in self.scorecard],
        }


def _serialize_record(record: ResourceRecord) -> dict[str, Any]:
    grade = record.grade()
    return {
        "kind": record.kind,
        "api_version": record.api_version,
        "namespace": record.namespace,
        "name": record.name,
        "ref": record.human_friendly_ref(),
        "grade": grade.name,
        "grade_value": grade.value,
        "ignored_checks": sorted(record.ignored_checks),
        "checks": [_serialize_outcome(outcome) for outcome in record.outcomes],
    }


def _serialize_outcome(outcome: CheckOutcome) -> dict[str, Any]:
    check = outcome.check
    return {
        "id": check.id if check else None,
        "name": check.name if check else None,
        "grade": outcome.grade.name,
        "grade_value": outcome.grade.value,
        "remark": outcome.remark,
        "comments": [
            {
                "path": comment.path,
                "summary": comment.summary,
                "description": comment.description,
            }
            for comment in outcome.comments
        ],
    }


def _paint(text: str, grade: Grade, use_color: bool) -> str:
    if not use_color:
        return text
    return f"{ANSI_COLORS.get(grade.color, '')}{text}{ANSI_RESET}"


def render_human(report: ScorecardReport, *, use_color: bool = False, show_ok: bool = False) -> str:
    """Render scored resources as indented text for terminal output."""

    if not len(report.scorecard):
        return "No resources found."

    lines: list[str] = []
    for record in report.scorecard:
        grade = record.grade()
        lines.append(f"{record.human_friendly_ref()} {_paint(grade.glyph, grade, use_color)}")

        for outcome in record.outcomes:
            if outcome.grade is Grade.ALL_OK and not show_ok:
                continue

            check_name = ""
            if outcome.check:
                check_name = outcome.check.name or outcome.check.id
            label = _paint(f"[{outcome.grade.label}]", outcome.grade, use_color)
            lines.append(f"    {label} {check_name}".rstrip())

            if outcome.remark:
                lines.append(f"        {outcome.remark}")
            for comment in outcome.comments:
                if comment.path:
                    lines.append(f"        · {comment.path} -> {comment.summary}")
                else:
                    lines.append(f"        · {comment.summary}")
                if comment.description:
                    lines.append(f"            {comment.description}")

    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="kube-scorecard", description="Kubernetes manifest scorecard CLI"
    )
    subparsers = parser.add_subparsers(dest="command")

    score_parser = subparsers.add_parser(
        "score", help="Score Kubernetes manifests and report graded resources."
    )
    score_parser.add_argument(
        "paths",
        nargs="+",
        help="Manifest files or directories to score. Use '-' to read from stdin.",
    )
    score_parser.add_argument(
        "--check-manifest",
        dest="check_manifests",
        action="append",
        default=None,
        help="Path to a check pack manifest YAML/JSON file describing the checks to run.",
    )
    score_parser.add_argument(
        "--ignore-test",
        dest="ignored_checks",
        action="append",
        default=None,
        metavar="CHECK_ID",
        help="Disable a check for every resource (repeatable).",
    )
    score_parser.add_argument(
        "--enable-optional-test",
        dest="enabled_optional",
        action="append",
        default=None,
        metavar="CHECK_ID",
        help="Enable an optional check (repeatable).",
    )
    score_parser.add_argument(
        "--output-format",
        choices=["human", "json"],
        default="human",
        help="Output format for scoring results.",
    )
    score_parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize human output.",
    )
    score_parser.add_argument(
        "--show-ok",
        action="store_true",
        help="Include passing checks in human output.",
    )
    score_parser.add_argument(
        "--exit-one-on-warning",
        action="store_true",
        help="Exit with status 1 when any check is graded WARNING or worse.",
    )
    score_parser.add_argument(
        "--fail-threshold",
        type=Grade.parse,
        default=None,
        metavar="GRADE",
        help=(
            "Exit with status 1 when any check is graded at or below GRADE "
            "(critical, warning, almost_ok, ok). Overrides --exit-one-on-warning."
        ),
    )
    score_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of threads used to evaluate resources.",
    )
    score_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Logging level (defaults to ${LOG_LEVEL_ENV} or WARNING).",
    )

    return parser


def create_service(*, checks: Sequence[ResourceCheck] | None = None) -> ScoringService:
    """Create a scoring service wired with the manifest and check pack adapters."""

    return ScoringService(
        normalizer=ManifestNormalizer(),
        pack_manager=CheckPackManager(),
        checks=checks,
    )


def resolve_log_level(level: str | None) -> str:
    """Pick the flag value, then $KUBE_SCORECARD_LOG_LEVEL, ignoring unknown names."""

    for candidate in (level, os.getenv(LOG_LEVEL_ENV)):
        if candidate and candidate.strip().upper() in LOG_LEVELS:
            return candidate.strip().upper()
    return "WARNING"


def configure_logging(level: str | None) -> None:
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _use_color(mode: str, stream: TextIO) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _format_report(
    report: ScorecardReport,
    *,
    output_format: str,
    use_color: bool = False,
    show_ok: bool = False,
) -> str:
    if output_format not in {"human", "json"}:
        raise ValueError("format must be either 'human' or 'json'")

    if output_format == "json":
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    return render_human(report, use_color=use_color, show_ok=show_ok)


def exit_status(
    scorecard: Scorecard,
    *,
    exit_one_on_warning: bool = False,
    threshold: Grade | None = None,
) -> int:
    if threshold is None:
        threshold = Grade.WARNING if exit_one_on_warning else Grade.CRITICAL
    return 1 if scorecard.any_at_or_below(threshold) else 0


def _handle_score(args: argparse.Namespace) -> int:
    if args.workers < 1:
        print("Error: --workers must be at least 1")
        return 2

    service = create_service()

    try:
        result: ScoringResult = service.score(
            args.paths,
            check_manifests=[Path(path) for path in args.check_manifests or []],
            ignored_checks=args.ignored_checks,
            enabled_optional=args.enabled_optional,
            max_workers=args.workers,
        )
    except (ManifestLoaderError, CheckPackError, CheckExecutionError) as exc:
        print(f"Error: {exc}")
        return 2

    report = ScorecardReport(scorecard=result.scorecard, metadata=result.metadata)
    output = _format_report(
        report,
        output_format=args.output_format,
        use_color=_use_color(args.color, sys.stdout),
        show_ok=args.show_ok,
    )

    print(output)
    return exit_status(
        result.scorecard,
        exit_one_on_warning=args.exit_one_on_warning,
        threshold=args.fail_threshold,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "score":
        configure_logging(args.log_level)
        return _handle_score(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
