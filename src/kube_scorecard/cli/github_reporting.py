"""Helpers for publishing scorecard reports to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, Mapping, MutableMapping, Sequence

GRADE_ORDER = ["CRITICAL", "WARNING", "ALMOST_OK", "ALL_OK"]
GRADE_TITLES = {
    "CRITICAL": "Critical",
    "WARNING": "Warning",
    "ALMOST_OK": "Almost OK",
    "ALL_OK": "OK",
}
ANNOTATION_LEVELS = {
    "CRITICAL": "error",
    "WARNING": "warning",
    "ALMOST_OK": "notice",
}


def _normalize_counts(raw_counts: Mapping[str, int] | None) -> MutableMapping[str, int]:
    counts: MutableMapping[str, int] = {grade: 0 for grade in GRADE_ORDER}
    for grade, value in (raw_counts or {}).items():
        grade_key = str(grade).upper()
        if grade_key in counts:
            counts[grade_key] = int(value)
    return counts


def _title(grade: object) -> str:
    return GRADE_TITLES.get(str(grade).upper(), str(grade).title())


def format_summary(report: Mapping[str, object]) -> str:
    """Render a Markdown job summary for the provided report."""

    summary: Mapping[str, object] = report.get("summary") or {}
    metadata: Mapping[str, object] = report.get("metadata") or {}
    resources: Sequence[Mapping[str, object]] = report.get("resources") or []

    total_resources = int(summary.get("total_resources", 0))
    lowest = summary.get("lowest_grade")
    lowest_display = _title(lowest) if lowest else "None"

    counts = _normalize_counts(summary.get("counts"))

    lines: list[str] = [
        "# Kubernetes Scorecard",
        "",
        f"**Resources scored:** {total_resources}",
        f"**Lowest grade:** {lowest_display}",
        "",
        "| Grade | Resources |",
        "| --- | ---: |",
    ]

    for grade in GRADE_ORDER:
        lines.append(f"| {GRADE_TITLES[grade]} | {counts[grade]} |")

    if metadata:
        lines.extend(["", "## Metadata", ""])
        for key in sorted(metadata):
            lines.append(f"- **{key}:** {metadata[key]}")

    failing = [resource for resource in resources if resource.get("grade") != "ALL_OK"]
    if failing:
        lines.extend(["", "## Resources", ""])
        display_limit = 10
        for resource in failing[:display_limit]:
            ref = str(resource.get("ref", "")).strip()
            bullet = f"- **{_title(resource.get('grade', ''))}** `{ref}`"
            failed_checks = [
                str(check.get("id"))
                for check in resource.get("checks") or []
                if check.get("grade") != "ALL_OK" and check.get("id")
            ]
            if failed_checks:
                bullet += " - " + ", ".join(failed_checks)
            lines.append(bullet)

        remaining = len(failing) - display_limit
        if remaining > 0:
            lines.append(f"- ...and {remaining} more resources.")

    lines.append("")
    return "\n".join(lines)


def iter_annotations(report: Mapping[str, object]) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for failing checks."""

    resources: Sequence[Mapping[str, object]] = report.get("resources") or []
    for resource in resources:
        ref = str(resource.get("ref", "")).strip()
        for check in resource.get("checks") or []:
            grade = str(check.get("grade", "")).upper()
            level = ANNOTATION_LEVELS.get(grade)
            if level is None:
                continue

            check_id = str(check.get("id") or "").strip()
            title = " - ".join(part for part in (_title(grade), check_id) if part)

            body_parts: list[str] = []
            remark = str(check.get("remark") or "").strip()
            if remark:
                body_parts.append(remark)
            for comment in check.get("comments") or []:
                summary = str(comment.get("summary") or "").strip()
                path = str(comment.get("path") or "").strip()
                if summary:
                    body_parts.append(f"{path}: {summary}" if path else summary)
            if ref:
                body_parts.append(f"Resource: {ref}")
            if not body_parts:
                body_parts.append("Check reported without details.")

            body = "; ".join(body_parts)
            body = body.replace("%", "%25").replace("\r", "").replace("\n", "%0A")

            yield f"::{level} title={title}::{body}"


def _load_report(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse report JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Report JSON must be an object.")
    return data


def _write_summary(report: Mapping[str, object], destination: Path | None) -> None:
    if destination is None:
        return

    content = format_summary(report)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish a scorecard report as GitHub job summary and annotations."
    )
    parser.add_argument("report", type=Path, help="Path to the scorecard report JSON file.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )

    args = parser.parse_args(argv)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    report = _load_report(args.report)

    _write_summary(report, summary_path)

    for command in iter_annotations(report):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
