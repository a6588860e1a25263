"""Command-line interface package for the scorecard tooling."""

from .app import (
    ScorecardReport,
    build_parser,
    create_service,
    exit_status,
    main,
    render_human,
    run,
)

__all__ = [
    "ScorecardReport",
    "build_parser",
    "create_service",
    "exit_status",
    "main",
    "render_human",
    "run",
]
