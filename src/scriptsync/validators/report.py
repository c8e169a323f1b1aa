"""Confidence scoring and report helpers for the export gate."""

from __future__ import annotations

import io

from rich.console import Console
from rich.table import Table
from rich.text import Text

from scriptsync.config import ScriptSyncSettings, get_settings
from scriptsync.exceptions import ExportBlockedError
from scriptsync.models import (
    ConfidenceLevel,
    Severity,
    ValidationIssue,
    ValidationReport,
)

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

CONFIDENCE_DESCRIPTIONS: dict[ConfidenceLevel, str] = {
    ConfidenceLevel.EXCELLENT: "Ready for production - no issues found",
    ConfidenceLevel.GOOD: "Good quality - minor formatting suggestions",
    ConfidenceLevel.ACCEPTABLE: "Acceptable - review warnings before proceeding",
    ConfidenceLevel.POOR: "Needs work - multiple issues detected",
    ConfidenceLevel.FAILED: "Import failed - too many errors to use safely",
}


def calculate_confidence(
    errors: int,
    warnings: int,
    total_elements: int,
    settings: ScriptSyncSettings | None = None,
) -> float:
    """Score document health between 0 and 1.

    Errors and warnings are weighted and the penalty is diluted by document
    size, so the same error count costs a long script less than a short one.
    Info issues never count. The score never rises as errors or warnings
    are added.

    Args:
        errors: Number of error issues
        warnings: Number of warning issues
        total_elements: Number of elements in the document
        settings: Configuration settings (uses global settings if omitted)

    Returns:
        Confidence score clamped to ``[0, 1]``
    """
    settings = settings or get_settings()
    penalty = (
        errors * settings.validator_error_weight
        + warnings * settings.validator_warning_weight
    )
    scale = max(1.0, total_elements / settings.validator_element_scale)
    return min(1.0, max(0.0, 1.0 - penalty / scale))


def get_confidence_level(confidence: float) -> ConfidenceLevel:
    """Get the quality band of a confidence score."""
    return ConfidenceLevel.from_score(confidence)


def format_report_summary(report: ValidationReport) -> str:
    """Format a one-line, human readable summary of a report.

    Args:
        report: Validation report

    Returns:
        Summary such as ``"Import quality: 85% - 1 error(s), 0 warning(s). ..."``
    """
    level = get_confidence_level(report.confidence)
    percentage = f"{report.confidence * 100:.0f}%"
    description = CONFIDENCE_DESCRIPTIONS[level]
    summary = report.summary

    if summary.errors > 0:
        return (
            f"Import quality: {percentage} - {summary.errors} error(s), "
            f"{summary.warnings} warning(s). {description}"
        )
    if summary.warnings > 0:
        return (
            f"Import quality: {percentage} - {summary.warnings} warning(s). "
            f"{description}"
        )
    return f"Import quality: {percentage} - {description}"


def group_issues_by_severity(
    report: ValidationReport,
) -> dict[Severity, list[ValidationIssue]]:
    """Split report issues by severity, keeping report order in each group."""
    groups: dict[Severity, list[ValidationIssue]] = {
        severity: [] for severity in Severity
    }
    for issue in report.issues:
        groups[issue.severity].append(issue)
    return groups


def should_block_export(report: ValidationReport, override: bool = False) -> bool:
    """Check whether a report blocks export.

    Args:
        report: Validation report
        override: Caller explicitly accepts the errors

    Returns:
        True if the report is invalid and not overridden
    """
    return not report.valid and not override


def require_exportable(report: ValidationReport, override: bool = False) -> None:
    """Raise unless a report allows export.

    Raises:
        ExportBlockedError: If the report blocks export
    """
    if should_block_export(report, override=override):
        raise ExportBlockedError(
            errors=report.summary.errors,
            confidence=report.confidence,
        )


def format_report_table(report: ValidationReport, width: int = 100) -> str:
    """Render report issues as a Rich table.

    Args:
        report: Validation report
        width: Console width used for rendering

    Returns:
        Rendered table followed by the one-line summary
    """
    table = Table(
        title=f"Validation ({get_confidence_level(report.confidence).value})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Severity")
    table.add_column("Code", no_wrap=True)
    table.add_column("Element")
    table.add_column("Message")
    table.add_column("Suggestion")

    for issue in report.issues:
        table.add_row(
            Text(issue.severity.value, style=SEVERITY_STYLES[issue.severity]),
            issue.code.value,
            Text(issue.element_id or ""),
            Text(issue.message),
            Text(issue.suggestion or ""),
        )

    string_io = io.StringIO()
    console = Console(file=string_io, width=width, force_terminal=False)
    console.print(table)
    console.print(Text(format_report_summary(report)), soft_wrap=True)
    return string_io.getvalue()
