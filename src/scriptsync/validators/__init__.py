"""Validation modules for ScriptSync."""

from __future__ import annotations

from scriptsync.validators.autofix import (
    AutoFixReport,
    AutoFixResult,
    auto_fix_element,
    auto_fix_elements,
)
from scriptsync.validators.document_validator import DocumentValidator
from scriptsync.validators.report import (
    calculate_confidence,
    format_report_summary,
    format_report_table,
    get_confidence_level,
    group_issues_by_severity,
    require_exportable,
    should_block_export,
)

__all__ = [
    "AutoFixReport",
    "AutoFixResult",
    "DocumentValidator",
    "auto_fix_element",
    "auto_fix_elements",
    "calculate_confidence",
    "format_report_summary",
    "format_report_table",
    "get_confidence_level",
    "group_issues_by_severity",
    "require_exportable",
    "should_block_export",
]
