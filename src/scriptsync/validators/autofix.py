"""Automatic correction of unambiguous formatting problems.

Auto-fix is an explicit caller action. It returns corrected copies and never
touches a document on its own; callers decide whether to apply the result.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from scriptsync.config import get_logger
from scriptsync.models import Element, ElementType, resequence

logger = get_logger(__name__)

_LONG_PREFIXES = (
    (re.compile(r"^INTERIOR(?:\.|\s)\s*", re.IGNORECASE), "INT. "),
    (re.compile(r"^EXTERIOR(?:\.|\s)\s*", re.IGNORECASE), "EXT. "),
)


@dataclass
class AutoFixResult:
    """Outcome of fixing a single element."""

    fixed: Element
    changes: list[str] = field(default_factory=list)
    remove: bool = False

    @property
    def changed(self) -> bool:
        """Whether any fix was applied."""
        return bool(self.changes)


@dataclass
class AutoFixReport:
    """Outcome of fixing a run of elements."""

    elements: list[Element] = field(default_factory=list)
    changes: dict[str, list[str]] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)

    @property
    def total_fixed(self) -> int:
        """Number of kept elements that were changed."""
        return len(self.changes)


def auto_fix_element(element: Element) -> AutoFixResult:
    """Fix one element.

    Args:
        element: Element to fix; it is not modified

    Returns:
        Fixed copy with the list of changes. Empty elements other than
        scene headings are marked for removal.
    """
    content = element.content
    changes: list[str] = []

    if element.type is ElementType.CHARACTER and content != content.upper():
        content = content.upper()
        changes.append("Converted character name to uppercase")

    if element.type is ElementType.PARENTHETICAL and content.strip():
        stripped = content.strip()
        if not (stripped.startswith("(") and stripped.endswith(")")):
            content = f"({stripped.strip('()').strip()})"
            changes.append("Added parentheses to parenthetical")

    trimmed = content.strip()
    if trimmed != content and trimmed:
        content = trimmed
        changes.append("Trimmed extra whitespace")

    if element.type is ElementType.SCENE_HEADING:
        heading = content
        for pattern, replacement in _LONG_PREFIXES:
            heading = pattern.sub(replacement, heading, count=1)
        if heading != content:
            content = heading
            changes.append("Standardized scene heading format")

    # Empty headings define a scene and are left for the validator to report
    remove = not content.strip() and element.type is not ElementType.SCENE_HEADING
    if remove:
        changes.append("Marked empty element for removal")

    fixed = element.model_copy(update={"content": content}) if changes else element
    return AutoFixResult(fixed=fixed, changes=changes, remove=remove)


def auto_fix_elements(elements: Sequence[Element]) -> AutoFixReport:
    """Fix a run of elements in script order.

    Elements marked for removal are dropped and the rest are renumbered
    ``1..N``.

    Args:
        elements: Elements in script order

    Returns:
        Fixed elements with per-element change lists and removed ids
    """
    report = AutoFixReport()
    kept: list[Element] = []

    for element in elements:
        result = auto_fix_element(element)
        if result.remove:
            report.removed.append(element.id)
            continue
        kept.append(result.fixed)
        if result.changed:
            report.changes[element.id] = result.changes

    report.elements = resequence(kept)
    logger.debug(
        "Auto-fixed elements",
        fixed=report.total_fixed,
        removed=len(report.removed),
    )
    return report
