"""Structural validation of screenplay documents."""

from __future__ import annotations

from collections import Counter, defaultdict

from scriptsync.config import ScriptSyncSettings, get_logger, get_settings
from scriptsync.document import ScriptDocument
from scriptsync.models import (
    Element,
    ElementType,
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationReport,
    ValidationSummary,
)
from scriptsync.utils import ScreenplayUtils
from scriptsync.validators.report import calculate_confidence

logger = get_logger(__name__)

_SPEECH_TYPES = frozenset({ElementType.DIALOGUE, ElementType.PARENTHETICAL})


class DocumentValidator:
    """Walk a document and report structural problems as coded issues.

    Problems in the screenplay are never raised. Every rule appends
    ``ValidationIssue`` entries and the report is always produced.
    """

    def __init__(self, settings: ScriptSyncSettings | None = None) -> None:
        """Initialize the validator.

        Args:
            settings: Configuration settings (uses global settings if omitted)
        """
        self.settings = settings or get_settings()

    def validate(
        self, document: ScriptDocument, strict: bool = False
    ) -> ValidationReport:
        """Validate a document.

        Args:
            document: Document to check
            strict: Also apply the formatting rules for character cues and
                parentheticals

        Returns:
            Report with issues, counts, confidence and validity
        """
        ordered = sorted(document.elements, key=lambda el: el.sequence)

        issues: list[ValidationIssue] = []
        issues.extend(self._check_scene_headings(document))
        issues.extend(self._check_duplicate_headings(document))
        issues.extend(self._check_dangling_dialogue(ordered))
        issues.extend(self._check_shot_links(document))
        issues.extend(self._check_empty_actions(ordered))
        issues.extend(self._check_element_ids(document.elements))
        issues.extend(self._check_sequences(document))
        if strict:
            issues.extend(self._check_formatting(ordered))

        summary = ValidationSummary()
        for issue in issues:
            summary.add(issue.severity)

        total = len(document.elements)
        confidence = calculate_confidence(
            summary.errors, summary.warnings, total, self.settings
        )
        report = ValidationReport(
            valid=summary.errors == 0,
            confidence=confidence,
            summary=summary,
            issues=issues,
            total_elements=total,
        )

        logger.info(
            "Validated document",
            valid=report.valid,
            confidence=round(confidence, 3),
            errors=summary.errors,
            warnings=summary.warnings,
            info=summary.info,
            elements=total,
        )
        return report

    def _check_scene_headings(self, document: ScriptDocument) -> list[ValidationIssue]:
        """Report scenes whose heading is empty or whitespace-only."""
        issues = []
        for scene in document.scenes:
            if scene.heading.strip():
                continue
            heading_element = document.scene_heading_element(scene.id)
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.EMPTY_SCENE_HEADING,
                    message=f"Scene {scene.sequence} has an empty heading",
                    element_id=heading_element.id if heading_element else None,
                    suggestion="Add a heading such as 'INT. KITCHEN - DAY'",
                )
            )
        return issues

    def _check_duplicate_headings(
        self, document: ScriptDocument
    ) -> list[ValidationIssue]:
        """Report each normalized heading shared by two or more scenes."""
        scenes_by_heading = defaultdict(list)
        for scene in sorted(document.scenes, key=lambda s: s.sequence):
            heading = ScreenplayUtils.normalize_heading(scene.heading)
            if heading:
                scenes_by_heading[heading].append(scene)

        issues = []
        for heading, scenes in scenes_by_heading.items():
            if len(scenes) < 2:
                continue
            repeat = document.scene_heading_element(scenes[1].id)
            sequences = ", ".join(str(scene.sequence) for scene in scenes)
            issues.append(
                ValidationIssue(
                    severity=Severity.WARNING,
                    code=IssueCode.DUPLICATE_SCENE_HEADING,
                    message=f"Heading '{heading}' is used by scenes {sequences}",
                    element_id=repeat.id if repeat else None,
                    suggestion="Distinguish the scenes, e.g. with '- LATER'",
                )
            )
        return issues

    def _check_dangling_dialogue(
        self, ordered: list[Element]
    ) -> list[ValidationIssue]:
        """Report speech that has no character cue earlier in its scene."""
        issues = []
        scenes_with_cue: set[str] = set()
        for element in ordered:
            if element.type is ElementType.CHARACTER:
                scenes_with_cue.add(element.scene_id)
            elif (
                element.type in _SPEECH_TYPES
                and element.scene_id not in scenes_with_cue
            ):
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        code=IssueCode.DANGLING_DIALOGUE,
                        message=(
                            f"{element.type.value.capitalize()} at position "
                            f"{element.sequence} has no character cue before it"
                        ),
                        element_id=element.id,
                        suggestion="Add the speaking character's name above it",
                    )
                )
        return issues

    def _check_shot_links(self, document: ScriptDocument) -> list[ValidationIssue]:
        """Report shot links to missing elements or elements of other scenes."""
        scene_of = {el.id: el.scene_id for el in document.elements}
        issues = []
        for shot in sorted(document.shots, key=lambda s: (s.scene_id, s.sequence)):
            for element_id in sorted(shot.linked_element_ids):
                owner = scene_of.get(element_id)
                if owner == shot.scene_id:
                    continue
                if owner is None:
                    message = f"Shot {shot.id} links to missing element {element_id}"
                else:
                    message = (
                        f"Shot {shot.id} links to element {element_id} "
                        f"from another scene"
                    )
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.ORPHANED_SHOT_LINK,
                        message=message,
                        element_id=element_id,
                        suggestion="Remove the link or relink the shot",
                    )
                )
        return issues

    def _check_empty_actions(self, ordered: list[Element]) -> list[ValidationIssue]:
        """Flag empty action lines that follow real content."""
        issues = []
        for previous, element in zip(ordered, ordered[1:], strict=False):
            if (
                element.type is ElementType.ACTION
                and not element.content.strip()
                and previous.content.strip()
            ):
                issues.append(
                    ValidationIssue(
                        severity=Severity.INFO,
                        code=IssueCode.EMPTY_ACTION_BLOCK,
                        message=f"Empty action at position {element.sequence}",
                        element_id=element.id,
                        suggestion="Remove the empty action line",
                    )
                )
        return issues

    def _check_element_ids(self, elements: list[Element]) -> list[ValidationIssue]:
        counts = Counter(el.id for el in elements)
        return [
            ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.DUPLICATE_ELEMENT_ID,
                message=f"Element id {element_id} is used {count} times",
                element_id=element_id,
            )
            for element_id, count in counts.items()
            if count > 1
        ]

    def _check_sequences(self, document: ScriptDocument) -> list[ValidationIssue]:
        """Check that element order is strictly increasing and scenes are dense."""
        issues = []
        for previous, element in zip(
            document.elements, document.elements[1:], strict=False
        ):
            if element.sequence <= previous.sequence:
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.SEQUENCE_ORDER,
                        message=(
                            f"Element sequence {element.sequence} does not "
                            f"follow {previous.sequence}"
                        ),
                        element_id=element.id,
                        suggestion="Renumber elements in script order",
                    )
                )
                break

        sequences = sorted(scene.sequence for scene in document.scenes)
        if sequences != list(range(1, len(sequences) + 1)):
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.SEQUENCE_ORDER,
                    message=f"Scene sequences are not 1..{len(sequences)}",
                    suggestion="Renumber scenes without gaps",
                )
            )
        return issues

    def _check_formatting(self, ordered: list[Element]) -> list[ValidationIssue]:
        """Strict-mode formatting rules for cues and parentheticals."""
        issues = []
        for element in ordered:
            text = element.content.strip()
            if not text:
                continue
            if element.type is ElementType.CHARACTER and text != text.upper():
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        code=IssueCode.CHARACTER_NOT_UPPERCASE,
                        message=f"Character name '{text}' is not uppercase",
                        element_id=element.id,
                        suggestion=f"Use '{text.upper()}'",
                    )
                )
            elif (
                element.type is ElementType.PARENTHETICAL
                and not ScreenplayUtils.is_parenthetical(text)
            ):
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        code=IssueCode.PARENTHETICAL_FORMAT,
                        message=f"Parenthetical '{text}' is not in parentheses",
                        element_id=element.id,
                        suggestion=f"Use '({text.strip('()').strip()})'",
                    )
                )
        return issues
