"""ScriptSync Data Models.

This module defines the typed document model produced by the parser and
consumed by the document, sync and validation layers: screenplay elements,
the scenes that own them, planning shots that link to them, and the
validation report that gates export.

Attribute names are snake_case in Python. The JSON form uses the stable
camelCase field names (``sceneId``, ``syncStatus``, ``locationId`` ...);
both spellings are accepted on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
)
from pydantic.alias_generators import to_camel

# Owner of elements while a parse is still running; never valid in a document
UNASSIGNED_SCENE_ID = "__unassigned__"


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid4())


class ElementType(str, Enum):
    """Screenplay element types."""

    SCENE_HEADING = "scene_heading"
    ACTION = "action"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"


class SyncStatus(str, Enum):
    """Reconciliation state of a scene relative to the latest parse."""

    SYNCED = "synced"  # Present in the script and in the planning data
    PENDING = "pending"  # New from script, not yet seen by planning
    ORPHANED = "orphaned"  # Deleted from script, planning data still exists
    VISUAL_ONLY = "visual_only"  # Created by planning, no script content


class Severity(str, Enum):
    """Severity of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(str, Enum):
    """Stable machine-readable validation issue codes."""

    EMPTY_SCENE_HEADING = "EMPTY_SCENE_HEADING"
    DUPLICATE_SCENE_HEADING = "DUPLICATE_SCENE_HEADING"
    DANGLING_DIALOGUE = "DANGLING_DIALOGUE"
    ORPHANED_SHOT_LINK = "ORPHANED_SHOT_LINK"
    EMPTY_ACTION_BLOCK = "EMPTY_ACTION_BLOCK"
    DUPLICATE_ELEMENT_ID = "DUPLICATE_ELEMENT_ID"
    SEQUENCE_ORDER = "SEQUENCE_ORDER"
    CHARACTER_NOT_UPPERCASE = "CHARACTER_NOT_UPPERCASE"
    PARENTHETICAL_FORMAT = "PARENTHETICAL_FORMAT"


class ConfidenceLevel(str, Enum):
    """Quality band of a confidence score."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    ACCEPTABLE = "ACCEPTABLE"
    POOR = "POOR"
    FAILED = "FAILED"

    @classmethod
    def from_score(cls, confidence: float) -> ConfidenceLevel:
        """Map a confidence score onto its quality band."""
        for level, threshold in CONFIDENCE_THRESHOLDS:
            if confidence >= threshold:
                return level
        return cls.FAILED


# Lower bound of each band, best first
CONFIDENCE_THRESHOLDS: tuple[tuple[ConfidenceLevel, float], ...] = (
    (ConfidenceLevel.EXCELLENT, 1.0),
    (ConfidenceLevel.GOOD, 0.9),
    (ConfidenceLevel.ACCEPTABLE, 0.7),
    (ConfidenceLevel.POOR, 0.5),
)


class WireModel(BaseModel):
    """Base class for models with a camelCase JSON form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible dictionary form."""
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self) -> str:
        """Return the JSON string form."""
        return self.model_dump_json(by_alias=True)


class Element(WireModel):
    """One classified unit of screenplay text."""

    id: str = Field(default_factory=new_id)
    type: ElementType
    content: str = ""
    scene_id: str = UNASSIGNED_SCENE_ID
    sequence: int = Field(default=0, ge=0)


class Scene(WireModel):
    """A contiguous run of elements that starts at a scene heading."""

    id: str = Field(default_factory=new_id)
    sequence: int = Field(default=1, ge=1)
    heading: str = ""
    location_id: str | None = None
    sync_status: SyncStatus = SyncStatus.PENDING
    metadata: dict[str, Any] = Field(default_factory=dict)


class Shot(WireModel):
    """A planning-only unit that may reference elements of its scene."""

    id: str = Field(default_factory=new_id)
    scene_id: str
    sequence: int = Field(default=1, ge=1)
    linked_element_ids: set[str] = Field(default_factory=set)

    @field_serializer("linked_element_ids")
    def _serialize_links(self, value: set[str]) -> list[str]:
        return sorted(value)


class ParseResult(WireModel):
    """Scenes and elements produced by one parse pass."""

    elements: list[Element] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)

    def elements_for(self, scene_id: str) -> list[Element]:
        """Get the elements owned by a scene, in script order."""
        return [el for el in self.elements if el.scene_id == scene_id]

    def scene_for(self, element: Element) -> Scene | None:
        """Get the scene that owns an element."""
        return next((s for s in self.scenes if s.id == element.scene_id), None)


SequencedT = TypeVar("SequencedT", Element, Scene)


def resequence(items: list[SequencedT]) -> list[SequencedT]:
    """Number scenes or elements 1..N in list order.

    Items whose sequence changes are copied; the input list is not modified.
    """
    renumbered = []
    for position, item in enumerate(items, start=1):
        if item.sequence != position:
            item = item.model_copy(update={"sequence": position})
        renumbered.append(item)
    return renumbered


class ValidationIssue(WireModel):
    """Individual validation issue."""

    severity: Severity
    code: IssueCode
    message: str
    element_id: str | None = None
    suggestion: str | None = None


class ValidationSummary(WireModel):
    """Issue counts by severity."""

    errors: int = 0
    warnings: int = 0
    info: int = 0

    def add(self, severity: Severity) -> None:
        """Count one more issue of the given severity."""
        if severity is Severity.ERROR:
            self.errors += 1
        elif severity is Severity.WARNING:
            self.warnings += 1
        else:
            self.info += 1


class ValidationReport(WireModel):
    """Overall validation result for a document."""

    valid: bool = True
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)
    issues: list[ValidationIssue] = Field(default_factory=list)
    total_elements: int = 0

    @computed_field(alias="confidenceLevel")  # type: ignore[prop-decorator]
    @property
    def confidence_level(self) -> ConfidenceLevel:
        """Quality band of the confidence score."""
        return ConfidenceLevel.from_score(self.confidence)

    def issues_with_code(self, code: IssueCode) -> list[ValidationIssue]:
        """Get all issues carrying a given code."""
        return [issue for issue in self.issues if issue.code == code]


__all__ = [
    "CONFIDENCE_THRESHOLDS",
    "UNASSIGNED_SCENE_ID",
    "ConfidenceLevel",
    "Element",
    "ElementType",
    "IssueCode",
    "ParseResult",
    "Scene",
    "Severity",
    "Shot",
    "SyncStatus",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSummary",
    "WireModel",
    "new_id",
    "resequence",
]
