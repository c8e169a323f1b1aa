"""Common type definitions and aliases for ScriptSync."""

from typing import Literal, TypeAlias, TypedDict

ElementID: TypeAlias = str
SceneID: TypeAlias = str
ShotID: TypeAlias = str
LocationID: TypeAlias = str
Direction: TypeAlias = Literal[-1, 1, "up", "down"]


# JSON wire shapes, as produced by ``model_dump(by_alias=True, mode="json")``
class ElementDict(TypedDict):
    """Serialized element."""

    id: ElementID
    type: str
    content: str
    sceneId: SceneID
    sequence: int


class SceneDict(TypedDict, total=False):
    """Serialized scene."""

    id: SceneID
    sequence: int
    heading: str
    locationId: LocationID | None
    syncStatus: str
    metadata: dict[str, object]


class IssueDict(TypedDict, total=False):
    """Serialized validation issue."""

    severity: str
    code: str
    message: str
    elementId: ElementID | None
    suggestion: str | None


class SyncStats(TypedDict):
    """Counts produced by one reconciliation pass."""

    synced: int
    pending: int
    orphaned: int
    visual_only: int
    renamed: int
