"""Document Model.

This module provides the canonical in-memory screenplay document: scenes,
their elements and the planning shots that reference them. Every mutation
builds the new scene and element lists first and swaps them in together,
so a caller never sees duplicate or gapped sequence numbers.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from scriptsync.config import get_logger
from scriptsync.exceptions import DocumentError
from scriptsync.models import (
    UNASSIGNED_SCENE_ID,
    Element,
    ElementType,
    ParseResult,
    Scene,
    Shot,
    SyncStatus,
    WireModel,
    resequence,
)
from scriptsync.types import Direction
from scriptsync.utils import ScreenplayUtils

logger = get_logger(__name__)

_DIRECTIONS: dict[Any, int] = {-1: -1, 1: 1, "up": -1, "down": 1}


class ScriptDocument(WireModel):
    """Scenes, elements and shots with invariant-preserving mutations."""

    scenes: list[Scene] = Field(default_factory=list)
    elements: list[Element] = Field(default_factory=list)
    shots: list[Shot] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> ScriptDocument:
        """Reject documents whose references point nowhere."""
        scene_ids = [scene.id for scene in self.scenes]
        known = set(scene_ids)
        if len(known) != len(scene_ids):
            raise DocumentError(
                message="Scene ids must be unique",
                hint="Each scene needs its own id",
                details={"scenes": len(scene_ids), "unique_ids": len(known)},
            )

        for element in self.elements:
            if element.scene_id == UNASSIGNED_SCENE_ID:
                raise DocumentError(
                    message=f"Element {element.id} has no owning scene",
                    hint="Assign elements to a scene before building a document",
                    details={"element_id": element.id},
                )
            if element.scene_id not in known:
                raise DocumentError(
                    message=f"Element {element.id} references unknown scene",
                    details={"element_id": element.id, "scene_id": element.scene_id},
                )

        for shot in self.shots:
            if shot.scene_id not in known:
                raise DocumentError(
                    message=f"Shot {shot.id} references unknown scene",
                    hint="Shots must belong to a scene present in the document",
                    details={"shot_id": shot.id, "scene_id": shot.scene_id},
                )
        return self

    @classmethod
    def from_parse(
        cls, result: ParseResult, shots: list[Shot] | None = None
    ) -> ScriptDocument:
        """Build a document from a parse (or reconciliation) result.

        Args:
            result: Parsed scenes and elements
            shots: Planning shots owned by the caller

        Returns:
            New document
        """
        return cls(
            scenes=list(result.scenes),
            elements=list(result.elements),
            shots=list(shots or []),
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> ScriptDocument:
        """Load a document from its JSON form."""
        return cls.model_validate_json(data)

    # Reads

    def get_scene(self, scene_id: str) -> Scene | None:
        """Get a scene by id."""
        return next((s for s in self.scenes if s.id == scene_id), None)

    def get_element(self, element_id: str) -> Element | None:
        """Get an element by id."""
        return next((el for el in self.elements if el.id == element_id), None)

    def get_elements_by_scene(self, scene_id: str) -> list[Element]:
        """Get the elements of a scene in script order.

        Raises:
            DocumentError: If the scene does not exist
        """
        self._require_scene(scene_id)
        return [el for el in self._ordered_elements() if el.scene_id == scene_id]

    def get_elements_in_range(self, start: int, end: int) -> list[Element]:
        """Get elements whose sequence lies in ``start..end`` (inclusive).

        Raises:
            DocumentError: If the range is inverted
        """
        if start > end:
            raise DocumentError(
                message=f"Invalid sequence range {start}..{end}",
                hint="The start of the range must not exceed its end",
            )
        return [el for el in self._ordered_elements() if start <= el.sequence <= end]

    def get_shots_for_scene(self, scene_id: str) -> list[Shot]:
        """Get the shots planned for a scene, by shot sequence."""
        self._require_scene(scene_id)
        return sorted(
            (shot for shot in self.shots if shot.scene_id == scene_id),
            key=lambda shot: shot.sequence,
        )

    def scene_heading_element(self, scene_id: str) -> Element | None:
        """Get the scene-heading element that opens a scene, if any."""
        return next(
            (
                el
                for el in self._ordered_elements()
                if el.scene_id == scene_id and el.type is ElementType.SCENE_HEADING
            ),
            None,
        )

    # Mutations

    def insert_element(self, after_id: str, element: Element) -> Element:
        """Insert an element directly after another one.

        The new element joins the scene of the element it follows.

        Args:
            after_id: Id of the element to insert after
            element: Element to insert (its scene and sequence are assigned)

        Returns:
            The inserted element as stored

        Raises:
            DocumentError: If the anchor is unknown, the id is taken, or the
                element is a scene heading
        """
        anchor = self._require_element(after_id)
        if element.type is ElementType.SCENE_HEADING:
            raise DocumentError(
                message="Scene headings cannot be inserted directly",
                hint="Add the heading to the script text and re-parse",
                details={"element_id": element.id},
            )
        if self.get_element(element.id) is not None:
            raise DocumentError(
                message=f"Element id {element.id} is already in use",
                details={"element_id": element.id},
            )

        ordered = self._ordered_elements()
        position = next(i for i, el in enumerate(ordered) if el.id == anchor.id)
        ordered.insert(
            position + 1, element.model_copy(update={"scene_id": anchor.scene_id})
        )

        self.elements = resequence(ordered)
        inserted = self.elements[position + 1]
        logger.debug(
            "Inserted element",
            element_id=inserted.id,
            after_id=after_id,
            sequence=inserted.sequence,
        )
        return inserted

    def remove_element(self, element_id: str) -> Element:
        """Remove an element and close the sequence gap.

        Shot links to the element are left alone; they show up as
        ``ORPHANED_SHOT_LINK`` until the caller cleans them up.

        Raises:
            DocumentError: If the element is unknown or is a scene heading
        """
        element = self._require_element(element_id)
        if element.type is ElementType.SCENE_HEADING:
            raise DocumentError(
                message="Scene heading elements cannot be removed",
                hint="Delete the scene from the script text and re-parse",
                details={"element_id": element_id, "scene_id": element.scene_id},
            )

        self.elements = resequence(
            [el for el in self._ordered_elements() if el.id != element_id]
        )
        logger.debug("Removed element", element_id=element_id)
        return element

    def move_scene(self, index: int, direction: Direction) -> list[Scene]:
        """Swap the scene at ``index`` with its neighbour.

        Scene sequences are renumbered and the element stream is reordered so
        script order keeps following scene order.

        Args:
            index: Zero-based position of the scene in sequence order
            direction: ``-1``/``"up"`` or ``1``/``"down"``

        Returns:
            Scenes in their new order

        Raises:
            DocumentError: If the index, direction or target is out of range
        """
        step = (
            _DIRECTIONS.get(direction) if isinstance(direction, int | str) else None
        )
        if step is None:
            raise DocumentError(
                message=f"Invalid move direction: {direction!r}",
                hint="Use -1, 1, 'up' or 'down'",
            )

        ordered = sorted(self.scenes, key=lambda scene: scene.sequence)
        target = index + step
        if not 0 <= index < len(ordered) or not 0 <= target < len(ordered):
            raise DocumentError(
                message=f"Cannot move scene at index {index} {direction!r}",
                details={"index": index, "scenes": len(ordered)},
            )

        ordered[index], ordered[target] = ordered[target], ordered[index]
        scenes = resequence(ordered)

        by_scene: dict[str, list[Element]] = {scene.id: [] for scene in scenes}
        for element in self._ordered_elements():
            by_scene[element.scene_id].append(element)
        elements = resequence([el for scene in scenes for el in by_scene[scene.id]])

        self.scenes = scenes
        self.elements = elements
        logger.debug("Moved scene", scene_id=scenes[target].id, to_index=target)
        return list(self.scenes)

    def update_scene_heading(self, scene_id: str, text: str) -> Scene:
        """Change a scene heading.

        For a synced scene the scene-heading element is rewritten in the same
        step, so the scene and its script line never disagree.

        Args:
            scene_id: Id of the scene
            text: New heading text (normalized to uppercase)

        Returns:
            The updated scene

        Raises:
            DocumentError: If the scene is unknown
        """
        scene = self._require_scene(scene_id)
        heading = ScreenplayUtils.normalize_heading(text)
        updated = scene.model_copy(update={"heading": heading})

        elements = self.elements
        if scene.sync_status is SyncStatus.SYNCED:
            heading_element = self.scene_heading_element(scene_id)
            if heading_element is not None:
                elements = [
                    el.model_copy(update={"content": heading})
                    if el.id == heading_element.id
                    else el
                    for el in self.elements
                ]

        self.scenes = [updated if s.id == scene_id else s for s in self.scenes]
        self.elements = elements
        logger.debug("Updated scene heading", scene_id=scene_id, heading=heading)
        return updated

    # Helpers

    def _ordered_elements(self) -> list[Element]:
        return sorted(self.elements, key=lambda el: el.sequence)

    def _require_scene(self, scene_id: str) -> Scene:
        scene = self.get_scene(scene_id)
        if scene is None:
            raise DocumentError(
                message=f"Scene not found: {scene_id}",
                details={"scene_id": scene_id},
            )
        return scene

    def _require_element(self, element_id: str) -> Element:
        element = self.get_element(element_id)
        if element is None:
            raise DocumentError(
                message=f"Element not found: {element_id}",
                details={"element_id": element_id},
            )
        return element
