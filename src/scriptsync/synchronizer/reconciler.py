"""Scene reconciliation between a fresh parse and existing planning data."""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Sequence
from dataclasses import dataclass, field

from scriptsync.config import ScriptSyncSettings, get_logger, get_settings
from scriptsync.document import ScriptDocument
from scriptsync.exceptions import ReconciliationError
from scriptsync.models import (
    Element,
    ParseResult,
    Scene,
    Shot,
    SyncStatus,
    resequence,
)
from scriptsync.types import SyncStats
from scriptsync.utils import ScreenplayUtils

logger = get_logger(__name__)


@dataclass
class SyncResult:
    """Reconciled scenes and elements of one sync pass."""

    scenes: list[Scene] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)
    stats: SyncStats = field(
        default_factory=lambda: SyncStats(
            synced=0, pending=0, orphaned=0, visual_only=0, renamed=0
        )
    )

    def scenes_with_status(self, status: SyncStatus) -> list[Scene]:
        """Get the reconciled scenes carrying a sync status."""
        return [scene for scene in self.scenes if scene.sync_status is status]

    def to_parse_result(self) -> ParseResult:
        """Return the scenes and elements as a parse result."""
        return ParseResult(elements=list(self.elements), scenes=list(self.scenes))

    def to_document(self, shots: Sequence[Shot] = ()) -> ScriptDocument:
        """Build a document from the reconciled scenes and elements.

        Args:
            shots: Planning shots to attach; they are carried unchanged

        Returns:
            New document
        """
        return ScriptDocument.from_parse(self.to_parse_result(), list(shots))


class SceneReconciler:
    """Match newly parsed scenes against the scenes planning already knows.

    Matching is done by id first. Scenes left over on both sides are then
    matched by normalized heading, each previous scene used at most once and
    in script order. Once the parse shares ids with the previous scenes,
    synced scenes are only ever matched by id; a plain text re-parse mints
    fresh ids, so there every previous scene may match by heading. Previous
    scenes that find no partner are kept as orphaned; visual-only scenes are
    never matched and pass through.
    """

    def __init__(self, settings: ScriptSyncSettings | None = None) -> None:
        """Initialize the reconciler.

        Args:
            settings: Configuration settings (uses global settings if omitted)
        """
        self.settings = settings or get_settings()

    def reconcile(
        self, previous_scenes: Sequence[Scene], parsed: ParseResult
    ) -> SyncResult:
        """Reconcile a parse result with the previous scene list.

        Args:
            previous_scenes: Scenes from the last sync, in any order
            parsed: Fresh parse of the current script text

        Returns:
            Reconciled scenes (parsed order first, then orphaned and
            visual-only scenes in their previous order) and elements
            re-pointed at the preserved scene ids

        Raises:
            ReconciliationError: If the previous scenes repeat an id or a
                parsed scene reuses the id of a visual-only scene
        """
        previous = sorted(previous_scenes, key=lambda scene: scene.sequence)
        self._check_previous(previous, parsed)

        candidates = [
            s for s in previous if s.sync_status is not SyncStatus.VISUAL_ONLY
        ]
        matches = self._match_by_id(candidates, parsed.scenes)
        matches.update(self._match_by_heading(candidates, parsed.scenes, matches))

        stats = SyncStats(synced=0, pending=0, orphaned=0, visual_only=0, renamed=0)
        reconciled: list[Scene] = []
        remap: dict[str, str] = {}

        for scene in parsed.scenes:
            match = matches.get(scene.id)
            if match is None:
                reconciled.append(
                    scene.model_copy(update={"sync_status": SyncStatus.PENDING})
                )
                stats["pending"] += 1
                continue

            previous_heading = ScreenplayUtils.normalize_heading(match.heading)
            if previous_heading != ScreenplayUtils.normalize_heading(scene.heading):
                stats["renamed"] += 1
            reconciled.append(
                match.model_copy(
                    update={
                        "heading": scene.heading,
                        "sync_status": SyncStatus.SYNCED,
                    }
                )
            )
            remap[scene.id] = match.id
            stats["synced"] += 1

        matched_ids = set(remap.values())
        for scene in previous:
            if scene.sync_status is SyncStatus.VISUAL_ONLY:
                reconciled.append(scene)
                stats["visual_only"] += 1
            elif scene.id not in matched_ids:
                reconciled.append(
                    scene.model_copy(update={"sync_status": SyncStatus.ORPHANED})
                )
                stats["orphaned"] += 1

        elements = [
            el.model_copy(update={"scene_id": remap[el.scene_id]})
            if el.scene_id in remap and remap[el.scene_id] != el.scene_id
            else el
            for el in parsed.elements
        ]

        logger.debug("Reconciled scenes", **stats)
        return SyncResult(
            scenes=resequence(reconciled), elements=elements, stats=stats
        )

    def _check_previous(self, previous: list[Scene], parsed: ParseResult) -> None:
        seen: set[str] = set()
        for scene in previous:
            if scene.id in seen:
                raise ReconciliationError(
                    message=f"Duplicate scene id in previous scenes: {scene.id}",
                    hint="Pass each previously synced scene exactly once",
                    details={"scene_id": scene.id},
                )
            seen.add(scene.id)

        visual_ids = {
            s.id for s in previous if s.sync_status is SyncStatus.VISUAL_ONLY
        }
        for scene in parsed.scenes:
            if scene.id in visual_ids:
                raise ReconciliationError(
                    message=f"Parsed scene reuses visual-only scene id {scene.id}",
                    hint="Visual-only scenes have no script content to match",
                    details={"scene_id": scene.id, "heading": scene.heading},
                )

    def _match_by_id(
        self, candidates: list[Scene], parsed: list[Scene]
    ) -> dict[str, Scene]:
        by_id = {scene.id: scene for scene in candidates}
        return {scene.id: by_id[scene.id] for scene in parsed if scene.id in by_id}

    def _match_by_heading(
        self,
        candidates: list[Scene],
        parsed: list[Scene],
        id_matches: dict[str, Scene],
    ) -> dict[str, Scene]:
        taken = {scene.id for scene in id_matches.values()}
        remaining = [s for s in candidates if s.id not in taken]
        if id_matches:
            # Synced scenes are bound by id once the parse carries ids
            remaining = [
                s for s in remaining if s.sync_status is not SyncStatus.SYNCED
            ]

        # Repeated headings pair up first-to-first, second-to-second
        queues: dict[str, deque[Scene]] = defaultdict(deque)
        for scene in remaining:
            queues[ScreenplayUtils.normalize_heading(scene.heading)].append(scene)

        matches: dict[str, Scene] = {}
        for scene in parsed:
            if scene.id in id_matches:
                continue
            queue = queues.get(ScreenplayUtils.normalize_heading(scene.heading))
            if queue:
                matches[scene.id] = queue.popleft()
        return matches
