"""ScriptSync main entry point."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from scriptsync.config import (
    ScriptSyncSettings,
    configure_logging,
    get_logger,
    get_settings,
)
from scriptsync.document import ScriptDocument
from scriptsync.models import ParseResult, Scene, Shot, ValidationReport
from scriptsync.parser import ScreenplayParser
from scriptsync.synchronizer import SceneReconciler, SyncResult
from scriptsync.validators import DocumentValidator

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Everything one parse, reconcile and validate pass produces."""

    sync: SyncResult
    document: ScriptDocument
    report: ValidationReport


class ScriptSync:
    """Main ScriptSync class wiring parser, reconciler and validator."""

    def __init__(
        self,
        settings: ScriptSyncSettings | None = None,
        setup_logging: bool = False,
    ) -> None:
        """Initialize ScriptSync instance.

        Args:
            settings: Configuration settings (optional, uses defaults if not provided)
            setup_logging: Install the package's logging handlers from the
                settings; leave False when the host configures logging
        """
        self.settings = settings or get_settings()
        if setup_logging:
            configure_logging(self.settings)
        self.parser = ScreenplayParser(self.settings)
        self.reconciler = SceneReconciler(self.settings)
        self.validator = DocumentValidator(self.settings)

    def parse(self, text: str) -> ParseResult:
        """Parse screenplay text into scenes and elements.

        Args:
            text: Screenplay text; the empty string is valid input

        Returns:
            Parse result with fresh ids
        """
        return self.parser.parse(text)

    def reconcile(
        self, previous_scenes: Sequence[Scene], parsed: ParseResult
    ) -> SyncResult:
        """Reconcile a parse with the scenes from the last sync.

        Raises:
            ReconciliationError: If the previous scenes are inconsistent
        """
        return self.reconciler.reconcile(previous_scenes, parsed)

    def validate(
        self, document: ScriptDocument, strict: bool = False
    ) -> ValidationReport:
        """Validate a document. Never raises for screenplay problems."""
        return self.validator.validate(document, strict=strict)

    def process(
        self,
        text: str,
        previous_scenes: Sequence[Scene] = (),
        shots: Sequence[Shot] = (),
        strict: bool = False,
    ) -> PipelineResult:
        """Run the full parse, reconcile and validate pipeline.

        Args:
            text: Current screenplay text
            previous_scenes: Scenes from the last sync (empty on first import)
            shots: Planning shots to attach to the document
            strict: Apply strict formatting rules during validation

        Returns:
            Sync result, the reconciled document and its validation report

        Raises:
            ReconciliationError: If the previous scenes are inconsistent
            DocumentError: If a shot belongs to a scene that no longer exists
        """
        parsed = self.parse(text)
        sync = self.reconcile(previous_scenes, parsed)
        document = sync.to_document(shots)
        report = self.validate(document, strict=strict)

        logger.debug(
            "Processed screenplay",
            scenes=len(document.scenes),
            elements=len(document.elements),
            shots=len(document.shots),
            valid=report.valid,
        )
        return PipelineResult(sync=sync, document=document, report=report)
