"""Line classification for loosely formatted screenplay text."""

from __future__ import annotations

from dataclasses import dataclass

from scriptsync.config import ScriptSyncSettings, get_settings
from scriptsync.models import ElementType
from scriptsync.utils import ScreenplayUtils

# Types after which an indented speech line is expected
_SPEECH_LEADS = frozenset({ElementType.CHARACTER, ElementType.PARENTHETICAL})
_PARENTHETICAL_LEADS = frozenset({ElementType.CHARACTER, ElementType.DIALOGUE})


@dataclass(frozen=True)
class ClassificationContext:
    """Lookback available when classifying a single line."""

    previous_type: ElementType | None = None
    after_blank: bool = True  # The start of the document counts as a blank line


class LineClassifier:
    """Classify raw lines into screenplay element types.

    Rules are applied in priority order and the last one is a catch-all, so
    every line gets exactly one type. Short uppercase action beats are a
    known source of misclassification as character cues.
    """

    def __init__(self, settings: ScriptSyncSettings | None = None) -> None:
        """Initialize the classifier.

        Args:
            settings: Configuration settings (uses global settings if omitted)
        """
        self.settings = settings or get_settings()
        self.max_cue_length = self.settings.classifier_max_cue_length
        self.require_time = self.settings.classifier_require_time_of_day

    def classify(
        self, line: str, context: ClassificationContext | None = None
    ) -> ElementType:
        """Classify one line.

        Args:
            line: Raw line text
            context: Lookback state; defaults to the start of a document

        Returns:
            The element type of the line
        """
        context = context or ClassificationContext()
        text = line.strip()
        previous = context.previous_type
        follows_directly = not context.after_blank

        if ScreenplayUtils.is_scene_heading(text, require_time=self.require_time):
            return ElementType.SCENE_HEADING

        if (
            context.after_blank
            and ScreenplayUtils.is_character_cue(text, self.max_cue_length)
            and not ScreenplayUtils.is_transition(text, self.max_cue_length)
        ):
            return ElementType.CHARACTER

        if (
            follows_directly
            and previous in _PARENTHETICAL_LEADS
            and ScreenplayUtils.is_parenthetical(text)
        ):
            return ElementType.PARENTHETICAL

        if (
            follows_directly
            and previous in _SPEECH_LEADS
            and text
            and not ScreenplayUtils.is_all_caps(text)
        ):
            return ElementType.DIALOGUE

        if ScreenplayUtils.is_transition(text, self.max_cue_length):
            return ElementType.TRANSITION

        return ElementType.ACTION

    def normalize(self, line: str, element_type: ElementType) -> str:
        """Return the stored content for a classified line."""
        if element_type is ElementType.SCENE_HEADING:
            return ScreenplayUtils.normalize_heading(line)
        return line.strip()
