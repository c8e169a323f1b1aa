"""Unit tests for screenplay line classification."""

from dataclasses import fields

import pytest

from scriptsync.config import ScriptSyncSettings
from scriptsync.models import ElementType
from scriptsync.parser import ClassificationContext, LineClassifier
from scriptsync.utils import ScreenplayUtils


@pytest.fixture
def classifier() -> LineClassifier:
    """Create classifier with default settings."""
    return LineClassifier()


def after(previous: ElementType, blank: bool = False) -> ClassificationContext:
    """Context for a line that follows an element of the given type."""
    return ClassificationContext(previous_type=previous, after_blank=blank)


class TestSceneHeadings:
    """Scene heading detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "INT. KITCHEN - DAY",
            "EXT. PARK - NIGHT",
            "int. kitchen - day",
            "INT/EXT. CAR - MOVING",
            "I/E. DOORWAY - DUSK",
            "EXT PARK",
            "  INT. HALLWAY  ",
        ],
    )
    def test_headings(self, classifier: LineClassifier, line: str) -> None:
        """Test lines with an INT./EXT. prefix are scene headings."""
        assert classifier.classify(line) is ElementType.SCENE_HEADING

    @pytest.mark.parametrize("line", ["INTO THE WOODS", "Exterior shots follow."])
    def test_prefix_lookalikes(self, classifier: LineClassifier, line: str) -> None:
        """Test words that merely start with INT/EXT are not headings."""
        assert classifier.classify(line) is not ElementType.SCENE_HEADING

    def test_heading_wins_over_dialogue(self, classifier: LineClassifier) -> None:
        """Test heading detection has priority over speech context."""
        result = classifier.classify("INT. OFFICE - DAY", after(ElementType.CHARACTER))
        assert result is ElementType.SCENE_HEADING

    def test_require_time_of_day(self) -> None:
        """Test headings without a time suffix are rejected when required."""
        strict = LineClassifier(
            ScriptSyncSettings(_env_file=None, classifier_require_time_of_day=True)
        )
        assert strict.classify("INT. KITCHEN - DAY") is ElementType.SCENE_HEADING
        assert strict.classify("INT. KITCHEN") is not ElementType.SCENE_HEADING

    def test_normalize_uppercases_heading(self, classifier: LineClassifier) -> None:
        """Test stored heading content is uppercase with single spaces."""
        content = classifier.normalize(
            "  int.   kitchen -  day ", ElementType.SCENE_HEADING
        )
        assert content == "INT. KITCHEN - DAY"


class TestCharacterCues:
    """Character cue detection."""

    @pytest.mark.parametrize("line", ["JOHN", "JOHN (V.O.)", "MRS. O'NEIL", "COP #2"])
    def test_cues_after_blank(self, classifier: LineClassifier, line: str) -> None:
        """Test short uppercase lines after a blank line are cues."""
        context = after(ElementType.ACTION, blank=True)
        assert classifier.classify(line, context) is ElementType.CHARACTER

    def test_cue_at_document_start(self, classifier: LineClassifier) -> None:
        """Test the start of the text counts as following a blank line."""
        assert classifier.classify("JOHN") is ElementType.CHARACTER

    def test_uppercase_without_blank_is_action(
        self, classifier: LineClassifier
    ) -> None:
        """Test an uppercase line glued to action is not a cue."""
        assert (
            classifier.classify("BANG", after(ElementType.ACTION))
            is ElementType.ACTION
        )

    def test_long_uppercase_line_is_action(self, classifier: LineClassifier) -> None:
        """Test lines longer than the cue limit are not cues."""
        line = "THE ENTIRE BUILDING SHAKES AS THE TRAIN ROARS PAST OUTSIDE"
        assert len(line) > 40
        assert classifier.classify(line) is ElementType.ACTION

    def test_cue_length_setting(self) -> None:
        """Test the maximum cue length comes from settings."""
        short = LineClassifier(
            ScriptSyncSettings(_env_file=None, classifier_max_cue_length=3)
        )
        assert short.classify("BOB") is ElementType.CHARACTER
        assert short.classify("JOHN") is ElementType.ACTION

    def test_mixed_case_is_not_cue(self, classifier: LineClassifier) -> None:
        """Test mixed-case lines are never cues."""
        assert classifier.classify("John") is ElementType.ACTION


class TestSpeech:
    """Parenthetical and dialogue detection."""

    def test_parenthetical_after_character(self, classifier: LineClassifier) -> None:
        """Test a wrapped line right after a cue is a parenthetical."""
        result = classifier.classify("(whispering)", after(ElementType.CHARACTER))
        assert result is ElementType.PARENTHETICAL

    def test_parenthetical_after_dialogue(self, classifier: LineClassifier) -> None:
        """Test a wrapped line inside a speech is a parenthetical."""
        result = classifier.classify("(beat)", after(ElementType.DIALOGUE))
        assert result is ElementType.PARENTHETICAL

    def test_parenthetical_needs_speech(self, classifier: LineClassifier) -> None:
        """Test a wrapped line in action context stays action."""
        result = classifier.classify("(quietly)", after(ElementType.ACTION))
        assert result is ElementType.ACTION

    def test_dialogue_after_character(self, classifier: LineClassifier) -> None:
        """Test a plain line right after a cue is dialogue."""
        result = classifier.classify("Is anyone home?", after(ElementType.CHARACTER))
        assert result is ElementType.DIALOGUE

    def test_dialogue_after_parenthetical(self, classifier: LineClassifier) -> None:
        """Test a plain line right after a parenthetical is dialogue."""
        result = classifier.classify("Hello.", after(ElementType.PARENTHETICAL))
        assert result is ElementType.DIALOGUE

    def test_blank_line_ends_speech(self, classifier: LineClassifier) -> None:
        """Test a blank line between cue and text breaks the dialogue link."""
        context = after(ElementType.CHARACTER, blank=True)
        assert classifier.classify("She leaves.", context) is ElementType.ACTION

    def test_line_after_dialogue_is_action(self, classifier: LineClassifier) -> None:
        """Test only cues and parentheticals open a dialogue line."""
        result = classifier.classify("She leaves.", after(ElementType.DIALOGUE))
        assert result is ElementType.ACTION


class TestTransitions:
    """Transition detection."""

    @pytest.mark.parametrize(
        "line", ["CUT TO:", "SMASH CUT TO:", "FADE OUT.", "FADE IN:", "DISSOLVE TO:"]
    )
    def test_transitions(self, classifier: LineClassifier, line: str) -> None:
        """Test transition lines after a blank line."""
        context = after(ElementType.ACTION, blank=True)
        assert classifier.classify(line, context) is ElementType.TRANSITION

    def test_lowercase_to_is_action(self, classifier: LineClassifier) -> None:
        """Test mixed-case lines ending in 'to:' are not transitions."""
        assert classifier.classify("He turns to:") is ElementType.ACTION


class TestFallback:
    """Every line gets exactly one type."""

    @pytest.mark.parametrize("line", ["", "   ", "...", "12345", "¿Qué?", "😀"])
    def test_odd_lines_fall_back(self, classifier: LineClassifier, line: str) -> None:
        """Test lines matching no rule are action."""
        assert classifier.classify(line) is ElementType.ACTION


class TestScreenplayUtils:
    """Heading helpers."""

    def test_normalize_heading(self) -> None:
        """Test headings are uppercased with single spaces."""
        assert (
            ScreenplayUtils.normalize_heading("  int.   kitchen -  day ")
            == "INT. KITCHEN - DAY"
        )

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("INT. KITCHEN - DAY", True),
            ("INT. KITCHEN -", False),
            ("INT. KITCHEN", False),
            ("EXT. PARK -- NIGHT", True),
        ],
    )
    def test_time_suffix(self, line: str, expected: bool) -> None:
        """Test the time-of-day requirement needs text on both sides."""
        assert ScreenplayUtils.is_scene_heading(line, require_time=True) is expected


class TestClassificationContext:
    """Lookback state."""

    def test_fields(self) -> None:
        """Test the context carries only what the rules read."""
        assert [f.name for f in fields(ClassificationContext)] == [
            "previous_type",
            "after_blank",
        ]
