"""Screenplay-specific utility functions."""

from __future__ import annotations

import re
from typing import ClassVar


class ScreenplayUtils:
    """Utility functions for screenplay line shapes and scene headings."""

    # Scene type prefixes, most specific first. A prefix without a trailing
    # dot must be followed by whitespace so "INTO" and "EXTRA" never match.
    SCENE_HEADING_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<prefix>INT\.?\s*/\s*EXT\.?|EXT\.?\s*/\s*INT\.?|I/E\.?"
        r"|INT\.?|EXT\.?|EST\.?)(?:(?<=\.)\s*|\s+)(?P<rest>\S.*)$",
        re.IGNORECASE,
    )
    # Separator between location and time of day
    TIME_SEPARATOR: ClassVar[re.Pattern[str]] = re.compile(r"\s+[-–—]+\s+")

    TRANSITION_SUFFIX: ClassVar[str] = "TO:"
    TRANSITIONS: ClassVar[frozenset[str]] = frozenset(
        {"FADE IN:", "FADE OUT.", "FADE OUT:", "FADE TO BLACK.", "CUT TO BLACK."}
    )

    # Punctuation allowed in a character cue besides letters, digits and spaces
    CUE_PUNCTUATION: ClassVar[frozenset[str]] = frozenset(".'-()#&,")

    @staticmethod
    def normalize_heading(heading: str) -> str:
        """Uppercase a heading and collapse internal whitespace."""
        return " ".join(heading.split()).upper()

    @staticmethod
    def is_scene_heading(line: str, require_time: bool = False) -> bool:
        """Check whether a line has the shape of a scene heading.

        Args:
            line: Line to check (surrounding whitespace is ignored)
            require_time: Also require a ``- TIME`` suffix after the location

        Returns:
            True if the line is a scene heading
        """
        match = ScreenplayUtils.SCENE_HEADING_PATTERN.match(line.strip())
        if not match:
            return False
        if not require_time:
            return True
        parts = ScreenplayUtils.TIME_SEPARATOR.split(match.group("rest"))
        return len(parts) > 1 and bool(parts[0].strip()) and bool(parts[-1].strip())

    @staticmethod
    def is_all_caps(line: str) -> bool:
        """Check whether a line has letters and none of them are lowercase."""
        text = line.strip()
        return any(c.isalpha() for c in text) and text == text.upper()

    @staticmethod
    def is_transition(line: str, max_length: int = 40) -> bool:
        """Check whether a line is a transition such as ``CUT TO:``."""
        text = line.strip()
        if not text or len(text) > max_length or not ScreenplayUtils.is_all_caps(text):
            return False
        return (
            text.endswith(ScreenplayUtils.TRANSITION_SUFFIX)
            or text in ScreenplayUtils.TRANSITIONS
        )

    @staticmethod
    def is_character_cue(line: str, max_length: int = 40) -> bool:
        """Check whether a line has the shape of a character cue.

        A cue is short, holds at least one letter and consists only of
        uppercase letters, digits, spaces and a small punctuation set, so
        extensions such as ``JOHN (V.O.)`` and ``MRS. O'NEIL`` qualify.
        """
        text = line.strip()
        if not text or len(text) > max_length:
            return False
        if not any(c.isalpha() for c in text):
            return False
        return all(
            (c.isalpha() and c.isupper())
            or c.isdigit()
            or c == " "
            or c in ScreenplayUtils.CUE_PUNCTUATION
            for c in text
        )

    @staticmethod
    def is_parenthetical(line: str) -> bool:
        """Check whether a whole line is wrapped in parentheses."""
        text = line.strip()
        return len(text) >= 2 and text.startswith("(") and text.endswith(")")
