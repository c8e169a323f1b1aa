"""Screenplay text parser for ScriptSync."""

from __future__ import annotations

from .classifier import ClassificationContext, LineClassifier
from .sequencer import ElementGroup, ScreenplayParser, group_elements

__all__ = [
    "ClassificationContext",
    "ElementGroup",
    "LineClassifier",
    "ScreenplayParser",
    "group_elements",
]
