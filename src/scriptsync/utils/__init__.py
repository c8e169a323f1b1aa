"""ScriptSync utilities module."""

from scriptsync.utils.screenplay import ScreenplayUtils

__all__ = ["ScreenplayUtils"]
