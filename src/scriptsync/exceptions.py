"""Custom exception hierarchy for ScriptSync with helpful error messages.

Problems found in screenplay text are never raised; they are reported as
validation issues. The exceptions here signal configuration problems and
misuse of the document model or sync engine by the calling application.
"""

from __future__ import annotations

from typing import Any


class ScriptSyncError(Exception):
    """Base exception with helpful formatting for all ScriptSync errors.

    Provides structured error messages with hints and details to help callers
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptSyncError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class DocumentError(ScriptSyncError):
    """Invalid use of the document model, such as unknown ids or bad moves."""

    pass


class ReconciliationError(ScriptSyncError):
    """Invalid input handed to the scene reconciler."""

    pass


class ExportBlockedError(ScriptSyncError):
    """Raised when a validation report does not allow export."""

    def __init__(
        self,
        message: str = "Export blocked by validation errors",
        errors: int = 0,
        confidence: float | None = None,
    ) -> None:
        """Initialize export blocked error.

        Args:
            message: Error message
            errors: Number of error-severity issues in the report
            confidence: Confidence score of the report
        """
        self.errors = errors
        self.confidence = confidence
        details: dict[str, Any] = {"errors": errors}
        if confidence is not None:
            details["confidence"] = round(confidence, 3)
        super().__init__(
            message=message,
            hint="Fix the reported errors or export with override=True",
            details=details,
        )


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "max_cue_length": "classifier_max_cue_length",
        "require_time_of_day": "classifier_require_time_of_day",
        "error_weight": "validator_error_weight",
        "warning_weight": "validator_warning_weight",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
