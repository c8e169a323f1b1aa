"""ScriptSync: screenplay parsing, scene synchronization and validation.

ScriptSync turns loosely formatted screenplay text into typed scenes and
elements, reconciles them with the scenes a planning tool already tracks,
and reports structural problems with a confidence score that gates export.
"""

from .config import ScriptSyncSettings, get_logger, get_settings
from .document import ScriptDocument
from .exceptions import (
    ConfigurationError,
    DocumentError,
    ExportBlockedError,
    ReconciliationError,
    ScriptSyncError,
)
from .main import PipelineResult, ScriptSync
from .models import (
    Element,
    ElementType,
    IssueCode,
    ParseResult,
    Scene,
    Severity,
    Shot,
    SyncStatus,
    ValidationIssue,
    ValidationReport,
)
from .parser import LineClassifier, ScreenplayParser, group_elements
from .synchronizer import SceneReconciler, SyncResult
from .validators import DocumentValidator, should_block_export

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "ConfigurationError",
    "DocumentError",
    "DocumentValidator",
    "Element",
    "ElementType",
    "ExportBlockedError",
    "IssueCode",
    "LineClassifier",
    "ParseResult",
    "PipelineResult",
    "ReconciliationError",
    "Scene",
    "SceneReconciler",
    "ScreenplayParser",
    "ScriptDocument",
    "ScriptSync",
    "ScriptSyncError",
    "ScriptSyncSettings",
    "Severity",
    "Shot",
    "SyncResult",
    "SyncStatus",
    "ValidationIssue",
    "ValidationReport",
    "__version__",
    "get_logger",
    "get_settings",
    "group_elements",
    "should_block_export",
]
