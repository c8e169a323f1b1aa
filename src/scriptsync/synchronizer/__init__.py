"""Scene synchronization between script text and planning data."""

from .reconciler import SceneReconciler, SyncResult

__all__ = ["SceneReconciler", "SyncResult"]
