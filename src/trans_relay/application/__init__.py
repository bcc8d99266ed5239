from .orchestrator import SubmissionOrchestrator
from .reconciler import StatusReconciler

__all__ = ["SubmissionOrchestrator", "StatusReconciler"]
