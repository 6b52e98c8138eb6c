from .host import CommandHost, ConsoleHost, Host, Severity
from .remover import EXHAUSTED_REASON, CleanupFailure, CleanupOutcome, DirectoryRemover, PathState
from .workflow import CleanupWorkflow


__all__ = [
    "CleanupFailure",
    "CleanupOutcome",
    "CleanupWorkflow",
    "CommandHost",
    "ConsoleHost",
    "DirectoryRemover",
    "EXHAUSTED_REASON",
    "Host",
    "PathState",
    "Severity",
]
