"""
Pipeline exception classes.

Every fatal condition of the pipeline is raised as a subclass of
PipelineError so an orchestrating caller can abort the whole run with one
except clause. Incomplete records are not errors: the loader filters them.
"""

from typing import Any, Dict, Optional


class PipelineError(Exception):
    """
    Base exception for all pipeline errors.

    Carries a human readable message plus a details dict for reporting.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DataFetchError(PipelineError):
    """Raised when the dataset cannot be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Failed to load dataset from {source}: {reason}",
            details={"source": source, "reason": reason},
        )


class NumericError(PipelineError):
    """Raised on undefined arithmetic: empty columns, non-finite loss."""
    pass


class TrainingError(PipelineError):
    """Raised when the training inputs cannot be fitted by the model."""
    pass


class ConstantFeatureWarning(RuntimeWarning):
    """Emitted when a column has max == min and is scaled to all zeros."""
    pass
