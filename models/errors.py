"""
Error taxonomy for the bid comparison workflow.

Every error carries the HTTP status class it maps to so the API layer can
report it without inspecting the concrete type.
"""
from typing import Optional


class BidCompareError(Exception):
    """Base class for all workflow errors."""

    status_code = 500
    retryable = False


class ValidationError(BidCompareError):
    """Bad or missing caller input. Reported immediately, never retried."""

    status_code = 400

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class InvalidTransitionError(BidCompareError):
    """The requested action is not legal in the current project state."""

    status_code = 409


class UpstreamStagingError(BidCompareError):
    """The blob store refused a payload."""

    status_code = 502


class ModelInvocationError(BidCompareError):
    """The model call failed before producing a usable response."""


class SchemaViolation(ModelInvocationError):
    """The model responded, but not with a schema-conformant record."""


class ModelTimeoutError(BidCompareError):
    """The model call did not finish within the configured timeout."""

    status_code = 504
    retryable = True


class ExtractionError(BidCompareError):
    pass


class AssessmentError(BidCompareError):
    pass


class AnalysisError(BidCompareError):
    pass
