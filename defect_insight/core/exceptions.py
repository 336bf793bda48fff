"""
Custom exceptions for Defect Insight.

These exceptions provide clear error semantics across the system.
Use them to distinguish between bad input records, detection problems,
and failures of the external store during submission.
"""


class DefectInsightError(Exception):
    """Base exception for all Defect Insight failures."""
    pass


class DataValidationError(DefectInsightError):
    """Raised when input data fails validation or ingestion."""
    pass


class AnomalyDetectionError(DefectInsightError):
    """Base exception for anomaly detection failures."""
    pass


class UnknownStrategyError(AnomalyDetectionError):
    """Raised when a detection strategy name is not in the catalogue."""
    pass


class SubmissionError(DefectInsightError):
    """Raised when the external store rejects an anomaly observation."""
    pass
