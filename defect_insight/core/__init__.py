"""
Core module: Configuration, logging, and exception handling.
"""

from .config import CatalogueConfig, Config, DetectionConfig, config
from .exceptions import (
    AnomalyDetectionError,
    DataValidationError,
    DefectInsightError,
    SubmissionError,
    UnknownStrategyError,
)
from .logging_config import setup_logging

__all__ = [
    "Config",
    "DetectionConfig",
    "CatalogueConfig",
    "config",
    "setup_logging",
    "DefectInsightError",
    "DataValidationError",
    "AnomalyDetectionError",
    "UnknownStrategyError",
    "SubmissionError",
]
