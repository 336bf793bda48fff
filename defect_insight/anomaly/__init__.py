"""
Anomaly module: Statistical anomaly detection over defect batches.

Implements the strategy catalogue, the three detectors, the dispatching
engine, and submission of anomaly observations to the external store.
"""

from .detectors import (
    FrequencyOutlierDetector,
    InterquartileRangeDetector,
    ZScoreDetector,
    nearest_rank_quartiles,
    z_scores,
)
from .engine import AnomalyEngine
from .schema import (
    STRATEGY_CATALOGUE,
    DetectionParams,
    DetectionStrategy,
    FrequencyOutlierParams,
    InterquartileRangeParams,
    StrategyInfo,
    SubmissionReport,
    ZScoreParams,
    parse_strategy,
    strategy_info,
)
from .submission import submit_anomalies

__all__ = [
    "AnomalyEngine",
    "DetectionStrategy",
    "DetectionParams",
    "FrequencyOutlierParams",
    "ZScoreParams",
    "InterquartileRangeParams",
    "StrategyInfo",
    "STRATEGY_CATALOGUE",
    "parse_strategy",
    "strategy_info",
    "FrequencyOutlierDetector",
    "ZScoreDetector",
    "InterquartileRangeDetector",
    "z_scores",
    "nearest_rank_quartiles",
    "SubmissionReport",
    "submit_anomalies",
]
