"""
Detectors for statistically unusual defect records.

Implements explainable methods:
- Frequency outliers (values that recur unusually often)
- Z-score on severity ratings
- Interquartile range on resolution times

Every detector is pure and order-preserving: it returns the flagged records
in their original batch order and never modifies its input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from defect_insight.data.aggregation import (
    count_by,
    is_valid_number,
    key_of,
    population_stats,
)
from defect_insight.data.schema import DefectRecord

from .schema import FrequencyOutlierParams, InterquartileRangeParams, ZScoreParams

logger = logging.getLogger(__name__)


def z_scores(values: Sequence[float]) -> List[float]:
    """
    Population z-score of every value.

    If the standard deviation is 0 every z-score is 0.
    """
    mean, std = population_stats(values)
    if std == 0:
        return [0.0 for _ in values]
    return [(v - mean) / std for v in values]


def nearest_rank_quartiles(
    values: Sequence[float], q1_fraction: float = 0.25, q3_fraction: float = 0.75
) -> Optional[Tuple[float, float]]:
    """
    Q1 and Q3 by nearest rank: sorted[floor(n * fraction)].

    No interpolation between ranks. Returns None for empty input.
    """
    if not values:
        return None
    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[min(int(math.floor(n * q1_fraction)), n - 1)]
    q3 = ordered[min(int(math.floor(n * q3_fraction)), n - 1)]
    return q1, q3


@dataclass
class FrequencyOutlierDetector:
    """
    Flags records whose field value occurs unusually often.

    Mean and standard deviation are computed over the frequencies of the
    distinct values, not over the values themselves. If all values are equally
    frequent nothing is flagged for a non-negative multiplier.
    """

    params: FrequencyOutlierParams

    def threshold(self, frequencies: Dict[str, int]) -> Optional[float]:
        if not frequencies:
            return None
        mean, std = population_stats(list(frequencies.values()))
        return mean + self.params.std_multiplier * std

    def detect(self, records: Sequence[DefectRecord]) -> List[DefectRecord]:
        frequencies = count_by(records, self.params.field)
        limit = self.threshold(frequencies)
        if limit is None:
            return []

        logger.debug(f"Frequency threshold for {self.params.field}: {limit:.3f}")
        return [
            r for r in records
            if frequencies[key_of(r.value_of(self.params.field))] > limit
        ]


@dataclass
class ZScoreDetector:
    """
    Flags records whose severity rating has |z| above the threshold.

    Records without a valid rating take no part in the statistics and are
    never flagged.
    """

    params: ZScoreParams

    def detect(self, records: Sequence[DefectRecord]) -> List[DefectRecord]:
        rated = [
            (idx, float(r.severity_rating))
            for idx, r in enumerate(records)
            if is_valid_number(r.severity_rating)
        ]
        scores = z_scores([value for _, value in rated])
        flagged = {
            idx for (idx, _), z in zip(rated, scores) if abs(z) > self.params.threshold
        }
        return [r for idx, r in enumerate(records) if idx in flagged]


@dataclass
class InterquartileRangeDetector:
    """
    Flags records whose resolution time falls outside the IQR fences.

    Fences: [Q1 - k * IQR, Q3 + k * IQR] with nearest-rank quartiles.
    """

    params: InterquartileRangeParams

    def bounds(self, values: Sequence[float]) -> Optional[Tuple[float, float]]:
        quartiles = nearest_rank_quartiles(
            values, self.params.q1_fraction, self.params.q3_fraction
        )
        if quartiles is None:
            return None
        q1, q3 = quartiles
        iqr = q3 - q1
        return q1 - self.params.multiplier * iqr, q3 + self.params.multiplier * iqr

    def detect(self, records: Sequence[DefectRecord]) -> List[DefectRecord]:
        values = [
            float(r.resolution_time) for r in records if is_valid_number(r.resolution_time)
        ]
        fences = self.bounds(values)
        if fences is None:
            return []

        lower, upper = fences
        logger.debug(f"Resolution time fences: [{lower:.3f}, {upper:.3f}]")
        return [
            r for r in records
            if is_valid_number(r.resolution_time)
            and (r.resolution_time < lower or r.resolution_time > upper)
        ]
