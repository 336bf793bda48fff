"""
Anomaly detection engine.

Dispatches a named strategy over a defect batch and converts the flagged
records into AnomalyObservation objects ready for the external store.

Unknown strategy names and unknown fields are reported as warnings and
yield an empty result; they never raise out of run() or flag().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Union

from defect_insight.core.config import DetectionConfig, config
from defect_insight.core.exceptions import DataValidationError, UnknownStrategyError
from defect_insight.data.aggregation import key_of
from defect_insight.data.schema import AnomalyObservation, DefectRecord

from .detectors import (
    FrequencyOutlierDetector,
    InterquartileRangeDetector,
    ZScoreDetector,
)
from .schema import (
    DetectionParams,
    DetectionStrategy,
    FrequencyOutlierParams,
    InterquartileRangeParams,
    ZScoreParams,
    parse_strategy,
)

logger = logging.getLogger(__name__)

Detector = Union[FrequencyOutlierDetector, ZScoreDetector, InterquartileRangeDetector]

TIME_FORMAT = "%H:%M:%S"


@dataclass
class AnomalyEngine:
    """
    Strategy dispatcher for anomaly detection.

    Notes:
    - Stateless between calls: every run works on the batch it is given
    - Missing control values fall back to the configured defaults
    - clock is injectable so flag timestamps can be fixed in tests
    """

    detection: Optional[DetectionConfig] = None
    clock: Callable[[], datetime] = datetime.now

    def __post_init__(self) -> None:
        if self.detection is None:
            self.detection = config.detection

    def build_params(
        self,
        strategy_name: Union[str, DetectionStrategy],
        field: str,
        control_value: Optional[float] = None,
    ) -> DetectionParams:
        """
        Translate the generic (strategy, field, control value) triple into the
        strategy's own parameter model.

        Raises:
            UnknownStrategyError: If the strategy name is not recognised
        """
        strategy = parse_strategy(strategy_name)

        if strategy == DetectionStrategy.FREQUENCY_OUTLIER:
            multiplier = (
                self.detection.default_std_multiplier if control_value is None else control_value
            )
            return FrequencyOutlierParams(field=field, std_multiplier=multiplier)

        if strategy == DetectionStrategy.Z_SCORE:
            threshold = (
                self.detection.default_zscore_threshold if control_value is None else control_value
            )
            return ZScoreParams(threshold=threshold)

        return InterquartileRangeParams(
            multiplier=self.detection.iqr_multiplier,
            q1_fraction=self.detection.q1_fraction,
            q3_fraction=self.detection.q3_fraction,
        )

    def build_detector(self, params: DetectionParams) -> Detector:
        if isinstance(params, FrequencyOutlierParams):
            return FrequencyOutlierDetector(params)
        if isinstance(params, ZScoreParams):
            return ZScoreDetector(params)
        return InterquartileRangeDetector(params)

    def run(
        self,
        strategy_name: Union[str, DetectionStrategy],
        records: Sequence[DefectRecord],
        field: str,
        control_value: Optional[float] = None,
    ) -> List[DefectRecord]:
        """
        Run one strategy and return the flagged records in batch order.

        Args:
            strategy_name: Strategy value, enum member, or dashboard name
            records: The complete defect batch
            field: Field requested by the caller (only the frequency strategy
                analyses it; the others have a fixed field)
            control_value: Std-dev multiplier (frequency), |z| threshold
                (z-score); ignored by the interquartile-range strategy

        Returns:
            Flagged records, [] for an unknown strategy or for an unknown
            field given to the frequency strategy
        """
        try:
            params = self.build_params(strategy_name, field, control_value)
        except UnknownStrategyError as e:
            logger.warning(str(e))
            return []

        if isinstance(params, FrequencyOutlierParams) and DefectRecord.resolve_field(field) is None:
            logger.warning(f"Unknown defect field {field!r}; nothing to detect")
            return []

        flagged = self.build_detector(params).detect(records)
        logger.info(
            f"{params.strategy.value} flagged {len(flagged)} of {len(records)} records "
            f"(field={params.field})"
        )
        return flagged

    def flag(
        self,
        strategy_name: Union[str, DetectionStrategy],
        records: Sequence[DefectRecord],
        field: str,
        control_value: Optional[float] = None,
    ) -> List[AnomalyObservation]:
        """
        Run one strategy and convert every flagged record into an observation.

        suspected_field is always the caller's field, even for strategies that
        analyse a fixed field of their own.
        """
        flagged = self.run(strategy_name, records, field, control_value)
        if not flagged:
            return []

        strategy = parse_strategy(strategy_name)
        flagged_at = self.clock()
        note = f"{field} anomaly calculated by {strategy.value}"

        return [
            self._observation(
                record,
                field,
                note=note,
                flagged_by=self.detection.system_flagger,
                flagged_at=flagged_at,
            )
            for record in flagged
        ]

    def flag_manually(
        self,
        record: DefectRecord,
        field: str,
        note: str,
        flagged_by: str = "user",
    ) -> AnomalyObservation:
        """
        Build an observation for a record a user flagged by hand.

        Raises:
            DataValidationError: If the record has no such field
        """
        if DefectRecord.resolve_field(field) is None:
            raise DataValidationError(f"Unknown defect field: {field!r}")
        return self._observation(
            record, field, note=note, flagged_by=flagged_by, flagged_at=self.clock()
        )

    def _observation(
        self,
        record: DefectRecord,
        field: str,
        note: str,
        flagged_by: str,
        flagged_at: datetime,
    ) -> AnomalyObservation:
        return AnomalyObservation(
            defect_id=record.id,
            status=self.detection.default_status,
            note=note,
            flagged_by=flagged_by,
            date=flagged_at.date(),
            time=flagged_at.strftime(TIME_FORMAT),
            suspected_field=field,
            suspected_value=key_of(
                record.value_of(field) if DefectRecord.resolve_field(field) else None
            ),
        )
