"""
Schema definitions for anomaly detection.

The three strategies share one dispatch contract but take different
parameters. Each strategy gets its own parameter model, tagged by
``strategy``, so a field-restricted strategy carries its fixed field in the
type instead of silently ignoring the caller's choice at runtime.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from defect_insight.core.exceptions import SubmissionError, UnknownStrategyError
from defect_insight.data.schema import DefectRecord


class DetectionStrategy(str, Enum):
    """Available detection strategies."""

    FREQUENCY_OUTLIER = "frequency-outlier"
    Z_SCORE = "z-score"
    INTERQUARTILE_RANGE = "interquartile-range"


# Names used by the defect dashboard's algorithm selector
LEGACY_STRATEGY_NAMES: Dict[str, DetectionStrategy] = {
    "detectAnomaliesByFrequency": DetectionStrategy.FREQUENCY_OUTLIER,
    "detectAnomaliesByZScore": DetectionStrategy.Z_SCORE,
    "detectAnomaliesByIQR": DetectionStrategy.INTERQUARTILE_RANGE,
}


def parse_strategy(name: Union[str, DetectionStrategy]) -> DetectionStrategy:
    """
    Resolve a strategy name.

    Accepts enum members, their values, or the dashboard's legacy names.

    Raises:
        UnknownStrategyError: If the name matches no strategy
    """
    if isinstance(name, DetectionStrategy):
        return name
    if name in LEGACY_STRATEGY_NAMES:
        return LEGACY_STRATEGY_NAMES[name]
    try:
        return DetectionStrategy(name)
    except ValueError:
        raise UnknownStrategyError(f"Unknown detection strategy: {name!r}") from None


class FrequencyOutlierParams(BaseModel):
    """
    Frequency-outlier parameters.

    - field: any record field; its values are counted
    - std_multiplier: frequencies above mean + std_multiplier * std are flagged
    """

    strategy: Literal[DetectionStrategy.FREQUENCY_OUTLIER] = DetectionStrategy.FREQUENCY_OUTLIER
    field: str
    std_multiplier: float = 2.0


class ZScoreParams(BaseModel):
    """
    Z-score parameters. Always analyses severity_rating.

    - threshold: records with |z| above it are flagged
    """

    field: ClassVar[str] = "severity_rating"

    strategy: Literal[DetectionStrategy.Z_SCORE] = DetectionStrategy.Z_SCORE
    threshold: float = 3.0


class InterquartileRangeParams(BaseModel):
    """
    Interquartile-range parameters. Always analyses resolution_time.

    There is no caller control value: the fence multiplier and quartile
    positions come from configuration.
    """

    field: ClassVar[str] = "resolution_time"

    strategy: Literal[DetectionStrategy.INTERQUARTILE_RANGE] = DetectionStrategy.INTERQUARTILE_RANGE
    multiplier: float = Field(1.5, ge=0.0)
    q1_fraction: float = Field(0.25, ge=0.0, lt=1.0)
    q3_fraction: float = Field(0.75, ge=0.0, lt=1.0)


DetectionParams = Annotated[
    Union[FrequencyOutlierParams, ZScoreParams, InterquartileRangeParams],
    Field(discriminator="strategy"),
]


class StrategyInfo(BaseModel):
    """
    Catalogue entry describing one strategy for a selection UI.

    Fields:
    - strategy: the strategy
    - legacy_name: name used by the defect dashboard
    - fixed_field: the only field the strategy analyses, None if any field works
    - uses_control_value: False when the control value is ignored
    - information: human-readable description
    """

    strategy: DetectionStrategy
    legacy_name: str
    fixed_field: Optional[str] = None
    uses_control_value: bool = True
    information: str

    def possible_fields(self) -> List[str]:
        if self.fixed_field is not None:
            return [self.fixed_field]
        return DefectRecord.record_fields()

    def accepts_field(self, field: str) -> bool:
        attribute = DefectRecord.resolve_field(field)
        return attribute is not None and attribute in self.possible_fields()


STRATEGY_CATALOGUE: List[StrategyInfo] = [
    StrategyInfo(
        strategy=DetectionStrategy.FREQUENCY_OUTLIER,
        legacy_name="detectAnomaliesByFrequency",
        information=(
            "Counts how often each value of a field occurs across the batch. "
            "Values whose count exceeds mean + control value * standard deviation "
            "of all counts are flagged, together with every record carrying them."
        ),
    ),
    StrategyInfo(
        strategy=DetectionStrategy.Z_SCORE,
        legacy_name="detectAnomaliesByZScore",
        fixed_field=ZScoreParams.field,
        information=(
            "Measures how many standard deviations a severity rating lies from "
            "the batch mean. Ratings with an absolute z-score above the control "
            "value are flagged."
        ),
    ),
    StrategyInfo(
        strategy=DetectionStrategy.INTERQUARTILE_RANGE,
        legacy_name="detectAnomaliesByIQR",
        fixed_field=InterquartileRangeParams.field,
        uses_control_value=False,
        information=(
            "Flags resolution times outside (Q1 - 1.5 * IQR, Q3 + 1.5 * IQR), "
            "where IQR = Q3 - Q1."
        ),
    ),
]


def strategy_info(name: Union[str, DetectionStrategy]) -> StrategyInfo:
    """Catalogue entry for a strategy name (raises UnknownStrategyError)."""
    strategy = parse_strategy(name)
    for info in STRATEGY_CATALOGUE:
        if info.strategy == strategy:
            return info
    raise UnknownStrategyError(f"Strategy {strategy.value!r} missing from catalogue")


class SubmissionReport(BaseModel):
    """
    Outcome of submitting anomaly observations to the external store.

    Submissions are independent: some may succeed while others fail.

    Fields:
    - submitted: ids accepted by the store, in submission order
    - failed: id -> failure reason for rejected observations
    """

    submitted: List[str] = Field(default_factory=list)
    failed: Dict[str, str] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.submitted) + len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    @property
    def partial(self) -> bool:
        return bool(self.submitted) and bool(self.failed)

    def raise_for_failures(self) -> None:
        """Raise SubmissionError if any observation was rejected."""
        if self.failed:
            details = "; ".join(f"{k}: {v}" for k, v in self.failed.items())
            raise SubmissionError(
                f"{len(self.failed)} of {self.total} anomaly submissions failed ({details})"
            )
