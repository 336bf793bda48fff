"""
Result models for defect metrics.

All results are derived values with no identity of their own: they are
recomputed from the batch on every call and never cached here.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ReporterSummary(BaseModel):
    """Per-reporter activity."""

    report_count: int = Field(ge=0)
    avg_severity: float
    avg_resolution_time: float


class ModelComparison(BaseModel):
    """Average severity and resolution time of one car model, side by side."""

    avg_severity: float
    avg_resolution_time: float


class DefectMetrics(BaseModel):
    """
    Summary statistics over one batch of defect records.

    Mapping keys are the stringified group values (see key_of), ordered
    numerically where possible and alphabetically otherwise, so the summary
    does not depend on input order. Percentages are 0-100 floats.
    """

    record_count: int = Field(ge=0)
    overall_avg_resolution: float

    avg_resolution_per_severity: Dict[str, float]
    avg_resolution_per_defect: Dict[str, float]
    avg_resolution_per_station: Dict[str, float]
    avg_resolution_per_part: Dict[str, float]

    defect_count_per_defect: Dict[str, int]
    defect_count_per_model: Dict[str, int]
    defect_count_per_part: Dict[str, int]
    defect_count_per_shift: Dict[str, int]
    severity_distribution: Dict[str, int]

    most_common_defect_per_station: Dict[str, str]

    avg_severity_per_model: Dict[str, float]
    avg_severity_per_station: Dict[str, float]

    percent_root_cause_identified: float = Field(ge=0.0, le=100.0)
    root_cause_per_defect: Dict[str, float]
    avg_with_root: float
    avg_without_root: float

    reporters: Dict[str, ReporterSummary]
    model_comparison: Dict[str, ModelComparison]


class CategoryCount(BaseModel):
    category: str
    count: int


class ModelDefectRates(BaseModel):
    """
    Defect breakdown of one car model.

    Rates are percentages of the model's own defect total.
    """

    car_model: str
    total: int
    motor_type_rates: Dict[str, float]
    design_package_rates: Dict[str, float]


class LabelShare(BaseModel):
    """Share of the whole batch carrying one label (percentage)."""

    id: int
    label: str
    value: float


class StationDefect(BaseModel):
    id: int
    resolution_time: Optional[float] = None


class StationDefects(BaseModel):
    station: str
    defects: List[StationDefect] = Field(default_factory=list)
