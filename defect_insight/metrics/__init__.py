"""
Metrics module: Summary statistics and catalogue rate breakdowns.
"""

from .engine import calculate_defect_metrics
from .rates import (
    defect_rates_per_model,
    defects_per_station,
    model_defect_rate,
    motor_type_defect_rate,
    package_defect_rate,
    share_by_label,
    top_defect_categories,
)
from .schema import (
    CategoryCount,
    DefectMetrics,
    LabelShare,
    ModelComparison,
    ModelDefectRates,
    ReporterSummary,
    StationDefect,
    StationDefects,
)

__all__ = [
    "calculate_defect_metrics",
    "DefectMetrics",
    "ReporterSummary",
    "ModelComparison",
    "top_defect_categories",
    "defect_rates_per_model",
    "share_by_label",
    "model_defect_rate",
    "motor_type_defect_rate",
    "package_defect_rate",
    "defects_per_station",
    "CategoryCount",
    "ModelDefectRates",
    "LabelShare",
    "StationDefect",
    "StationDefects",
]
