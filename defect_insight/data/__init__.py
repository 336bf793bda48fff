"""
Data module: Record schema, ingestion, and aggregation primitives.

    Store rows (JSON objects / DataFrame)
        ↓
    Ingestion (defect_insight/data/ingestion.py) → DefectRecord
        ↓
    Aggregation primitives (defect_insight/data/aggregation.py)
        ↓
    Metrics engine / anomaly engine
"""

from defect_insight.data.aggregation import (
    average,
    count_by,
    group_by,
    key_of,
    most_common,
    percentage,
)
from defect_insight.data.ingestion import (
    defects_from_dataframe,
    parse_defect,
    parse_defects,
)
from defect_insight.data.schema import AnomalyObservation, DefectRecord

__all__ = [
    # Schema
    "DefectRecord",
    "AnomalyObservation",

    # Ingestion
    "parse_defect",
    "parse_defects",
    "defects_from_dataframe",

    # Aggregation
    "key_of",
    "group_by",
    "count_by",
    "average",
    "percentage",
    "most_common",
]
