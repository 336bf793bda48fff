"""
Metrics aggregation engine.

Builds the fixed catalogue of summary statistics over a batch of defect
records: resolution-time and severity averages along every dimension of
interest, frequency counts, root-cause rates, and per-reporter / per-model
summaries.

Every record contributes to every applicable aggregation; only the
root-cause cohorts filter (on "yes" and "no" respectively).
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence, TypeVar

from defect_insight.data.aggregation import (
    average,
    count_by,
    group_by,
    most_common,
    percentage,
    sorted_keys,
)
from defect_insight.data.schema import DefectRecord

from .schema import DefectMetrics, ModelComparison, ReporterSummary

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _ordered(mapping: Dict[str, V]) -> Dict[str, V]:
    return {k: mapping[k] for k in sorted_keys(mapping)}


def _per_group(
    groups: Dict[str, List[DefectRecord]],
    summarize: Callable[[List[DefectRecord]], V],
) -> Dict[str, V]:
    return _ordered({k: summarize(members) for k, members in groups.items()})


def _avg_resolution(records: Sequence[DefectRecord]) -> float:
    return average(r.resolution_time for r in records)


def _avg_severity(records: Sequence[DefectRecord]) -> float:
    return average(r.severity_rating for r in records)


def _root_cause_rate(records: Sequence[DefectRecord]) -> float:
    return percentage(sum(1 for r in records if r.root_cause_known), len(records))


def calculate_defect_metrics(records: Sequence[DefectRecord]) -> DefectMetrics:
    """
    Compute the full metrics summary for a batch.

    Args:
        records: The complete batch of defect records

    Returns:
        DefectMetrics

    Notes:
        - Empty groups and an empty batch resolve to 0 / "N/A", never an error
        - The most common defect of a station breaks ties by first appearance
    """
    records = list(records)

    by_severity = group_by(records, "severity_rating")
    by_defect = group_by(records, "defect_name")
    by_station = group_by(records, "station")
    by_part = group_by(records, "part_of_the_car")
    by_model = group_by(records, "car_model")
    by_reporter = group_by(records, "reporter_name")

    with_root = [r for r in records if r.root_cause_known]
    without_root = [r for r in records if r.root_cause_unknown]

    metrics = DefectMetrics(
        record_count=len(records),
        overall_avg_resolution=_avg_resolution(records),
        avg_resolution_per_severity=_per_group(by_severity, _avg_resolution),
        avg_resolution_per_defect=_per_group(by_defect, _avg_resolution),
        avg_resolution_per_station=_per_group(by_station, _avg_resolution),
        avg_resolution_per_part=_per_group(by_part, _avg_resolution),
        defect_count_per_defect=_ordered(count_by(records, "defect_name")),
        defect_count_per_model=_ordered(count_by(records, "car_model")),
        defect_count_per_part=_ordered(count_by(records, "part_of_the_car")),
        defect_count_per_shift=_ordered(count_by(records, "production_shift")),
        severity_distribution=_ordered(count_by(records, "severity_rating")),
        most_common_defect_per_station=_per_group(
            by_station, lambda members: most_common(r.defect_name for r in members)
        ),
        avg_severity_per_model=_per_group(by_model, _avg_severity),
        avg_severity_per_station=_per_group(by_station, _avg_severity),
        percent_root_cause_identified=_root_cause_rate(records),
        root_cause_per_defect=_per_group(by_defect, _root_cause_rate),
        avg_with_root=_avg_resolution(with_root),
        avg_without_root=_avg_resolution(without_root),
        reporters=_per_group(
            by_reporter,
            lambda members: ReporterSummary(
                report_count=len(members),
                avg_severity=_avg_severity(members),
                avg_resolution_time=_avg_resolution(members),
            ),
        ),
        model_comparison=_per_group(
            by_model,
            lambda members: ModelComparison(
                avg_severity=_avg_severity(members),
                avg_resolution_time=_avg_resolution(members),
            ),
        ),
    )

    logger.debug(
        f"Computed defect metrics over {len(records)} records "
        f"({len(by_station)} stations, {len(by_model)} car models)"
    )
    return metrics
