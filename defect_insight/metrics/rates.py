"""
Catalogue-driven defect rate breakdowns.

These helpers compare the batch against the reference catalogues in
CatalogueConfig (car models, motor types, design packages, stations).
The catalogue is always an explicit argument; when omitted, the configured
default is used.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from defect_insight.core.config import CatalogueConfig, config
from defect_insight.data.aggregation import count_by, key_of, percentage
from defect_insight.data.schema import DefectRecord

from .schema import (
    CategoryCount,
    LabelShare,
    ModelDefectRates,
    StationDefect,
    StationDefects,
)

logger = logging.getLogger(__name__)


def top_defect_categories(
    records: Sequence[DefectRecord], limit: int = 5
) -> List[CategoryCount]:
    """
    Most frequent defect categories, highest count first.

    Ties keep the order in which categories first appear.
    """
    counts = count_by(records, "defect_category")
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CategoryCount(category=c, count=n) for c, n in ranked[:limit]]


def defect_rates_per_model(
    records: Sequence[DefectRecord],
    catalogue: Optional[CatalogueConfig] = None,
) -> List[ModelDefectRates]:
    """
    Motor type and design package split for every catalogued car model.

    Returns:
        One entry per catalogue car model, in catalogue order. Rates are
        percentages of that model's defects; a model without defects has
        total 0 and all rates 0.
    """
    catalogue = catalogue or config.catalogue
    results: List[ModelDefectRates] = []

    for model in catalogue.car_models:
        model_records = [r for r in records if r.car_model == model]
        total = len(model_records)
        motor_counts = count_by(model_records, "motor_type")
        package_counts = count_by(model_records, "design_package")

        results.append(
            ModelDefectRates(
                car_model=model,
                total=total,
                motor_type_rates={
                    motor: percentage(motor_counts.get(motor, 0), total)
                    for motor in catalogue.motor_types
                },
                design_package_rates={
                    package: percentage(package_counts.get(package, 0), total)
                    for package in catalogue.design_packages
                },
            )
        )

    return results


def share_by_label(
    records: Sequence[DefectRecord], field: str, labels: Sequence[str]
) -> List[LabelShare]:
    """
    Percentage of the whole batch whose field equals each label.

    Args:
        records: Defect batch
        field: Record field (attribute name or alias)
        labels: Labels to report, in output order

    Returns:
        One LabelShare per label; [] for an empty batch
    """
    if not records:
        return []

    counts = count_by(records, field)
    total = len(records)
    return [
        LabelShare(id=idx, label=label, value=percentage(counts.get(key_of(label), 0), total))
        for idx, label in enumerate(labels)
    ]


def model_defect_rate(
    records: Sequence[DefectRecord], catalogue: Optional[CatalogueConfig] = None
) -> List[LabelShare]:
    catalogue = catalogue or config.catalogue
    return share_by_label(records, "car_model", catalogue.car_models)


def motor_type_defect_rate(
    records: Sequence[DefectRecord], catalogue: Optional[CatalogueConfig] = None
) -> List[LabelShare]:
    catalogue = catalogue or config.catalogue
    return share_by_label(records, "motor_type", catalogue.motor_types)


def package_defect_rate(
    records: Sequence[DefectRecord], catalogue: Optional[CatalogueConfig] = None
) -> List[LabelShare]:
    catalogue = catalogue or config.catalogue
    return share_by_label(records, "design_package", catalogue.design_packages)


def defects_per_station(
    records: Sequence[DefectRecord],
    station: str,
    catalogue: Optional[CatalogueConfig] = None,
) -> StationDefects:
    """
    Ids and resolution times of the defects found at one station.

    Station names are compared case-insensitively. A station that isn't in the
    catalogue yields an empty defect list.
    """
    catalogue = catalogue or config.catalogue
    wanted = station.lower()
    result = StationDefects(station=station)

    if wanted not in {s.lower() for s in catalogue.stations}:
        logger.debug(f"Station {station!r} not in catalogue")
        return result

    result.defects.extend(
        StationDefect(id=r.id, resolution_time=r.resolution_time)
        for r in records
        if r.station.lower() == wanted
    )
    return result
