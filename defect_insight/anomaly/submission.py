"""
Submission of anomaly observations to the external store.

The store's create operation is supplied by the caller. Each observation is
submitted on its own; a failure does not stop the remaining submissions and
is reported back instead of being swallowed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from defect_insight.data.schema import AnomalyObservation

from .schema import SubmissionReport

logger = logging.getLogger(__name__)


def submit_anomalies(
    anomalies: Iterable[AnomalyObservation],
    create: Callable[[AnomalyObservation], Any],
) -> SubmissionReport:
    """
    Submit every observation through the store's create operation.

    Args:
        anomalies: Observations to persist
        create: Callable persisting one observation; any exception counts as
            a failed submission

    Returns:
        SubmissionReport listing accepted ids and failure reasons
    """
    report = SubmissionReport()

    for anomaly in anomalies:
        try:
            create(anomaly)
        except Exception as e:
            logger.error(f"Store rejected anomaly {anomaly.id}: {e}")
            report.failed[anomaly.id] = str(e) or type(e).__name__
            continue
        report.submitted.append(anomaly.id)

    if report.partial:
        logger.warning(
            f"Partial anomaly submission: {len(report.submitted)} stored, "
            f"{len(report.failed)} failed"
        )
    return report
