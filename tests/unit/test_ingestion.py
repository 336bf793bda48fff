"""
Unit tests for defect ingestion.
"""

import pandas as pd
import pytest

from defect_insight.core.exceptions import DataValidationError
from defect_insight.data.ingestion import defects_from_dataframe, parse_defect, parse_defects


def test_parse_defect_valid_row(sample_store_rows):
    record = parse_defect(sample_store_rows[0])
    assert record.id == 1
    assert record.car_model == "Base"


def test_parse_defect_invalid_row_raises():
    with pytest.raises(DataValidationError):
        parse_defect({"id": 3, "station": "Axle Installation"})


def test_parse_defect_rejects_non_mapping():
    with pytest.raises(DataValidationError):
        parse_defect(["not", "a", "row"])


def test_parse_defects_skips_bad_rows(sample_store_rows):
    rows = [sample_store_rows[0], {"id": "x"}, sample_store_rows[1]]

    records, skipped = parse_defects(rows)

    assert [r.id for r in records] == [1, 2]
    assert skipped == 1


def test_defects_from_dataframe(sample_store_dataframe):
    records, skipped = defects_from_dataframe(sample_store_dataframe)

    assert skipped == 0
    assert [r.id for r in records] == [1, 2]
    assert records[1].severity_rating is None


def test_defects_from_dataframe_nan_numeric(sample_store_rows):
    df = pd.DataFrame(sample_store_rows)
    df["resolutionTime"] = [float("nan"), 3.0]

    records, skipped = defects_from_dataframe(df)

    assert skipped == 0
    assert records[0].resolution_time is None
    assert records[1].resolution_time == 3


def test_parse_defects_oversized_number_does_not_abort_batch(sample_store_rows):
    oversized = dict(sample_store_rows[0], id=3, resolutionTime=10**400)

    records, skipped = parse_defects([sample_store_rows[0], oversized])

    assert skipped == 0
    assert [r.id for r in records] == [1, 3]
    assert records[1].resolution_time is None
