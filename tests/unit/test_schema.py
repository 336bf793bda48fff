"""
Unit tests for the record schema.

Tests the Pydantic models for defect records and anomaly observations.
"""

import pytest
from datetime import date
from pydantic import ValidationError

from defect_insight.data.schema import AnomalyObservation, DefectRecord


class TestDefectRecord:
    """Test DefectRecord model."""

    def test_from_store_keys(self, sample_store_rows):
        record = DefectRecord.model_validate(sample_store_rows[0])

        assert record.id == 1
        assert record.defect_name == "Loose bolt"
        assert record.part_of_the_car == "Axle"
        assert record.resolution_time == 5.5
        assert record.severity_rating == 3

    def test_malformed_numeric_becomes_none(self, sample_store_rows):
        record = DefectRecord.model_validate(sample_store_rows[1])
        assert record.severity_rating is None

    def test_numeric_strings_are_parsed(self, make_defect):
        record = make_defect(resolution_time="7.5", severity_rating="4")
        assert record.resolution_time == 7.5
        assert record.severity_rating == 4
        assert isinstance(record.severity_rating, int)

    def test_int_too_large_for_float_becomes_none(self, make_defect):
        record = make_defect(resolution_time=10**400)
        assert record.resolution_time is None

    def test_missing_categorical_field_rejected(self, sample_store_rows):
        row = dict(sample_store_rows[0])
        del row["station"]
        with pytest.raises(ValidationError):
            DefectRecord.model_validate(row)

    def test_record_is_frozen(self, make_defect):
        record = make_defect()
        with pytest.raises(ValidationError):
            record.station = "Elsewhere"

    def test_root_cause_flags_case_insensitive(self, make_defect):
        assert make_defect(root_cause_identified="YES").root_cause_known
        assert make_defect(root_cause_identified="No").root_cause_unknown
        maybe = make_defect(root_cause_identified="maybe")
        assert not maybe.root_cause_known
        assert not maybe.root_cause_unknown
        assert not make_defect(root_cause_identified=None).root_cause_known

    def test_resolve_field(self):
        assert DefectRecord.resolve_field("partOfTheCar") == "part_of_the_car"
        assert DefectRecord.resolve_field("part_of_the_car") == "part_of_the_car"
        assert DefectRecord.resolve_field("colour") is None

    def test_value_of(self, make_defect):
        record = make_defect(station="Windshield Installation")
        assert record.value_of("station") == "Windshield Installation"
        with pytest.raises(KeyError):
            record.value_of("colour")


class TestAnomalyObservation:
    """Test AnomalyObservation model."""

    def test_defaults(self):
        obs = AnomalyObservation(
            defect_id=7,
            flagged_by="system",
            date=date(2024, 3, 1),
            time="10:00:00",
            suspected_field="station",
            suspected_value="Axle Installation",
        )

        assert obs.status == "under review"
        assert obs.id

    def test_ids_are_unique(self):
        kwargs = dict(
            defect_id=7,
            flagged_by="system",
            date=date(2024, 3, 1),
            time="10:00:00",
            suspected_field="station",
            suspected_value="x",
        )
        assert AnomalyObservation(**kwargs).id != AnomalyObservation(**kwargs).id

    def test_store_payload_uses_camel_case(self):
        obs = AnomalyObservation(
            id="a-1",
            defect_id=7,
            note="manual check",
            flagged_by="user",
            date=date(2024, 3, 1),
            time="10:00:00",
            suspected_field="resolutionTime",
            suspected_value="42",
        )

        payload = obs.to_store_payload()

        assert payload["defectId"] == 7
        assert payload["flaggedBy"] == "user"
        assert payload["suspectedField"] == "resolutionTime"
        assert payload["date"] == "2024-03-01"
