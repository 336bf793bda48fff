"""
Pytest configuration and shared fixtures.

Provides a defect record factory and sample batches for unit and integration tests.
"""

import pytest
from typing import Any, Callable, Dict, List
import pandas as pd

from defect_insight.data.schema import DefectRecord


def build_defect(id: int = 1, **overrides: Any) -> DefectRecord:
    """
    Build a DefectRecord with realistic defaults.

    Any field can be overridden by attribute name.
    """
    data: Dict[str, Any] = {
        "id": id,
        "date": "2024-03-01",
        "time": "08:15:00",
        "defect_name": "Loose bolt",
        "station": "Axle Installation",
        "part_of_the_car": "Axle",
        "reporter_name": "Sam",
        "part_number": 4711,
        "severity_rating": 3,
        "car_model": "Base",
        "motor_type": "Standard",
        "design_package": "Eco",
        "production_shift": "Morning",
        "resolution_time": 5,
        "root_cause_identified": "yes",
        "defect_category": "Mechanical",
    }
    data.update(overrides)
    return DefectRecord(**data)


@pytest.fixture
def make_defect() -> Callable[..., DefectRecord]:
    """Fixture exposing the defect factory."""
    return build_defect


@pytest.fixture
def sample_defects() -> List[DefectRecord]:
    """
    Fixture providing a small, varied defect batch.

    Returns:
        List[DefectRecord]: 6 records across 3 stations, 2 car models,
        2 reporters and mixed root-cause flags
    """
    return [
        build_defect(1, station="Axle Installation", defect_name="Loose bolt",
                     car_model="Base", reporter_name="Sam", severity_rating=2,
                     resolution_time=4, root_cause_identified="yes", production_shift="Morning"),
        build_defect(2, station="Axle Installation", defect_name="Misalignment",
                     car_model="Base", reporter_name="Sam", severity_rating=4,
                     resolution_time=8, root_cause_identified="No", production_shift="Morning"),
        build_defect(3, station="Axle Installation", defect_name="Misalignment",
                     car_model="Long", reporter_name="Alex", severity_rating=4,
                     resolution_time=6, root_cause_identified="YES", production_shift="Night"),
        build_defect(4, station="Dashboard Installation", defect_name="Scratch",
                     car_model="Long", reporter_name="Alex", severity_rating=1,
                     resolution_time=2, root_cause_identified="no", production_shift="Night",
                     part_of_the_car="Dashboard"),
        build_defect(5, station="Dashboard Installation", defect_name="Loose bolt",
                     car_model="Base", reporter_name="Sam", severity_rating=3,
                     resolution_time=10, root_cause_identified="yes", production_shift="Evening",
                     part_of_the_car="Dashboard"),
        build_defect(6, station="Headlight Installation", defect_name="Scratch",
                     car_model="Long", reporter_name="Alex", severity_rating=5,
                     resolution_time=12, root_cause_identified="unknown", production_shift="Morning",
                     part_of_the_car="Headlight"),
    ]


@pytest.fixture
def sample_store_rows() -> List[Dict[str, Any]]:
    """
    Fixture providing rows as the external defect store returns them (camelCase keys).
    """
    return [
        {
            "id": 1,
            "date": "2024-03-01",
            "time": "08:15:00",
            "defectName": "Loose bolt",
            "station": "Axle Installation",
            "partOfTheCar": "Axle",
            "reporterName": "Sam",
            "partNumber": 4711,
            "severityRating": 3,
            "carModel": "Base",
            "motorType": "Standard",
            "designPackage": "Eco",
            "productionShift": "Morning",
            "resolutionTime": 5.5,
            "rootCauseIdentified": "yes",
            "defectCategory": "Mechanical",
        },
        {
            "id": 2,
            "date": "2024-03-02",
            "time": "14:40:00",
            "defectName": "Scratch",
            "station": "Dashboard Installation",
            "partOfTheCar": "Dashboard",
            "reporterName": "Alex",
            "partNumber": 1200,
            "severityRating": "n/a",
            "carModel": "Long",
            "motorType": "Long Range",
            "designPackage": "Luxury",
            "productionShift": "Night",
            "resolutionTime": 3,
            "rootCauseIdentified": "No",
            "defectCategory": "Cosmetic",
        },
    ]


@pytest.fixture
def sample_store_dataframe(sample_store_rows) -> pd.DataFrame:
    """
    Fixture providing the store rows as a pandas DataFrame.
    """
    return pd.DataFrame(sample_store_rows)


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
