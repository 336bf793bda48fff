"""
Canonical record schema for the defect analytics pipeline.

This module defines the two observations the analytics core deals with:
a defect record as returned by the external store, and the anomaly
observation derived from it when a record is flagged.

Design rationale:
- Attributes are snake_case; the store's camelCase names are accepted as aliases
- Records are frozen: the analytics layer never mutates its input
- Malformed numeric values become None instead of failing validation, so they
  drop out of averages and detectors rather than rejecting the whole record
- Integral numbers are kept as int so their string form matches the store's
"""

import math
import numbers
from datetime import date as date_type
from typing import Any, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Number = Union[int, float]


def _coerce_number(value: Any) -> Optional[Number]:
    """Return a finite number for value, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


class DefectRecord(BaseModel):
    """
    Canonical representation of a single manufacturing defect.

    Attributes:
        id: Identifier, unique within a batch
        date: Date the defect was reported (as supplied by the store)
        time: Time of day the defect was reported
        defect_name: Name of the defect
        station: Assembly station where it was found
        part_of_the_car: Affected part
        reporter_name: Free-text name of the reporter
        part_number: Part number (None if malformed)
        severity_rating: Severity rating (None if malformed)
        car_model: Car model
        motor_type: Motor type
        design_package: Design package
        production_shift: Production shift
        resolution_time: Hours needed to resolve (None if malformed)
        root_cause_identified: Free-text "yes"/"no", compared case-insensitively
        defect_category: Defect category

    Notes:
        - Construct with either attribute names or the store's camelCase keys
        - Records are immutable once validated
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
    date: str
    time: str
    defect_name: str
    station: str
    part_of_the_car: str
    reporter_name: str
    part_number: Optional[Number] = None
    severity_rating: Optional[Number] = None
    car_model: str
    motor_type: str
    design_package: str
    production_shift: str
    resolution_time: Optional[Number] = None
    root_cause_identified: Optional[str] = None
    defect_category: str

    @field_validator("part_number", "severity_rating", "resolution_time", mode="before")
    @classmethod
    def _numeric_or_none(cls, value: Any) -> Optional[Number]:
        return _coerce_number(value)

    @property
    def root_cause_known(self) -> bool:
        """True when the root cause was identified ("yes", any case)."""
        return (self.root_cause_identified or "").strip().lower() == "yes"

    @property
    def root_cause_unknown(self) -> bool:
        """True when the root cause was explicitly not identified ("no", any case)."""
        return (self.root_cause_identified or "").strip().lower() == "no"

    @classmethod
    def record_fields(cls) -> List[str]:
        """Attribute names that can be grouped on or flagged."""
        return list(cls.model_fields)

    @classmethod
    def resolve_field(cls, name: str) -> Optional[str]:
        """
        Map an attribute name or camelCase alias to the attribute name.

        Returns:
            Attribute name, or None if the record has no such field
        """
        for attribute, info in cls.model_fields.items():
            if name == attribute or name == info.alias:
                return attribute
        return None

    def value_of(self, name: str) -> Any:
        """Value of a field given by attribute name or alias."""
        attribute = self.resolve_field(name)
        if attribute is None:
            raise KeyError(name)
        return getattr(self, attribute)


class AnomalyObservation(BaseModel):
    """
    A defect record flagged as statistically unusual along one field.

    Fields:
    - id: unique identifier (generated unless the caller supplies one)
    - defect_id: id of the source DefectRecord (lookup only, no ownership)
    - status: workflow state
    - note: human-readable justification
    - flagged_by: "system" for automatic detections, a user identifier otherwise
    - date/time: when the record was flagged
    - suspected_field: field that triggered the flag
    - suspected_value: stringified value of that field
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(default_factory=lambda: str(uuid4()))
    defect_id: int
    status: str = "under review"
    note: str = ""
    flagged_by: str
    date: date_type
    time: str
    suspected_field: str
    suspected_value: str

    def to_store_payload(self) -> dict:
        """JSON-ready dict using the external store's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
