"""
Aggregation primitives for defect batches.

Generic grouping, counting and averaging helpers parameterized by an
attribute selector. Everything here is pure: inputs are never mutated and
every function is total over empty input.

Design:
- Group keys are the *string form* of the selected value (see key_of)
- Groups appear in first-encountered order; members keep input order
- Averages skip anything that isn't a finite number and default to 0.0
"""

import logging
import math
from numbers import Real
from typing import Any, Callable, Dict, Iterable, List, Sequence, TypeVar, Union

from .schema import DefectRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

Selector = Union[str, Callable[[Any], Any]]

NOT_AVAILABLE = "N/A"


def key_of(value: Any) -> str:
    """
    Stringify a value for use as a group key.

    This is a deliberate typed-key coercion: numeric 5 and text "5" produce
    the same key and therefore land in the same group.

    - None -> ""
    - integral floats drop the ".0" (5.0 -> "5")
    - everything else -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _selector(key: Selector) -> Callable[[Any], Any]:
    if callable(key):
        return key

    def select(record: Any) -> Any:
        if isinstance(record, DefectRecord):
            return record.value_of(key)
        return getattr(record, key)

    return select


def group_by(records: Iterable[T], key: Selector) -> Dict[str, List[T]]:
    """
    Partition records by the stringified value of a field.

    Args:
        records: Records to group
        key: Attribute name (or camelCase alias), or a callable selector

    Returns:
        Dict mapping key_of(value) -> records sharing that value, in input order
    """
    select = _selector(key)
    groups: Dict[str, List[T]] = {}
    for record in records:
        groups.setdefault(key_of(select(record)), []).append(record)
    return groups


def count_by(records: Iterable[T], key: Selector) -> Dict[str, int]:
    """
    Count records per stringified field value.

    The counts always sum to the number of records.
    """
    select = _selector(key)
    counts: Dict[str, int] = {}
    for record in records:
        value = key_of(select(record))
        counts[value] = counts.get(value, 0) + 1
    return counts


def is_valid_number(value: Any) -> bool:
    """True for finite int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def average(numbers: Iterable[Any]) -> float:
    """
    Arithmetic mean over the valid numbers only.

    Returns:
        Mean of the finite numeric entries, 0.0 if there are none
    """
    valid = [float(n) for n in numbers if is_valid_number(n)]
    if not valid:
        return 0.0
    return sum(valid) / len(valid)


def percentage(part: int, whole: int) -> float:
    """part / whole as a 0-100 float; 0.0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def most_common(values: Iterable[Any]) -> str:
    """
    Most frequent stringified value.

    Ties go to the value encountered first; empty input yields "N/A".
    """
    counts: Dict[str, int] = {}
    for value in values:
        k = key_of(value)
        counts[k] = counts.get(k, 0) + 1

    best = NOT_AVAILABLE
    best_count = 0
    for k, count in counts.items():
        # Strictly greater keeps the earliest key on ties
        if count > best_count:
            best, best_count = k, count
    return best


def population_stats(values: Sequence[float]) -> tuple:
    """
    Population mean and standard deviation.

    Returns:
        (mean, std), (0.0, 0.0) for empty input
    """
    if not values:
        return 0.0, 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return mean, math.sqrt(variance)


def _sort_key(key: str) -> tuple:
    try:
        number = float(key)
    except ValueError:
        return (1, 0.0, key)
    if not math.isfinite(number):
        return (1, 0.0, key)
    return (0, number, key)


def sorted_keys(mapping: Dict[str, Any]) -> List[str]:
    """Mapping keys ordered numerically where possible, then alphabetically."""
    return sorted(mapping, key=_sort_key)
