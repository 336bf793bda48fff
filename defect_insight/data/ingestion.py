"""
Defect record ingestion.

Turns rows already fetched from the external defect store (JSON objects or a
pandas DataFrame) into validated DefectRecord objects. Nothing here touches
the filesystem or the network; retrieval is the caller's job.

Design:
- Rows are validated individually so one bad row doesn't drop the batch
- Bad rows are logged and counted, never raised from the batch helpers
- Input order is preserved
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Tuple

import pandas as pd
from pydantic import ValidationError

from defect_insight.core.exceptions import DataValidationError

from .schema import DefectRecord

logger = logging.getLogger(__name__)


def parse_defect(row: Mapping[str, Any]) -> DefectRecord:
    """
    Validate a single store row.

    Args:
        row: Mapping with camelCase store keys or snake_case attribute names

    Returns:
        DefectRecord

    Raises:
        DataValidationError: If required fields are missing or malformed
    """
    if not isinstance(row, Mapping):
        raise DataValidationError(f"Defect row must be a mapping, got {type(row).__name__}")
    try:
        return DefectRecord.model_validate(dict(row))
    except ValidationError as e:
        raise DataValidationError(f"Invalid defect row {row.get('id')!r}: {e}") from e


def parse_defects(rows: Iterable[Mapping[str, Any]]) -> Tuple[List[DefectRecord], int]:
    """
    Validate a batch of store rows.

    Returns:
        Tuple of (records, skipped_count)

    Notes:
        - Rows that fail validation are skipped (logged as warnings)
    """
    records: List[DefectRecord] = []
    skipped = 0

    for idx, row in enumerate(rows):
        try:
            records.append(parse_defect(row))
        except DataValidationError as e:
            logger.warning(f"Skipped defect row at index {idx}: {e}")
            skipped += 1

    if skipped:
        logger.info(f"Parsed {len(records)} defect records, skipped {skipped}")
    return records, skipped


def _clean_cell(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def defects_from_dataframe(df: pd.DataFrame) -> Tuple[List[DefectRecord], int]:
    """
    Validate every row of a DataFrame.

    NaN cells are treated as missing values before validation.

    Returns:
        Tuple of (records, skipped_count)
    """
    rows = [
        {column: _clean_cell(value) for column, value in row.items()}
        for row in df.to_dict(orient="records")
    ]
    return parse_defects(rows)
