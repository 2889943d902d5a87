"""Canonicalise the tabular shapes the suggester accepts.

Four shapes are recognised, tried in this order:

1. Already canonical: ``{"labels": [...], "datasets": [{"label": ..., "data": [...]}]}``
2. A wrapper exposing ``transformedData`` (unwrapped exactly once)
3. An array of records, ``[{"Subject": "Maths", "Score": 95}, ...]`` (or a pandas DataFrame)
4. A flat array of scalars, ``[3, 1, 4, 1, 5]``
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Sequence

import numpy as np
import pandas as pd
from pandas.api.types import is_numeric_dtype, is_string_dtype

from errors import UnrecognisedFormatError
from models import CanonicalDataset, Series

logger = logging.getLogger(__name__)


def label_text(label: Any) -> str:
    if label is None:
        return ""
    if isinstance(label, float):
        if math.isnan(label):
            return ""
        if label.is_integer():
            return str(int(label))
    return str(label)


def clean_numeric_column(series: pd.Series) -> pd.Series:
    """Turn text like ``"$1,200"`` or ``"45%"`` into numbers when every present value parses."""
    if series is None or is_numeric_dtype(series.dtype):
        return series
    if series.dtype == 'object' or is_string_dtype(series.dtype):
        present = series.notna()
        if not present.any():
            return series
        s_cleaned = series.astype(str).str.replace(r'[$,%]', '', regex=True).str.strip()
        s_numeric = pd.to_numeric(s_cleaned.where(present), errors='coerce')
        if (s_numeric.notna() == present).all():
            return s_numeric
    return series


def _column_points(series: pd.Series) -> List[Any]:
    points = []
    for value in series.tolist():
        if value is None or (isinstance(value, float) and math.isnan(value)):
            points.append(None)
        else:
            points.append(value)
    return points


def dataframe_to_dataset(df: pd.DataFrame) -> CanonicalDataset:
    """First column becomes the labels, every other column one series named after it."""
    if len(df.columns) == 0:
        logger.warning("First data record has no fields; returning an empty dataset")
        return CanonicalDataset(labels=[], datasets=[Series(data=[])])

    label_col, *value_cols = list(df.columns)
    labels = [label_text(v) for v in df[label_col].tolist()]
    datasets = [
        Series(data=_column_points(clean_numeric_column(df[col])), label=str(col))
        for col in value_cols
    ]
    logger.debug("Converted %d records into %d labels and %d series", len(df), len(labels), len(datasets))
    return CanonicalDataset(labels=labels, datasets=datasets)


def records_to_dataset(records: Sequence[Mapping[str, Any]]) -> CanonicalDataset:
    # the first record's keys fix the columns; later rows missing a key get a blank point
    columns = list(records[0].keys())
    if not columns:
        return dataframe_to_dataset(pd.DataFrame())
    rows = [[rec.get(col) if isinstance(rec, Mapping) else None for col in columns] for rec in records]
    df = pd.DataFrame(rows, columns=columns, dtype=object)
    return dataframe_to_dataset(df)


def _series_from(entry: Any) -> Series:
    if isinstance(entry, Series):
        return Series(data=list(entry.data), label=entry.label)
    if isinstance(entry, Mapping):
        data = entry.get("data") or []
        label = entry.get("label")
        return Series(data=list(data), label=None if label is None else str(label))
    raise UnrecognisedFormatError("Dataset entries must be objects with a 'data' field")


def _is_canonical(data: Mapping[str, Any]) -> bool:
    datasets = data.get("datasets")
    if not isinstance(datasets, (list, tuple)):
        return False
    if data.get("labels") is not None:
        return True
    return bool(datasets) and isinstance(datasets[0], (Mapping, Series)) and _has_data(datasets[0])


def _has_data(entry: Any) -> bool:
    if isinstance(entry, Series):
        return entry.data is not None
    return entry.get("data") is not None


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (Mapping, list, tuple, np.ndarray))


def normalize_data_format(data: Any, _allow_unwrap: bool = True) -> CanonicalDataset:
    """Convert any accepted input shape into a CanonicalDataset.

    Raises UnrecognisedFormatError for None, empty arrays and anything else
    that matches none of the accepted shapes.
    """
    if data is None:
        logger.error("Data normalisation failed: no data provided")
        raise UnrecognisedFormatError("No data provided for analysis")

    if isinstance(data, CanonicalDataset):
        return CanonicalDataset(labels=list(data.labels), datasets=[_series_from(s) for s in data.datasets])

    if isinstance(data, Mapping):
        if _is_canonical(data):
            logger.debug("Data already in canonical format")
            labels = data.get("labels") or []
            return CanonicalDataset(
                labels=[label_text(label) for label in labels],
                datasets=[_series_from(entry) for entry in data["datasets"]],
            )
        if _allow_unwrap and "transformedData" in data and data["transformedData"] is not None:
            logger.debug("Extracting data from transformedData wrapper")
            return normalize_data_format(data["transformedData"], _allow_unwrap=False)

    if isinstance(data, pd.DataFrame):
        if data.empty:
            raise UnrecognisedFormatError("Empty data frame provided")
        logger.debug("Converting data frame with columns %s", list(data.columns))
        return dataframe_to_dataset(data)

    if isinstance(data, np.ndarray):
        data = data.tolist()

    if isinstance(data, (list, tuple)):
        if not data:
            logger.error("Data normalisation failed: empty array")
            raise UnrecognisedFormatError("Empty array provided")
        if isinstance(data[0], Mapping):
            logger.debug("Converting array of %d records", len(data))
            return records_to_dataset(data)
        if _is_scalar(data[0]):
            logger.debug("Converting flat array of %d values", len(data))
            return CanonicalDataset(
                labels=[f"Item {i + 1}" for i in range(len(data))],
                datasets=[Series(data=list(data))],
            )

    logger.error("Data normalisation failed: unrecognised format (type=%s)", type(data).__name__)
    raise UnrecognisedFormatError()
