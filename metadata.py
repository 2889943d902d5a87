"""Structural facts about a dataset, used by the chart scorer."""

from __future__ import annotations

import logging

from characteristics import detect_temporal, is_numeric_label
from models import CanonicalDataset, DatasetMetadata, is_number, resolve_point_value

logger = logging.getLogger(__name__)


def extract_metadata(data: CanonicalDataset) -> DatasetMetadata:
    category_count = len(data.labels)
    numeric_label_count = sum(1 for label in data.labels if is_numeric_label(label))

    point_count = 0
    has_zero = False
    has_negative = False
    for series in data.datasets:
        point_count += len(series.data)
        for point in series.data:
            value = resolve_point_value(point)
            if not is_number(value):
                continue
            if value == 0:
                has_zero = True
            elif value < 0:
                has_negative = True

    metadata = DatasetMetadata(
        dataset_count=len(data.datasets),
        point_count=point_count,
        category_count=category_count,
        has_categorical_labels=category_count > 0 and numeric_label_count < category_count,
        has_numeric_labels=numeric_label_count > 0,
        has_temporal_labels=category_count > 0 and detect_temporal(data) > 0.5,
        all_positive_values=not has_negative,
        has_negative_values=has_negative,
        has_zero_values=has_zero,
    )
    logger.debug(
        "Metadata extraction complete: %d series, %d points, %d categories",
        metadata.dataset_count, metadata.point_count, metadata.category_count,
    )
    return metadata
