"""Characteristic detectors.

Each detector maps a CanonicalDataset to a confidence in [0, 1] that the data
has one statistical property (time series, categories, part-to-whole, ...).
Detectors are independent and pure; ``analyze_characteristics`` runs the whole
registry and absorbs individual failures.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

import numpy as np

from errors import DetectorError
from models import CanonicalDataset, CharacteristicScore, is_number, is_xy_point

logger = logging.getLogger(__name__)

Tracer = Callable[[str, dict], None]

TIME_PATTERNS = [
    re.compile(r"^(19|20)\d{2}$"),
    re.compile(
        r"^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec|January|February|March|April|May|June|"
        r"July|August|September|October|November|December)",
        re.IGNORECASE,
    ),
    re.compile(r"^\d{1,2}[-/.]\d{1,2}([-/.]\d{2,4})?$"),
    re.compile(r"^Q[1-4](\s\d{4})?$", re.IGNORECASE),
    re.compile(r"^\d{1,2}:\d{2}(:\d{2})?$"),
]

# heuristic constants, kept for compatibility with existing rankings
MULTI_SERIES_COMPARISON_SCORE = 0.8
XY_CORRELATION_SCORE = 0.9
NUMERIC_PAIR_CORRELATION_SCORE = 0.6
DISTRIBUTION_FLOOR = 0.3
RANKING_CAP = 0.9
RANKING_MIN_DIVISOR = 0.00001


@dataclass(frozen=True)
class CharacteristicDefinition:
    id: str
    name: str
    description: str
    detect: Callable[[CanonicalDataset], float]


def is_numeric_label(label: str) -> bool:
    try:
        return not math.isnan(float(label))
    except (TypeError, ValueError):
        return False


def is_temporal_label(label: str) -> bool:
    text = str(label).strip()
    return any(pattern.search(text) for pattern in TIME_PATTERNS)


# --- Detectors ---

def detect_temporal(data: CanonicalDataset) -> float:
    if len(data.labels) < 2:
        return 0.0
    matches = sum(1 for label in data.labels if is_temporal_label(label))
    confidence = matches / len(data.labels)
    logger.debug("Temporal detection: %d/%d labels look like time periods", matches, len(data.labels))
    return confidence


def detect_categorical(data: CanonicalDataset) -> float:
    if not data.labels:
        return 0.0
    total = len(data.labels)
    numeric_labels = sum(1 for label in data.labels if is_numeric_label(label))
    distinct_labels = len(set(data.labels))
    non_numeric_ratio = 1 - numeric_labels / total
    distinct_ratio = distinct_labels / total
    confidence = (non_numeric_ratio + distinct_ratio) / 2
    logger.debug("Categorical detection: distinct=%d, numeric=%d, confidence=%.2f", distinct_labels, numeric_labels, confidence)
    return confidence


def detect_comparison(data: CanonicalDataset) -> float:
    if not data.datasets:
        return 0.0
    if len(data.datasets) > 1:
        return MULTI_SERIES_COMPARISON_SCORE

    values = data.datasets[0].scalar_values()
    if len(values) < 2:
        return 0.0
    mean = float(np.mean(values))
    if mean == 0:
        return 0.0
    variation_coefficient = float(np.std(values)) / abs(mean)
    confidence = min(variation_coefficient * 2, 1.0)
    logger.debug("Comparison detection (single series): variationCoeff=%.3f", variation_coefficient)
    return confidence


def detect_correlation(data: CanonicalDataset) -> float:
    if not data.datasets:
        return 0.0
    if any(series.data and is_xy_point(series.data[0]) for series in data.datasets):
        logger.debug("Correlation detection: found x/y point data")
        return XY_CORRELATION_SCORE
    if len(data.datasets) >= 2 and all(
        all(is_number(v) for v in series.data) for series in data.datasets
    ):
        logger.debug("Correlation detection: found %d numeric series", len(data.datasets))
        return NUMERIC_PAIR_CORRELATION_SCORE
    return 0.0


def detect_distribution(data: CanonicalDataset) -> float:
    if len(data.datasets) != 1 or len(data.datasets[0].data) < 8:
        return 0.0

    sorted_values = np.sort(np.asarray(data.datasets[0].scalar_values(), dtype=float))
    if len(sorted_values) < 5:
        return 0.0
    value_range = float(sorted_values[-1] - sorted_values[0])
    if value_range == 0:
        return 0.0

    # how far consecutive gaps stray from an evenly spread set of values
    expected_gap = value_range / (len(sorted_values) - 1)
    gap_variation = float(np.abs(np.diff(sorted_values) - expected_gap).sum())
    normalized_variation = 1 - gap_variation / (value_range * 2)
    confidence = max(DISTRIBUTION_FLOOR, normalized_variation)
    logger.debug("Distribution detection: range=%s, normalizedVariation=%.3f", value_range, normalized_variation)
    return confidence


def detect_part_to_whole(data: CanonicalDataset) -> float:
    if len(data.datasets) != 1 or not 2 <= len(data.labels) <= 12:
        return 0.0

    values = data.datasets[0].scalar_values()
    if not values:
        return 0.0
    if any(v < 0 for v in values):
        logger.debug("Part-to-whole detection: negative values found")
        return 0.0
    mean = float(np.mean(values))
    if mean == 0:
        return 0.0
    average_variation = float(np.mean([abs(v - mean) / mean for v in values]))
    return max(0.0, 1 - average_variation)


def detect_multi_variable(data: CanonicalDataset) -> float:
    if len(data.datasets) < 2:
        return 0.0
    first_length = len(data.datasets[0].data)
    if any(len(series.data) != first_length for series in data.datasets):
        return 0.0
    return 0.9 if len(data.datasets) >= 3 else 0.7


def detect_ranking(data: CanonicalDataset) -> float:
    series = data.first_series
    if series is None or len(series.data) < 3:
        return 0.0
    if detect_categorical(data) <= 0.5:
        return 0.0

    values = series.scalar_values()
    if not values:
        return 0.0
    highest, lowest = max(values), min(values)
    if highest == lowest:
        return 0.0
    ratio = highest / max(RANKING_MIN_DIVISOR, lowest)
    logger.debug("Ranking detection: ratio=%.2f", ratio)
    return max(0.0, min(ratio / 10, RANKING_CAP))


def detect_trend(data: CanonicalDataset) -> float:
    series = data.first_series
    if series is None:
        return 0.0
    is_ordered = detect_temporal(data) > 0.5 or bool(data.labels)
    values = series.scalar_values()
    if not is_ordered or len(values) < 4:
        return 0.0

    steps = np.sign(np.diff(values))
    increasing = int((steps > 0).sum())
    decreasing = int((steps < 0).sum())
    changes = increasing + decreasing
    if changes == 0:
        return 0.0
    consistency = max(increasing, decreasing) / changes
    logger.debug("Trend detection: increasing=%d, decreasing=%d, consistency=%.3f", increasing, decreasing, consistency)
    return consistency


# --- Registry ---

def _build_registry(*definitions: CharacteristicDefinition) -> Mapping[str, CharacteristicDefinition]:
    registry: Dict[str, CharacteristicDefinition] = {}
    for definition in definitions:
        if definition.id in registry:
            raise ValueError(f"Characteristic already registered: {definition.id}")
        registry[definition.id] = definition
    return MappingProxyType(registry)


CHARACTERISTICS = _build_registry(
    CharacteristicDefinition("temporal", "Time Series", "Data represents values over time", detect_temporal),
    CharacteristicDefinition("categorical", "Categorical", "Data is organised into distinct categories", detect_categorical),
    CharacteristicDefinition("comparison", "Comparison", "Data compares values across categories", detect_comparison),
    CharacteristicDefinition("correlation", "Correlation", "Data shows relationship between two variables", detect_correlation),
    CharacteristicDefinition("distribution", "Distribution", "Data shows how values are distributed", detect_distribution),
    CharacteristicDefinition("part_to_whole", "Part-to-Whole", "Data represents parts of a complete whole", detect_part_to_whole),
    CharacteristicDefinition("multi_variable", "Multi-Variable", "Data contains multiple variables for comparison", detect_multi_variable),
    CharacteristicDefinition("ranking", "Ranking", "Data shows ordered comparison by magnitude", detect_ranking),
    CharacteristicDefinition("trend", "Trend", "Data shows a pattern of change over a sequence", detect_trend),
)


def _clamp_score(score: float) -> float:
    score = float(score)
    if math.isnan(score):
        return 0.0
    return min(1.0, max(0.0, score))


def analyze_characteristics(
    data: CanonicalDataset,
    registry: Mapping[str, CharacteristicDefinition] = CHARACTERISTICS,
    tracer: Optional[Tracer] = None,
) -> Dict[str, CharacteristicScore]:
    """Score every registered characteristic. A failing detector scores 0 and carries its DetectorError."""
    results: Dict[str, CharacteristicScore] = {}
    for key, characteristic in registry.items():
        try:
            score = _clamp_score(characteristic.detect(data))
            results[key] = CharacteristicScore(key, characteristic.name, characteristic.description, score)
        except Exception as exc:
            failure = DetectorError(key, exc)
            logger.error("Error detecting %s: %s", characteristic.name, failure)
            results[key] = CharacteristicScore(
                key, characteristic.name, characteristic.description, 0.0, error=str(failure), failure=failure,
            )
        if tracer is not None:
            tracer("characteristic", {"id": key, "score": results[key].score, "error": results[key].error})
    return results
