"""Score every top-level chart type against a dataset's characteristics."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping

from chart_types import CHART_TYPES, PRIMARY_CHART_TYPES, ChartTypeDefinition
from models import CharacteristicScore, ChartScore, DatasetMetadata

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 0.3
STRONG_MATCH_THRESHOLD = 0.6
UNSUITABLE_THRESHOLD = 0.5
PRIMARY_CHART_BONUS = 0.1
MIN_PENALTY_MULTIPLIER = 0.1
MAX_CONFIDENCE = 0.99


def _pct(value: float) -> int:
    return int(round(value * 100))


def _characteristic_score(characteristics: Mapping[str, CharacteristicScore], key: str) -> float:
    found = characteristics.get(key)
    return found.score if found is not None else 0.0


def _limit_penalty(excess: int, limit: int) -> float:
    return min(0.5, excess / limit)


def _chart_specific_penalties(chart_type: str, characteristics: Mapping[str, CharacteristicScore], reasons: List[str]) -> float:
    comparison = _characteristic_score(characteristics, "comparison")
    correlation = _characteristic_score(characteristics, "correlation")
    temporal = _characteristic_score(characteristics, "temporal")
    trend = _characteristic_score(characteristics, "trend")

    if chart_type in ("pie", "doughnut") and comparison > 0.7:
        # widely varying values leave slices that are hard to judge against each other
        penalty = comparison * 0.4
        reasons.append(f"Values are too varied for segments to be compared reliably ({_pct(penalty)}% penalty)")
        return penalty
    if chart_type == "scatter" and correlation < 0.3:
        reasons.append("Data doesn't appear to have correlation pairs (50% penalty)")
        return 0.5
    if chart_type == "line" and temporal < 0.3 and trend < 0.3:
        reasons.append("Data doesn't appear to be time-based or show a clear trend (30% penalty)")
        return 0.3
    return 0.0


def score_chart_type(
    definition: ChartTypeDefinition,
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
) -> ChartScore:
    reasons: List[str] = []

    # 1. base score from the characteristics this chart is good at
    total_score = 0.0
    for key in definition.suitable_for:
        found = characteristics.get(key)
        if found is None or found.score <= MATCH_THRESHOLD:
            continue
        total_score += found.score
        if found.score > STRONG_MATCH_THRESHOLD:
            reasons.append(f"Strong match for {found.name.lower()} data ({_pct(found.score)}% confidence)")
        else:
            reasons.append(f"Suitable for {found.name.lower()} data ({_pct(found.score)}% confidence)")
    base_score = min(1.0, max(0.0, total_score / max(1, len(definition.suitable_for))))

    # 2. penalties only ever lower the multiplier
    penalty_multiplier = 1.0
    for key in definition.not_suitable_for:
        found = characteristics.get(key)
        if found is None or found.score <= UNSUITABLE_THRESHOLD:
            continue
        penalty = found.score * 0.5
        penalty_multiplier -= penalty
        reasons.append(f"Less ideal for {found.name.lower()} data ({_pct(penalty)}% penalty)")

    max_categories = definition.max_recommended_categories
    if max_categories and metadata.category_count > max_categories:
        penalty = _limit_penalty(metadata.category_count - max_categories, max_categories)
        penalty_multiplier -= penalty
        reasons.append(
            f"Has {metadata.category_count} categories, more than recommended {max_categories} ({_pct(penalty)}% penalty)"
        )

    max_series = definition.max_recommended_series
    if max_series and metadata.dataset_count > max_series:
        penalty = _limit_penalty(metadata.dataset_count - max_series, max_series)
        penalty_multiplier -= penalty
        reasons.append(
            f"Has {metadata.dataset_count} data series, more than recommended {max_series} ({_pct(penalty)}% penalty)"
        )

    min_points = definition.min_recommended_data_points
    if min_points and metadata.point_count < min_points:
        penalty = _limit_penalty(min_points - metadata.point_count, min_points)
        penalty_multiplier -= penalty
        reasons.append(
            f"Has only {metadata.point_count} data points, less than recommended {min_points} ({_pct(penalty)}% penalty)"
        )

    if "part_to_whole" in definition.suitable_for and metadata.has_negative_values:
        penalty_multiplier -= 0.3
        reasons.append("Contains negative values, not ideal for part-to-whole charts (30% penalty)")

    penalty_multiplier -= _chart_specific_penalties(definition.id, characteristics, reasons)
    penalty_multiplier = max(MIN_PENALTY_MULTIPLIER, penalty_multiplier)

    # 3. confidence, with a nudge towards the familiar chart types
    bonus = PRIMARY_CHART_BONUS if definition.id in PRIMARY_CHART_TYPES else 0.0
    confidence = min(MAX_CONFIDENCE, base_score * penalty_multiplier + bonus)
    return ChartScore(confidence=confidence, reasons=tuple(reasons))


def score_chart_types(
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
    definitions: Mapping[str, ChartTypeDefinition] = CHART_TYPES,
) -> Dict[str, ChartScore]:
    """Confidence and reasons for every top-level chart type, in registry order."""
    scores: Dict[str, ChartScore] = {}
    for chart_type, definition in definitions.items():
        if definition.is_variant_of:
            continue
        scores[chart_type] = score_chart_type(definition, characteristics, metadata)
        logger.debug("Scored %s: %d%% confidence", chart_type, _pct(scores[chart_type].confidence))
    return scores
