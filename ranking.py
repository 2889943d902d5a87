"""Filter, order and trim scored chart types, adding style variants of the winners."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple

from chart_types import CHART_TYPES, ChartTypeDefinition, VariantDefinition
from models import CharacteristicScore, ChartScore, DatasetMetadata, Suggestion

logger = logging.getLogger(__name__)

VARIANT_CONFIDENCE_FACTOR = 0.9


def _by_confidence(suggestions: List[Suggestion]) -> List[Suggestion]:
    # sorted() is stable, so equal confidences keep registry order
    return sorted(suggestions, key=lambda s: s.confidence, reverse=True)


def suggestion_from_definition(definition: ChartTypeDefinition, score: ChartScore) -> Suggestion:
    return Suggestion(
        chart_type=definition.id,
        name=definition.name,
        confidence=score.confidence,
        reasons=list(score.reasons),
        suitable_for=definition.suitable_for,
        not_suitable_for=definition.not_suitable_for,
        max_recommended_categories=definition.max_recommended_categories,
        max_recommended_series=definition.max_recommended_series,
        min_recommended_data_points=definition.min_recommended_data_points,
        educational_context=definition.educational_context or None,
    )


def variant_reason(
    variant_id: str,
    parent: Suggestion,
    parent_definition: ChartTypeDefinition,
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
) -> Optional[str]:
    """Why a variant is worth showing, or None when it should be left out."""
    if variant_id == "horizontal":
        if metadata.category_count > 7:
            return f"Better for displaying {metadata.category_count} categories"
        return None
    if variant_id == "stacked":
        if metadata.dataset_count > 1:
            return f"Good for showing composition across {metadata.dataset_count} data series"
        return None
    if variant_id == "area":
        trend = characteristics.get("trend")
        if trend is not None and trend.score > 0.5:
            return "Emphasises the volume and magnitude of the trend"
        return None
    if variant_id == "bubble":
        if parent.chart_type == "scatter" and metadata.dataset_count > 1:
            return "Can show a third dimension through bubble size"
        return None
    if parent.confidence > 0.7:
        return f"Alternative visualisation style for {parent_definition.name.lower()}"
    return None


def _variant_suggestion(
    variant: VariantDefinition,
    parent: Suggestion,
    parent_definition: ChartTypeDefinition,
    reason: str,
    definitions: Mapping[str, ChartTypeDefinition],
) -> Suggestion:
    confidence = parent.confidence * VARIANT_CONFIDENCE_FACTOR
    registered = definitions.get(variant.id)
    if registered is not None:
        suggestion = suggestion_from_definition(registered, ChartScore(confidence, (reason,)))
    else:
        suggestion = Suggestion(
            chart_type=variant.id,
            name=variant.name,
            confidence=confidence,
            reasons=[reason],
            suitable_for=parent_definition.suitable_for,
        )
    suggestion.is_variant = True
    suggestion.variant_of = parent.chart_type
    suggestion.variant_description = variant.description
    suggestion.when_to_use = variant.when_to_use
    return suggestion


def add_variants(
    suggestions: List[Suggestion],
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
    definitions: Mapping[str, ChartTypeDefinition] = CHART_TYPES,
) -> List[Suggestion]:
    result = list(suggestions)
    present = {s.chart_type for s in result}
    for parent in suggestions:
        parent_definition = definitions.get(parent.chart_type)
        if parent_definition is None or not parent_definition.variants:
            continue
        for variant_id, variant in parent_definition.variants.items():
            if variant_id in present:
                continue
            reason = variant_reason(variant_id, parent, parent_definition, characteristics, metadata)
            if reason is None:
                continue
            result.append(_variant_suggestion(variant, parent, parent_definition, reason, definitions))
            present.add(variant_id)
            logger.debug("Added variant %s for %s (%.2f confidence)", variant_id, parent.chart_type, result[-1].confidence)
    return _by_confidence(result)


def rank_suggestions(
    scores: Mapping[str, ChartScore],
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
    max_suggestions: int = 3,
    min_confidence: float = 0.5,
    include_variants: bool = True,
    definitions: Mapping[str, ChartTypeDefinition] = CHART_TYPES,
) -> List[Suggestion]:
    """Threshold, stable-sort, optionally add variants, then truncate to ``max_suggestions``."""
    ranked: List[Tuple[str, ChartScore]] = [
        (chart_type, score) for chart_type, score in scores.items() if score.confidence >= min_confidence
    ]
    suggestions = _by_confidence([suggestion_from_definition(definitions[ct], sc) for ct, sc in ranked])
    logger.info("Initial suggestions: %d chart types meet confidence threshold", len(suggestions))

    if include_variants:
        suggestions = add_variants(suggestions, characteristics, metadata, definitions)
        logger.debug("After adding variants: %d total suggestions", len(suggestions))

    return suggestions[:max_suggestions]
