import pytest

from characteristics import CHARACTERISTICS
from models import CharacteristicScore, ChartScore, DatasetMetadata
from ranking import add_variants, rank_suggestions, suggestion_from_definition
from chart_types import CHART_TYPES


def characteristic_scores(**scores):
    return {
        key: CharacteristicScore(key, d.name, d.description, scores.get(key, 0.0))
        for key, d in CHARACTERISTICS.items()
    }


def chart_scores(**confidences):
    return {chart_type: ChartScore(confidence, ("reason",)) for chart_type, confidence in confidences.items()}


def test_threshold_filters_low_confidence():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    ranked = rank_suggestions(
        chart_scores(bar=0.6, pie=0.49, line=0.5), characteristic_scores(), metadata, include_variants=False,
    )
    assert [s.chart_type for s in ranked] == ["bar", "line"]


def test_ties_keep_registry_order():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    ranked = rank_suggestions(
        chart_scores(bar=0.6, line=0.6, pie=0.6), characteristic_scores(), metadata,
        max_suggestions=5, include_variants=False,
    )
    assert [s.chart_type for s in ranked] == ["bar", "line", "pie"]


def test_variants_can_displace_primary_types():
    metadata = DatasetMetadata(dataset_count=1, point_count=10, category_count=10)
    ranked = rank_suggestions(
        chart_scores(bar=0.95, pie=0.6, line=0.55), characteristic_scores(), metadata, max_suggestions=2,
    )
    assert [s.chart_type for s in ranked] == ["bar", "horizontal"]
    assert ranked[1].is_variant
    assert ranked[1].variant_of == "bar"
    assert ranked[1].confidence == pytest.approx(0.95 * 0.9)
    assert ranked[1].reasons == ["Better for displaying 10 categories"]


def test_without_variants_primary_types_survive():
    metadata = DatasetMetadata(dataset_count=1, point_count=10, category_count=10)
    ranked = rank_suggestions(
        chart_scores(bar=0.95, pie=0.6, line=0.55), characteristic_scores(), metadata,
        max_suggestions=2, include_variants=False,
    )
    assert [s.chart_type for s in ranked] == ["bar", "pie"]


def test_results_are_sorted_and_unique():
    metadata = DatasetMetadata(dataset_count=2, point_count=20, category_count=10)
    ranked = rank_suggestions(
        chart_scores(bar=0.9, line=0.8, pie=0.75, scatter=0.7),
        characteristic_scores(trend=0.8), metadata, max_suggestions=20,
    )
    confidences = [s.confidence for s in ranked]
    assert confidences == sorted(confidences, reverse=True)
    ids = [s.chart_type for s in ranked]
    assert len(ids) == len(set(ids))


def test_variant_never_outranks_its_parent():
    metadata = DatasetMetadata(dataset_count=2, point_count=20, category_count=10)
    ranked = rank_suggestions(
        chart_scores(bar=0.9, line=0.8, pie=0.75, scatter=0.7),
        characteristic_scores(trend=0.8), metadata, max_suggestions=20,
    )
    by_id = {s.chart_type: s for s in ranked}
    for suggestion in ranked:
        if suggestion.is_variant:
            assert suggestion.confidence <= by_id[suggestion.variant_of].confidence


def test_variant_rules():
    metadata = DatasetMetadata(dataset_count=2, point_count=20, category_count=5)
    parents = [
        suggestion_from_definition(CHART_TYPES["bar"], ChartScore(0.6)),
        suggestion_from_definition(CHART_TYPES["line"], ChartScore(0.6)),
        suggestion_from_definition(CHART_TYPES["scatter"], ChartScore(0.6)),
    ]
    result = add_variants(parents, characteristic_scores(trend=0.8), metadata)
    added = {s.chart_type for s in result if s.is_variant}
    # five categories is too few for a horizontal layout and no parent is confident enough for the rest
    assert added == {"stacked", "area", "bubble"}


def test_registered_variant_carries_its_own_definition():
    metadata = DatasetMetadata(dataset_count=2, point_count=20, category_count=0)
    parent = suggestion_from_definition(CHART_TYPES["scatter"], ChartScore(0.8))
    bubble = [s for s in add_variants([parent], characteristic_scores(), metadata) if s.chart_type == "bubble"][0]
    assert bubble.name == CHART_TYPES["bubble"].name
    assert bubble.suitable_for == CHART_TYPES["bubble"].suitable_for
    assert bubble.variant_of == "scatter"
    assert bubble.when_to_use
    assert bubble.confidence == pytest.approx(0.72)


def test_bubble_needs_several_series():
    metadata = DatasetMetadata(dataset_count=1, point_count=20, category_count=0)
    parent = suggestion_from_definition(CHART_TYPES["scatter"], ChartScore(0.95))
    assert [s.chart_type for s in add_variants([parent], characteristic_scores(), metadata)] == ["scatter"]


def test_confident_parent_adds_style_alternatives():
    metadata = DatasetMetadata(dataset_count=1, point_count=4, category_count=4)
    parent = suggestion_from_definition(CHART_TYPES["pie"], ChartScore(0.9))
    result = add_variants([parent], characteristic_scores(), metadata)
    assert [s.chart_type for s in result] == ["pie", "doughnut", "semiCircle"]
    assert result[1].reasons == ["Alternative visualisation style for pie chart"]
