"""Tests for chart type scoring."""

import pytest

from chart_types import CHART_TYPES
from characteristics import CHARACTERISTICS, analyze_characteristics
from metadata import extract_metadata
from models import CharacteristicScore, DatasetMetadata
from normalizer import normalize_data_format
from scoring import score_chart_type, score_chart_types


def characteristic_scores(**scores):
    return {
        key: CharacteristicScore(key, d.name, d.description, scores.get(key, 0.0))
        for key, d in CHARACTERISTICS.items()
    }


def score_dataset(data):
    dataset = normalize_data_format(data)
    return score_chart_types(analyze_characteristics(dataset), extract_metadata(dataset))


def test_variants_are_not_scored(subject_scores):
    scores = score_dataset(subject_scores)
    assert "doughnut" not in scores
    assert "bubble" not in scores
    assert "horizontalBar" not in scores
    assert list(scores) == [k for k, d in CHART_TYPES.items() if d.is_variant_of is None]


def test_all_confidences_in_range(all_datasets):
    for data in all_datasets:
        for score in score_dataset(data).values():
            assert 0 <= score.confidence <= 0.99


def test_base_score_ignores_weak_matches():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    weak = score_chart_type(CHART_TYPES["polarArea"], characteristic_scores(categorical=0.3), metadata)
    assert weak.confidence == 0
    assert weak.reasons == ()


def test_base_score_normalised_by_tag_count():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    result = score_chart_type(CHART_TYPES["polarArea"], characteristic_scores(categorical=0.9), metadata)
    assert result.confidence == pytest.approx(0.3)
    assert result.reasons == ("Strong match for categorical data (90% confidence)",)


def test_primary_types_get_bonus():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    bar = score_chart_type(CHART_TYPES["bar"], characteristic_scores(categorical=0.9), metadata)
    assert bar.confidence == pytest.approx(0.4)


def test_unsuitable_characteristic_penalty():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    result = score_chart_type(CHART_TYPES["bar"], characteristic_scores(categorical=0.9, temporal=0.8), metadata)
    # base 0.3, multiplier 1 - 0.4
    assert result.confidence == pytest.approx(0.3 * 0.6 + 0.1)
    assert result.reasons[-1] == "Less ideal for time series data (40% penalty)"


def test_category_overage_penalty_is_capped():
    metadata = DatasetMetadata(dataset_count=1, point_count=30, category_count=30)
    result = score_chart_type(CHART_TYPES["pie"], characteristic_scores(part_to_whole=1.0), metadata)
    assert result.confidence == pytest.approx(0.5 + 0.1)
    assert "Has 30 categories, more than recommended 6 (50% penalty)" in result.reasons


def test_series_overage_penalty():
    metadata = DatasetMetadata(dataset_count=4, point_count=20, category_count=5)
    result = score_chart_type(CHART_TYPES["radar"], characteristic_scores(multi_variable=0.9, comparison=0.8), metadata)
    assert result.confidence == pytest.approx(0.85 * (1 - 1 / 3))


def test_point_shortfall_penalty():
    metadata = DatasetMetadata(dataset_count=1, point_count=4, category_count=4)
    result = score_chart_type(CHART_TYPES["line"], characteristic_scores(temporal=1.0, trend=1.0), metadata)
    assert result.confidence == pytest.approx(1.0 * 0.8 + 0.1)
    assert result.reasons == (
        "Strong match for time series data (100% confidence)",
        "Strong match for trend data (100% confidence)",
        "Has only 4 data points, less than recommended 5 (20% penalty)",
    )


def test_negative_values_penalise_part_to_whole_charts():
    metadata = DatasetMetadata(dataset_count=1, point_count=4, category_count=4,
                               all_positive_values=False, has_negative_values=True)
    result = score_chart_type(CHART_TYPES["polarArea"], characteristic_scores(categorical=0.9, part_to_whole=0.9), metadata)
    assert result.confidence == pytest.approx(0.6 * 0.7)
    assert result.reasons[-1].startswith("Contains negative values")


def test_pie_penalised_for_widely_varying_values():
    metadata = DatasetMetadata(dataset_count=1, point_count=5, category_count=5)
    result = score_chart_type(CHART_TYPES["pie"], characteristic_scores(part_to_whole=0.5, comparison=1.0), metadata)
    assert result.confidence == pytest.approx(0.5 * 0.6 + 0.1)


def test_scatter_without_correlation_is_penalised():
    metadata = DatasetMetadata(dataset_count=1, point_count=12, category_count=0)
    result = score_chart_type(CHART_TYPES["scatter"], characteristic_scores(distribution=0.8), metadata)
    assert result.confidence == pytest.approx(0.4 * 0.5 + 0.1)
    assert result.reasons[-1] == "Data doesn't appear to have correlation pairs (50% penalty)"


def test_line_without_time_or_trend_is_penalised():
    metadata = DatasetMetadata(dataset_count=1, point_count=10, category_count=10)
    result = score_chart_type(CHART_TYPES["line"], characteristic_scores(), metadata)
    assert result.confidence == pytest.approx(0.1)
    assert result.reasons[-1].startswith("Data doesn't appear to be time-based")


def test_penalty_multiplier_never_below_floor():
    metadata = DatasetMetadata(dataset_count=20, point_count=1, category_count=40,
                               all_positive_values=False, has_negative_values=True)
    result = score_chart_type(
        CHART_TYPES["polarArea"],
        characteristic_scores(categorical=1.0, part_to_whole=1.0, comparison=1.0, temporal=1.0, correlation=1.0),
        metadata,
    )
    assert result.confidence == pytest.approx(0.1)


def test_confidence_capped_below_one(equal_regions):
    assert score_dataset(equal_regions)["pie"].confidence == pytest.approx(0.99)
