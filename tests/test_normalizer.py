"""Tests for canonicalising the accepted input shapes."""

import pandas as pd
import pytest

from errors import InputError, UnrecognisedFormatError
from models import CanonicalDataset
from normalizer import clean_numeric_column, normalize_data_format


def test_canonical_input_passes_through():
    data = {"labels": ["A", "B"], "datasets": [{"label": "Sales", "data": [1, 2]}]}
    result = normalize_data_format(data)
    assert isinstance(result, CanonicalDataset)
    assert result.labels == ["A", "B"]
    assert result.datasets[0].label == "Sales"
    assert result.datasets[0].data == [1, 2]


def test_canonical_without_labels_uses_first_series_data():
    result = normalize_data_format({"datasets": [{"data": [{"x": 1, "y": 2}]}]})
    assert result.labels == []
    assert result.datasets[0].data == [{"x": 1, "y": 2}]


def test_numeric_labels_are_stringified():
    result = normalize_data_format({"labels": [2020, 2021.0], "datasets": [{"data": [1, 2]}]})
    assert result.labels == ["2020", "2021"]


def test_transformed_data_wrapper_is_unwrapped_once():
    inner = {"labels": ["A"], "datasets": [{"data": [1]}]}
    assert normalize_data_format({"transformedData": inner}).labels == ["A"]

    with pytest.raises(UnrecognisedFormatError):
        normalize_data_format({"transformedData": {"transformedData": inner}})


def test_array_of_records_first_key_becomes_labels():
    records = [
        {"Subject": "Maths", "Boys": 40, "Girls": 45},
        {"Subject": "Art", "Boys": 12, "Girls": 30},
    ]
    result = normalize_data_format(records)
    assert result.labels == ["Maths", "Art"]
    assert [s.label for s in result.datasets] == ["Boys", "Girls"]
    assert result.datasets[0].data == [40, 12]
    assert result.datasets[1].data == [45, 30]


def test_records_with_missing_keys_get_blank_points():
    result = normalize_data_format([{"k": "a", "v": 1}, {"k": "b"}])
    assert result.datasets[0].data == [1, None]


def test_records_with_currency_text_are_cleaned():
    result = normalize_data_format([{"Item": "Pens", "Cost": "$1,200"}, {"Item": "Ink", "Cost": "45%"}])
    assert result.datasets[0].data == [1200, 45]


def test_records_with_text_values_are_left_alone():
    result = normalize_data_format([{"Item": "Pens", "Colour": "blue"}, {"Item": "Ink", "Colour": "12"}])
    assert result.datasets[0].data == ["blue", "12"]


def test_record_without_fields_gives_empty_dataset():
    result = normalize_data_format([{}])
    assert result.labels == []
    assert len(result.datasets) == 1
    assert result.datasets[0].data == []


def test_dataframe_is_treated_like_records():
    df = pd.DataFrame({"Month": ["Jan", "Feb", "Mar"], "Rain": [80, 60, 55]})
    result = normalize_data_format(df)
    assert result.labels == ["Jan", "Feb", "Mar"]
    assert result.datasets[0].label == "Rain"
    assert result.datasets[0].data == [80, 60, 55]


def test_flat_array_gets_item_labels():
    result = normalize_data_format([3, 1, 4])
    assert result.labels == ["Item 1", "Item 2", "Item 3"]
    assert len(result.datasets) == 1
    assert result.datasets[0].label is None
    assert result.datasets[0].data == [3, 1, 4]


@pytest.mark.parametrize("bad_input", [None, [], "not data", 42, {"rows": [1, 2]}, [[1, 2], [3, 4]], pd.DataFrame()])
def test_unrecognised_input_raises_input_error(bad_input):
    with pytest.raises(InputError):
        normalize_data_format(bad_input)


def test_clean_numeric_column_keeps_numeric_series():
    series = pd.Series([1, 2, 3])
    assert clean_numeric_column(series) is series
