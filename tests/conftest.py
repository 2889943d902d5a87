import pytest

from suggestion_engine import SuggestionEngine


@pytest.fixture
def engine():
    return SuggestionEngine()


@pytest.fixture
def yearly_growth():
    return {
        "labels": ["2020", "2021", "2022", "2023"],
        "datasets": [{"label": "Enrolments", "data": [10, 14, 19, 25]}],
    }


@pytest.fixture
def subject_scores():
    return {
        "labels": ["Maths", "Science", "Art", "PE", "Music"],
        "datasets": [{"label": "Score", "data": [95, 20, 22, 18, 25]}],
    }


@pytest.fixture
def equal_regions():
    return {
        "labels": ["North", "South", "East", "West"],
        "datasets": [{"data": [25, 25, 25, 25]}],
    }


@pytest.fixture
def scattered_points():
    xs = range(1, 13)
    ys = [8, 3, 9, 1, 7, 2, 10, 4, 6, 5, 9, 2]
    return {"datasets": [{"label": "Samples", "data": [{"x": x, "y": y} for x, y in zip(xs, ys)]}]}


@pytest.fixture
def multi_series():
    return {
        "labels": ["Speed", "Strength", "Stamina", "Skill", "Focus"],
        "datasets": [
            {"label": "Alice", "data": [7, 5, 8, 6, 9]},
            {"label": "Bob", "data": [4, 9, 6, 7, 5]},
            {"label": "Cara", "data": [6, 6, 7, 9, 8]},
        ],
    }


@pytest.fixture
def all_datasets(yearly_growth, subject_scores, equal_regions, scattered_points, multi_series):
    return [yearly_growth, subject_scores, equal_regions, scattered_points, multi_series]
