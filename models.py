"""Request-scoped records shared by every stage of the suggestion pipeline."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from errors import DetectorError


# --- Point helpers ---

def is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def is_xy_point(point: Any) -> bool:
    return isinstance(point, Mapping) and "x" in point and "y" in point


def resolve_point_value(point: Any) -> Any:
    """Value used for sign checks: ``y`` of an ``{x, y[, r]}`` point, else ``x``, else the scalar."""
    if isinstance(point, Mapping):
        if point.get("y") is not None:
            return point["y"]
        return point.get("x")
    return point


# --- Canonical dataset ---

@dataclass
class Series:
    data: List[Any] = field(default_factory=list)
    label: Optional[str] = None

    def scalar_values(self) -> List[float]:
        """Plain numeric points in order. Object points and blanks count as no value."""
        return [float(v) for v in self.data if is_number(v)]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"data": list(self.data)}
        if self.label is not None:
            out["label"] = self.label
        return out


@dataclass
class CanonicalDataset:
    labels: List[str] = field(default_factory=list)
    datasets: List[Series] = field(default_factory=list)

    @property
    def first_series(self) -> Optional[Series]:
        return self.datasets[0] if self.datasets else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [s.to_dict() for s in self.datasets],
        }


# --- Analysis results ---

@dataclass(frozen=True)
class CharacteristicScore:
    id: str
    name: str
    description: str
    score: float
    error: Optional[str] = None
    failure: Optional[DetectorError] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "description": self.description, "score": self.score}
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class DatasetMetadata:
    dataset_count: int = 0
    point_count: int = 0
    category_count: int = 0
    has_categorical_labels: bool = False
    has_numeric_labels: bool = False
    has_temporal_labels: bool = False
    all_positive_values: bool = True
    has_negative_values: bool = False
    has_zero_values: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "datasetCount": self.dataset_count,
            "pointCount": self.point_count,
            "categoryCount": self.category_count,
            "hasCategoricalLabels": self.has_categorical_labels,
            "hasNumericLabels": self.has_numeric_labels,
            "hasTemporalLabels": self.has_temporal_labels,
            "allPositiveValues": self.all_positive_values,
            "hasNegativeValues": self.has_negative_values,
            "hasZeroValues": self.has_zero_values,
        }


@dataclass(frozen=True)
class ChartScore:
    confidence: float
    reasons: Tuple[str, ...] = ()


@dataclass
class Suggestion:
    chart_type: str
    name: str
    confidence: float
    reasons: List[str] = field(default_factory=list)
    suitable_for: Tuple[str, ...] = ()
    not_suitable_for: Tuple[str, ...] = ()
    max_recommended_categories: Optional[int] = None
    max_recommended_series: Optional[int] = None
    min_recommended_data_points: Optional[int] = None
    is_variant: bool = False
    variant_of: Optional[str] = None
    variant_description: Optional[str] = None
    when_to_use: Optional[str] = None
    educational_context: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "chartType": self.chart_type,
            "name": self.name,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "isVariant": self.is_variant,
            "variantOf": self.variant_of,
            "educationalContext": self.educational_context,
            "suitableFor": list(self.suitable_for),
            "notSuitableFor": list(self.not_suitable_for),
        }
        optional_fields = {
            "maxRecommendedCategories": self.max_recommended_categories,
            "maxRecommendedSeries": self.max_recommended_series,
            "minRecommendedDataPoints": self.min_recommended_data_points,
            "variantDescription": self.variant_description,
            "whenToUse": self.when_to_use,
        }
        out.update({k: v for k, v in optional_fields.items() if v is not None})
        return out
