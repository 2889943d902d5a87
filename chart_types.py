# This file contains the chart types the suggester can recommend, with the
# explanations shown to users and the suitability rules used for scoring.

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from characteristics import CHARACTERISTICS

PRIMARY_CHART_TYPES = ("bar", "line", "pie", "scatter")

CHART_TYPE_DETAILS: Dict[str, Dict[str, Any]] = {
    "bar": {
        "name": "Bar Chart",
        "title": "📊 Bar Chart: Comparing Categories",
        "description": "A Bar Chart uses rectangular bars to show comparisons between discrete categories. The length of each bar is proportional to the value it represents, making it easy to see which category is biggest or smallest.",
        "when_to_use": [
            "Comparing numerical data across different groups (e.g., sales per country).",
            "Showing the frequency or count of items in different categories.",
            "When you have a limited number of categories to compare (usually fewer than 15).",
        ],
        "best_for": "Comparing values across distinct categories.",
        "suitable_for": ["categorical", "comparison", "ranking"],
        "not_suitable_for": ["correlation", "temporal"],
        "max_recommended_series": 10,
        "max_recommended_categories": 15,
        "educational_context": "Bar charts are excellent for comparing values across categories. They work well in educational contexts where clear comparison of values is needed.",
        "variants": {
            "horizontal": {
                "name": "Horizontal Bar Chart",
                "description": "Bars run horizontally instead of vertically",
                "when_to_use": "When category labels are long or there are many categories",
            },
            "stacked": {
                "name": "Stacked Bar Chart",
                "description": "Bars are stacked to show part-to-whole relationships",
                "when_to_use": "When showing composition within categories",
            },
            "grouped": {
                "name": "Grouped Bar Chart",
                "description": "Multiple bars are grouped by category",
                "when_to_use": "When comparing multiple series across categories",
            },
        },
    },
    "line": {
        "name": "Line Chart",
        "title": "📈 Line Chart: Tracking Trends Over Time",
        "description": "A Line Chart displays information as a series of data points connected by straight lines. It's the best way to visualize data that changes over a continuous interval, like time.",
        "when_to_use": [
            "Tracking changes and trends over a period (e.g., stock prices over a month).",
            "Comparing how multiple groups change over the same time period.",
            "When your horizontal axis (x-axis) represents time, distance, or another continuous variable.",
        ],
        "best_for": "Showing trends and changes over a continuous period.",
        "suitable_for": ["temporal", "trend"],
        "min_recommended_data_points": 5,
        "educational_context": "Line charts are ideal for showing trends over time or continuous data. They help students visualise progression and changes.",
        "variants": {
            "area": {
                "name": "Area Chart",
                "description": "Area under the line is filled",
                "when_to_use": "When emphasising volume or cumulative values",
            },
            "multiLine": {
                "name": "Multi-line Chart",
                "description": "Multiple lines showing different series",
                "when_to_use": "When comparing trends across different categories",
            },
            "steppedLine": {
                "name": "Stepped Line Chart",
                "description": "Line connects points with horizontal and vertical lines",
                "when_to_use": "When showing changes that happen at specific points (e.g., policy changes)",
            },
        },
    },
    "pie": {
        "name": "Pie Chart",
        "title": "🥧 Pie Chart: Showing Proportions",
        "description": "A Pie Chart is a circular graph divided into slices to illustrate numerical proportion. Each slice's size shows its percentage of the whole.",
        "when_to_use": [
            "You want to show how different parts make up a whole (100%).",
            "You have a very small number of categories (best for 2-6 categories).",
        ],
        "best_for": "Illustrating a simple part-to-whole relationship for a few categories.",
        "suitable_for": ["part_to_whole"],
        "not_suitable_for": ["temporal", "correlation"],
        "max_recommended_categories": 6,
        "educational_context": "Pie charts show part-to-whole relationships and are good for teaching about percentages and proportions. Best used with a small number of categories.",
        "variants": {
            "doughnut": {
                "name": "Doughnut Chart",
                "description": "Pie chart with a hole in the center",
                "when_to_use": "When you want to put a number or label in the centre",
            },
            "semiCircle": {
                "name": "Semi-circle Pie Chart",
                "description": "Half of a pie chart",
                "when_to_use": "When space is limited or for gauge-like visualisation",
            },
        },
    },
    "doughnut": {
        "name": "Doughnut Chart",
        "title": "🍩 Doughnut Chart: Proportions With a Centre",
        "description": "A Doughnut Chart is a pie chart with a hole in the middle, leaving room for a total or a key figure.",
        "best_for": "Part-to-whole relationships where a headline number matters.",
        "suitable_for": ["part_to_whole"],
        "not_suitable_for": ["temporal", "correlation"],
        "max_recommended_categories": 6,
        "educational_context": "Doughnut charts, like pie charts, show part-to-whole relationships. The centre can be used to display total or key information.",
        "is_variant_of": "pie",
    },
    "scatter": {
        "name": "Scatter Plot",
        "title": "📈 Scatter Plot: Investigating Relationships",
        "description": "A Scatter Plot uses dots to represent the values for two different numeric variables. The position of each dot on the horizontal and vertical axes indicates its values for those two variables.",
        "when_to_use": [
            "Investigating the relationship or correlation between two numerical variables.",
            "Identifying patterns like a positive relationship, a negative relationship, or no relationship.",
            "Spotting outliers that don't fit the general pattern.",
        ],
        "best_for": "Showing the relationship between two numerical variables.",
        "suitable_for": ["correlation", "distribution"],
        "not_suitable_for": ["categorical", "temporal", "part_to_whole"],
        "min_recommended_data_points": 10,
        "educational_context": "Scatter plots are excellent for exploring relationships between two variables. They help students identify patterns, correlations, and outliers.",
        "variants": {
            "bubble": {
                "name": "Bubble Chart",
                "description": "Scatter plot with varying point sizes",
                "when_to_use": "When there is a third variable to represent by size",
            },
        },
    },
    "bubble": {
        "name": "Bubble Chart",
        "title": "🫧 Bubble Chart: Three Variables at Once",
        "description": "A Bubble Chart is a scatter plot where the size of each dot shows a third value.",
        "best_for": "Relationships between three numerical variables.",
        "suitable_for": ["correlation", "distribution", "multi_variable"],
        "not_suitable_for": ["categorical", "part_to_whole"],
        "min_recommended_data_points": 5,
        "educational_context": "Bubble charts add a third dimension to scatter plots through bubble size. They are useful for teaching multi-variable relationships.",
        "is_variant_of": "scatter",
    },
    "radar": {
        "name": "Radar Chart",
        "title": "🕸️ Radar Chart: Comparing Profiles",
        "description": "A Radar Chart places several variables on axes that start from the same centre point, so each series draws a shape you can compare at a glance.",
        "when_to_use": [
            "Comparing a few items across the same set of attributes (e.g., skill assessments).",
            "When the overall shape of a profile matters more than precise values.",
        ],
        "best_for": "Comparing holistic profiles across several attributes.",
        "suitable_for": ["multi_variable", "comparison"],
        "not_suitable_for": ["temporal", "correlation"],
        "max_recommended_categories": 8,
        "max_recommended_series": 3,
        "educational_context": "Radar charts are useful for comparing multiple variables in a unified view. They work well for skill assessments, performance reviews, or comparing attributes.",
        "variants": {
            "filled": {
                "name": "Filled Radar Chart",
                "description": "Radar chart with filled areas",
                "when_to_use": "When comparing overall coverage or footprint",
            },
        },
    },
    "polarArea": {
        "name": "Polar Area Chart",
        "title": "🎯 Polar Area Chart: Magnitude by Category",
        "description": "A Polar Area Chart gives each category an equal slice of the circle and shows its value by how far the slice reaches from the centre.",
        "best_for": "Comparing magnitude across a small number of categories or a cycle.",
        "suitable_for": ["categorical", "part_to_whole", "comparison"],
        "not_suitable_for": ["temporal", "correlation"],
        "max_recommended_categories": 8,
        "educational_context": "Polar area charts use angle for categories and radius for values. They are good for showing cyclic patterns or comparing magnitude across categories.",
    },
    "horizontalBar": {
        "name": "Horizontal Bar Chart",
        "title": "📊 Horizontal Bar Chart: Long Labels and Rankings",
        "description": "A Horizontal Bar Chart runs its bars left to right, leaving plenty of room for long category names.",
        "best_for": "Rankings and survey results with many or long category labels.",
        "suitable_for": ["categorical", "comparison", "ranking"],
        "not_suitable_for": ["correlation", "temporal"],
        "max_recommended_series": 5,
        "max_recommended_categories": 20,
        "educational_context": "Horizontal bar charts are excellent when category labels are long or when you have many categories. They are ideal for rankings and survey results.",
        "is_variant_of": "bar",
    },
}


@dataclass(frozen=True)
class VariantDefinition:
    id: str
    name: str
    description: str
    when_to_use: str


@dataclass(frozen=True)
class ChartTypeDefinition:
    id: str
    name: str
    suitable_for: Tuple[str, ...]
    not_suitable_for: Tuple[str, ...] = ()
    max_recommended_categories: Optional[int] = None
    max_recommended_series: Optional[int] = None
    min_recommended_data_points: Optional[int] = None
    is_variant_of: Optional[str] = None
    variants: Mapping[str, VariantDefinition] = field(default_factory=dict)
    educational_context: str = ""
    title: str = ""
    description: str = ""
    when_to_use: Tuple[str, ...] = ()
    best_for: str = ""

    def summary(self) -> Dict[str, Any]:
        return {
            "chartType": self.id,
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "whenToUse": list(self.when_to_use),
            "bestFor": self.best_for,
            "suitableFor": list(self.suitable_for),
            "notSuitableFor": list(self.not_suitable_for),
            "isVariantOf": self.is_variant_of,
            "variants": {k: {"name": v.name, "description": v.description, "whenToUse": v.when_to_use}
                         for k, v in self.variants.items()},
        }


_LIMIT_FIELDS = ("max_recommended_categories", "max_recommended_series", "min_recommended_data_points")


def _definition_from_details(chart_id: str, details: Mapping[str, Any]) -> ChartTypeDefinition:
    variants = {
        key: VariantDefinition(key, v["name"], v["description"], v["when_to_use"])
        for key, v in details.get("variants", {}).items()
    }
    return ChartTypeDefinition(
        id=chart_id,
        name=details["name"],
        suitable_for=tuple(details["suitable_for"]),
        not_suitable_for=tuple(details.get("not_suitable_for", ())),
        max_recommended_categories=details.get("max_recommended_categories"),
        max_recommended_series=details.get("max_recommended_series"),
        min_recommended_data_points=details.get("min_recommended_data_points"),
        is_variant_of=details.get("is_variant_of"),
        variants=MappingProxyType(variants),
        educational_context=details.get("educational_context", ""),
        title=details.get("title", ""),
        description=details.get("description", ""),
        when_to_use=tuple(details.get("when_to_use", ())),
        best_for=details.get("best_for", ""),
    )


def validate_chart_types(definitions: Mapping[str, ChartTypeDefinition], known_tags=None) -> None:
    """Raise ValueError on unknown characteristic tags, dangling variant links or bad limits."""
    known_tags = set(CHARACTERISTICS) if known_tags is None else set(known_tags)
    for chart_id, definition in definitions.items():
        if not definition.suitable_for:
            raise ValueError(f"Chart type '{chart_id}' must be suitable for at least one characteristic")
        unknown = (set(definition.suitable_for) | set(definition.not_suitable_for)) - known_tags
        if unknown:
            raise ValueError(f"Chart type '{chart_id}' uses unknown characteristics: {sorted(unknown)}")
        for limit_name in _LIMIT_FIELDS:
            limit = getattr(definition, limit_name)
            if limit is not None and (not isinstance(limit, int) or limit < 1):
                raise ValueError(f"Chart type '{chart_id}' has invalid {limit_name}: {limit!r}")
        if definition.is_variant_of is not None:
            parent = definitions.get(definition.is_variant_of)
            if parent is None or parent.is_variant_of is not None:
                raise ValueError(f"Chart type '{chart_id}' is a variant of unknown top-level type '{definition.is_variant_of}'")
    for chart_id, definition in definitions.items():
        for variant_id in definition.variants:
            registered = definitions.get(variant_id)
            if registered is not None and registered.is_variant_of != chart_id:
                raise ValueError(f"Variant '{variant_id}' of '{chart_id}' is registered as a variant of '{registered.is_variant_of}'")


def build_chart_types(details: Mapping[str, Mapping[str, Any]], known_tags=None) -> Mapping[str, ChartTypeDefinition]:
    definitions = {chart_id: _definition_from_details(chart_id, d) for chart_id, d in details.items()}
    validate_chart_types(definitions, known_tags)
    return MappingProxyType(definitions)


CHART_TYPES = build_chart_types(CHART_TYPE_DETAILS)
