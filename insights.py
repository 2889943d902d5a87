"""Educational notes attached to each suggestion. Text only: never touches confidence or order."""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Mapping, Optional

from models import CharacteristicScore, DatasetMetadata, Suggestion

EDUCATIONAL_RESOURCES: Dict[str, List[Dict[str, str]]] = {
    "general": [
        {
            "title": "Choosing the Right Chart Type",
            "description": "Educational guide on selecting appropriate visualisations for different data types",
            "url": "https://www.tableau.com/learn/whitepapers/which-chart-or-graph-is-right-for-you",
        },
        {
            "title": "Data Visualisation Best Practices",
            "description": "Guidelines for creating effective and honest data visualisations in education",
            "url": "https://depictdatastudio.com/charts/",
        },
    ],
    "bar": [
        {
            "title": "Teaching with Bar Charts",
            "description": "Using bar charts to develop comparison and analytical skills",
            "url": "https://www.teachervision.com/bar-graphs",
        },
    ],
    "line": [
        {
            "title": "Line Charts for Teaching Trends",
            "description": "How to use line charts to demonstrate changes over time",
            "url": "https://www.mathsisfun.com/data/line-graphs.html",
        },
    ],
    "pie": [
        {
            "title": "Teaching Fractions with Pie Charts",
            "description": "Connecting pie charts to fraction concepts for younger students",
            "url": "https://www.education.com/activity/article/Pie-Chart-Fractions/",
        },
    ],
    "scatter": [
        {
            "title": "Introducing Correlation with Scatter Plots",
            "description": "Using scatter plots to teach statistical relationships",
            "url": "https://www.mathsisfun.com/data/scatter-xy-plots.html",
        },
    ],
}


def get_educational_resources(chart_type: Optional[str] = None) -> Dict[str, List[Dict[str, str]]]:
    specific = EDUCATIONAL_RESOURCES.get(chart_type, []) if chart_type and chart_type != "general" else []
    return {
        "general": [dict(r) for r in EDUCATIONAL_RESOURCES["general"]],
        "specific": [dict(r) for r in specific],
    }


def _score(characteristics: Mapping[str, CharacteristicScore], key: str) -> float:
    found = characteristics.get(key)
    return found.score if found is not None else 0.0


def generate_insights(
    suggestion: Suggestion,
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
) -> str:
    chart_type = suggestion.chart_type
    insights: List[str] = []

    if chart_type in ("bar", "horizontalBar", "horizontal"):
        if metadata.category_count > 10:
            insights.append(
                f"With {metadata.category_count} categories, consider focusing on the most significant items "
                "or grouping minor categories."
            )
        if metadata.has_negative_values:
            insights.append(
                "This chart displays both positive and negative values, which is useful for showing contrasts "
                "or deviations from a baseline."
            )
    elif chart_type == "line":
        if _score(characteristics, "trend") > 0.6:
            insights.append("Line charts excel at showing trends over time, making patterns easily visible to students.")
        if metadata.dataset_count > 1:
            insights.append(
                f"With {metadata.dataset_count} data series, you can compare trends across different categories or variables."
            )
    elif chart_type in ("pie", "doughnut"):
        if metadata.category_count > 7:
            insights.append(
                'For educational clarity, consider combining smaller segments into an "Other" category, as pie '
                "charts become harder to interpret with too many segments."
            )
        if _score(characteristics, "part_to_whole") > 0.7:
            insights.append(
                "Pie charts are excellent for teaching about percentages, fractions, and how parts relate to a whole."
            )
    elif chart_type == "scatter":
        if _score(characteristics, "correlation") > 0.7:
            insights.append(
                "Scatter plots help students understand relationships between variables and concepts like correlation."
            )
        if metadata.point_count > 20:
            insights.append(
                f"With {metadata.point_count} data points, students can identify patterns, clusters, and outliers."
            )
    elif chart_type == "radar":
        if 3 <= metadata.category_count <= 6:
            insights.append(
                f"Radar charts with {metadata.category_count} axes provide a balanced visualisation for comparing "
                "multiple attributes."
            )
        insights.append(
            "This chart type works well for comparing holistic profiles, such as skill assessments or performance metrics."
        )
    elif chart_type == "bubble":
        insights.append(
            "Bubble charts help students grasp three-dimensional relationships, adding complexity to their data "
            "analysis skills."
        )

    return " ".join(insights)


def annotate_suggestions(
    suggestions: List[Suggestion],
    characteristics: Mapping[str, CharacteristicScore],
    metadata: DatasetMetadata,
) -> List[Suggestion]:
    annotated = []
    for suggestion in suggestions:
        parts = [suggestion.educational_context or ""]
        if suggestion.is_variant and suggestion.when_to_use:
            parts.append(f"{suggestion.when_to_use}.")
        insights = generate_insights(suggestion, characteristics, metadata)
        if insights:
            parts.append(insights)
        context = " ".join(p for p in parts if p)
        annotated.append(dataclasses.replace(suggestion, reasons=list(suggestion.reasons), educational_context=context or None))
    return annotated


def resources_payload(chart_type: Optional[str] = None) -> Dict[str, Any]:
    resources = get_educational_resources(chart_type)
    return {"chartType": chart_type, **resources}
