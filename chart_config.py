"""Chart.js-style render configuration for a chosen suggestion.

Nothing here draws a chart; the returned dict is handed to whatever front end
renders it.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Union

from chart_types import CHART_TYPES, ChartTypeDefinition
from errors import UnsupportedChartTypeError
from models import CanonicalDataset, CharacteristicScore, DatasetMetadata, Suggestion
from normalizer import normalize_data_format

logger = logging.getLogger(__name__)

# style variants that have no registry entry of their own: render type plus extra options
VARIANT_STYLES: Dict[str, Dict[str, Any]] = {
    "horizontal": {"base": "horizontalBar"},
    "stacked": {"base": "bar", "stacked": True},
    "grouped": {"base": "bar"},
    "area": {"base": "line", "dataset": {"fill": True}},
    "multiLine": {"base": "line"},
    "steppedLine": {"base": "line", "dataset": {"stepped": True}},
    "semiCircle": {"base": "pie", "options": {"rotation": -90, "circumference": 180}},
    "filled": {"base": "radar", "dataset": {"fill": True}},
}


def get_legend_position(chart_type: str, data: CanonicalDataset) -> str:
    if chart_type in ("pie", "doughnut", "polarArea"):
        return "right"
    if chart_type == "radar":
        return "top"
    return "right" if len(data.datasets) > 3 else "top"


def deep_merge(target: Dict[str, Any], source: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not source:
        return target
    for key, value in source.items():
        if isinstance(value, Mapping):
            if not isinstance(target.get(key), dict):
                target[key] = {}
            deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def _axis_title(text: str) -> Dict[str, Any]:
    return {"display": True, "text": text}


def _chart_type_of(suggestion: Union[Suggestion, Mapping[str, Any], str]) -> str:
    if isinstance(suggestion, Suggestion):
        return suggestion.chart_type
    if isinstance(suggestion, Mapping):
        return suggestion.get("chartType") or suggestion.get("chart_type") or ""
    return str(suggestion)


def _educational_context_of(suggestion: Union[Suggestion, Mapping[str, Any], str]) -> Optional[str]:
    if isinstance(suggestion, Suggestion):
        return suggestion.educational_context
    if isinstance(suggestion, Mapping):
        return suggestion.get("educationalContext") or suggestion.get("educational_context")
    return None


def _resolve(chart_type: str, definitions: Mapping[str, ChartTypeDefinition]):
    if chart_type in definitions:
        return chart_type, {}
    style = VARIANT_STYLES.get(chart_type)
    if style is not None and style["base"] in definitions:
        return style["base"], style
    logger.error("Chart configuration failed: unknown chart type %s", chart_type)
    raise UnsupportedChartTypeError(chart_type)


def _display_name(requested: str, chart_type: str, definitions: Mapping[str, ChartTypeDefinition]) -> str:
    if requested in definitions:
        return definitions[requested].name
    # unregistered style variants are named by the chart that lists them
    for definition in definitions.values():
        variant = definition.variants.get(requested)
        if variant is not None:
            return variant.name
    return definitions[chart_type].name


def _scales_for(
    chart_type: str,
    options: Mapping[str, Any],
    metadata: Optional[DatasetMetadata],
    stacked: bool,
) -> Optional[Dict[str, Any]]:
    begin_at_zero = not (metadata is not None and metadata.has_negative_values)
    if chart_type == "bar":
        return {
            "y": {"beginAtZero": begin_at_zero, "stacked": stacked, "title": _axis_title(options.get("yAxisTitle") or "Values")},
            "x": {"stacked": stacked, "title": _axis_title(options.get("xAxisTitle") or "Categories")},
        }
    if chart_type == "horizontalBar":
        return {
            "x": {"beginAtZero": begin_at_zero, "stacked": stacked, "title": _axis_title(options.get("xAxisTitle") or "Values")},
            "y": {"stacked": stacked, "title": _axis_title(options.get("yAxisTitle") or "Categories")},
        }
    if chart_type == "line":
        temporal = metadata is not None and metadata.has_temporal_labels
        return {
            "y": {"title": _axis_title(options.get("yAxisTitle") or "Values")},
            "x": {"title": _axis_title(options.get("xAxisTitle") or ("Time" if temporal else "Categories"))},
        }
    if chart_type in ("scatter", "bubble"):
        return {
            "x": {"type": "linear", "position": "bottom", "title": _axis_title(options.get("xAxisTitle") or "X Axis")},
            "y": {"title": _axis_title(options.get("yAxisTitle") or "Y Axis")},
        }
    if chart_type == "radar":
        return {"r": {"beginAtZero": begin_at_zero, "ticks": {"showLabelBackdrop": True}}}
    return None


def build_chart_config(
    suggestion: Union[Suggestion, Mapping[str, Any], str],
    data: Any,
    options: Optional[Mapping[str, Any]] = None,
    metadata: Optional[DatasetMetadata] = None,
    characteristics: Optional[Mapping[str, CharacteristicScore]] = None,
    definitions: Mapping[str, ChartTypeDefinition] = CHART_TYPES,
) -> Dict[str, Any]:
    """Build a render config for ``suggestion``.

    ``suggestion`` may be a Suggestion, its ``to_dict()`` form or a bare chart
    type id. Raises UnsupportedChartTypeError for ids the registry does not know.
    """
    options = options or {}
    requested = _chart_type_of(suggestion)
    chart_type, style = _resolve(requested, definitions)
    logger.info("Generating chart configuration for %s", requested)

    dataset = normalize_data_format(data)
    chart_data = dataset.to_dict()
    name = _display_name(requested, chart_type, definitions)

    config: Dict[str, Any] = {
        "type": chart_type,
        "data": chart_data,
        "options": {
            "responsive": True,
            "maintainAspectRatio": False,
            "plugins": {
                "title": {"display": True, "text": options.get("title") or name},
                "subtitle": {"display": bool(options.get("subtitle")), "text": options.get("subtitle") or ""},
                "legend": {"position": get_legend_position(chart_type, dataset)},
            },
        },
    }

    scales = _scales_for(chart_type, options, metadata, bool(style.get("stacked")))
    if scales is not None:
        config["options"]["scales"] = scales

    if chart_type == "horizontalBar":
        config["type"] = "bar"
        config["options"]["indexAxis"] = "y"
    elif chart_type == "doughnut":
        config["options"]["cutout"] = "50%"
    elif chart_type == "line":
        trend = (characteristics or {}).get("trend")
        if trend is not None and trend.score > 0.5:
            for series in chart_data["datasets"]:
                series["tension"] = 0.3

    for series in chart_data["datasets"]:
        series.update(style.get("dataset", {}))
    deep_merge(config["options"], style.get("options"))

    context = _educational_context_of(suggestion)
    if options.get("includeEducationalContext") and context:
        config["descriptions"] = {
            "short": f"{name} showing {len(dataset.datasets)} data series with {len(dataset.labels)} categories.",
            "detailed": context,
        }

    deep_merge(config, options.get("chartOptions"))
    logger.debug("Chart configuration generated: type=%s, scales=%s", config["type"], "scales" in config["options"])
    return config
