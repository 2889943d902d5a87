"""Chart Suggestion Engine

Analyses tabular data and recommends suitable chart types, ranked by
confidence, each with the reasons behind its score and some educational
context for people new to data visualisation.

    engine = SuggestionEngine()
    result = engine.suggest({"labels": ["2020", "2021", "2022", "2023"],
                             "datasets": [{"data": [10, 14, 19, 25]}]})
    result.suggestions[0].chart_type   # "line"
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from characteristics import CHARACTERISTICS, CharacteristicDefinition, analyze_characteristics
from chart_types import CHART_TYPES, ChartTypeDefinition
from errors import ConfigurationError, DetectorError
from insights import annotate_suggestions
from metadata import extract_metadata
from models import CanonicalDataset, CharacteristicScore, DatasetMetadata, Suggestion
from normalizer import normalize_data_format
from ranking import rank_suggestions
from scoring import score_chart_types

logger = logging.getLogger(__name__)

Tracer = Callable[[str, dict], None]

# accepted spellings for configuration keys, camelCase as used by the JSON API
OPTION_ALIASES = {
    "maxSuggestions": "max_suggestions",
    "minConfidence": "min_confidence",
    "minConfidenceThreshold": "min_confidence",
    "includeVariants": "include_variants",
    "educationalMode": "educational_mode",
}


@dataclass(frozen=True)
class EngineConfig:
    max_suggestions: int = 3
    min_confidence: float = 0.5
    include_variants: bool = True
    educational_mode: bool = True

    def __post_init__(self):
        if isinstance(self.max_suggestions, bool) or not isinstance(self.max_suggestions, int) or self.max_suggestions < 1:
            raise ConfigurationError(f"max_suggestions must be an integer >= 1, got {self.max_suggestions!r}")
        if isinstance(self.min_confidence, bool) or not isinstance(self.min_confidence, (int, float)) \
                or not 0 <= self.min_confidence <= 1:
            raise ConfigurationError(f"min_confidence must be a number between 0 and 1, got {self.min_confidence!r}")
        for flag in ("include_variants", "educational_mode"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(f"{flag} must be true or false, got {getattr(self, flag)!r}")

    def with_options(self, options: Optional[Mapping[str, Any]] = None) -> "EngineConfig":
        """A validated copy with ``options`` applied. Keys may be snake_case or camelCase."""
        if not options:
            return self
        changes = {}
        known = {f.name for f in dataclasses.fields(self)}
        for key, value in options.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown option: {key}")
            if value is not None:
                changes[name] = value
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxSuggestions": self.max_suggestions,
            "minConfidence": self.min_confidence,
            "includeVariants": self.include_variants,
            "educationalMode": self.educational_mode,
        }


@dataclass
class AnalysisResult:
    dataset: CanonicalDataset
    characteristics: Dict[str, CharacteristicScore]
    metadata: DatasetMetadata

    @property
    def degraded(self) -> bool:
        """True when at least one detector failed and was scored as 0."""
        return any(c.error is not None for c in self.characteristics.values())

    @property
    def failures(self) -> List[DetectorError]:
        return [c.failure for c in self.characteristics.values() if c.failure is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "characteristics": {key: c.to_dict() for key, c in self.characteristics.items()},
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class SuggestionResult:
    suggestions: List[Suggestion]
    analysis: AnalysisResult
    config: EngineConfig = field(default_factory=EngineConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "analysis": self.analysis.to_dict(),
        }


class SuggestionEngine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        chart_types: Mapping[str, ChartTypeDefinition] = CHART_TYPES,
        characteristics: Mapping[str, CharacteristicDefinition] = CHARACTERISTICS,
        tracer: Optional[Tracer] = None,
    ):
        self._config = config or EngineConfig()
        self._chart_types = chart_types
        self._characteristics = characteristics
        self._tracer = tracer
        logger.info(
            "Chart Suggestion Engine initialised: %d chart types, %d characteristics",
            len(chart_types), len(characteristics),
        )

    @property
    def config(self) -> EngineConfig:
        return self._config

    def configure(self, **options: Any) -> "SuggestionEngine":
        """Replace the engine configuration. The only way configuration changes."""
        self._config = self._config.with_options(options)
        logger.debug("Configuration updated: %s", self._config)
        return self

    def get_chart_types(self) -> Dict[str, ChartTypeDefinition]:
        return dict(self._chart_types)

    def _trace(self, event: str, payload: dict) -> None:
        if self._tracer is not None:
            self._tracer(event, payload)

    def analyze(self, data: Any) -> AnalysisResult:
        """Normalise ``data`` and compute its characteristics and metadata.

        Raises InputError when ``data`` is empty or in an unrecognised shape.
        """
        logger.info("Starting data analysis")
        dataset = normalize_data_format(data)
        self._trace("normalized", {"labels": len(dataset.labels), "datasets": len(dataset.datasets)})

        characteristics = analyze_characteristics(dataset, self._characteristics, self._tracer)
        metadata = extract_metadata(dataset)
        result = AnalysisResult(dataset=dataset, characteristics=characteristics, metadata=metadata)
        if result.degraded:
            logger.warning("Data analysis completed with failed detectors")
        else:
            logger.info("Data analysis completed successfully")
        return result

    def suggest(self, data: Any, **options: Any) -> SuggestionResult:
        """Rank chart types for ``data``. ``options`` override the engine config for this call only."""
        config = self._config.with_options(options)
        logger.info("Generating chart type suggestions")
        analysis = self.analyze(data)

        scores = score_chart_types(analysis.characteristics, analysis.metadata, self._chart_types)
        self._trace("scored", {ct: s.confidence for ct, s in scores.items()})

        suggestions = rank_suggestions(
            scores,
            analysis.characteristics,
            analysis.metadata,
            max_suggestions=config.max_suggestions,
            min_confidence=config.min_confidence,
            include_variants=config.include_variants,
            definitions=self._chart_types,
        )
        if config.educational_mode:
            suggestions = annotate_suggestions(suggestions, analysis.characteristics, analysis.metadata)
        self._trace("ranked", {"suggestions": [s.chart_type for s in suggestions]})

        logger.info("Returning %d final suggestions", len(suggestions))
        return SuggestionResult(suggestions=suggestions, analysis=analysis, config=config)


# --- Module-level convenience API backed by one default engine ---

default_engine = SuggestionEngine()


def analyze_data(data: Any) -> AnalysisResult:
    return default_engine.analyze(data)


def suggest_chart_types(data: Any, **options: Any) -> SuggestionResult:
    return default_engine.suggest(data, **options)


def configure(**options: Any) -> SuggestionEngine:
    return default_engine.configure(**options)
