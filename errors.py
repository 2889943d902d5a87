"""Exceptions raised by the chart suggester."""


class ChartSuggesterError(Exception):
    """Base class for all chart suggester errors."""


class InputError(ChartSuggesterError, ValueError):
    """The supplied data cannot be analysed at all."""


class UnrecognisedFormatError(InputError):
    def __init__(self, message: str = "Unrecognised data format"):
        super().__init__(message)


class DetectorError(ChartSuggesterError):
    """A single characteristic detector failed. Never fatal to an analysis."""

    def __init__(self, characteristic_id: str, cause: Exception):
        self.characteristic_id = characteristic_id
        self.cause = cause
        super().__init__(str(cause))


class UnsupportedChartTypeError(ChartSuggesterError, KeyError):
    def __init__(self, chart_type: str):
        self.chart_type = chart_type
        super().__init__(chart_type)

    def __str__(self) -> str:
        return f"Unknown chart type: {self.chart_type}"


class ConfigurationError(ChartSuggesterError, ValueError):
    """Invalid engine configuration or per-call options."""
