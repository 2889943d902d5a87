import logging
import os
from typing import Any, Dict, List, Tuple

from flask import Flask, jsonify, request

from chart_config import build_chart_config
from errors import ConfigurationError, InputError, UnsupportedChartTypeError
from insights import resources_payload
from models import Suggestion
from suggestion_engine import EngineConfig, SuggestionEngine

logging.basicConfig(
    level=os.environ.get('CHART_SUGGESTER_LOG_LEVEL', 'WARNING').upper(),
    format='[%(levelname)s] %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get('FLASK_SECRET_KEY', os.urandom(24))
app.json.sort_keys = False

SUGGESTION_BATCH_SIZE = 3

engine = SuggestionEngine(EngineConfig(max_suggestions=SUGGESTION_BATCH_SIZE))


# --- Helper Functions ---

def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise InputError("Request body must be a JSON object.")
    return body


def _require_data(body: Dict[str, Any]) -> Any:
    if body.get("data") is None:
        raise InputError("Request body needs a 'data' field.")
    return body["data"]


def format_suggestions_message(suggestions: List[Suggestion]) -> str:
    """Short chat-style summary of the ranked suggestions."""
    if not suggestions:
        return "No chart type matched your data well enough. Try lowering the confidence threshold or adding more data."
    lines = ["Here are the chart types that suit your data best:"]
    for i, s in enumerate(suggestions, start=1):
        line = f"{i}. {s.name} ({round(s.confidence * 100)}% confidence)"
        if s.is_variant:
            line += f", a style of {s.variant_of}"
        if s.reasons:
            line += f": {s.reasons[0]}"
        lines.append(line)
    return "\n".join(lines)


# --- Error Handlers ---

@app.errorhandler(InputError)
@app.errorhandler(ConfigurationError)
def handle_bad_request(error: Exception) -> Tuple[Any, int]:
    logger.info("Rejected request: %s", error)
    return jsonify({"error": str(error)}), 400


@app.errorhandler(UnsupportedChartTypeError)
def handle_unknown_chart_type(error: UnsupportedChartTypeError) -> Tuple[Any, int]:
    return jsonify({"error": str(error)}), 404


# --- Flask Routes ---

@app.route("/")
def home():
    return jsonify({
        "service": "chart-suggester",
        "endpoints": ["/api/analyze", "/api/suggest", "/api/chart-types", "/api/chart-config"],
        "config": engine.config.to_dict(),
    })


@app.route("/api/analyze", methods=["POST"])
def analyze():
    body = _json_body()
    analysis = engine.analyze(_require_data(body))
    payload = analysis.to_dict()
    payload["degraded"] = analysis.degraded
    return jsonify(payload)


@app.route("/api/suggest", methods=["POST"])
def suggest():
    body = _json_body()
    options = body.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError("'options' must be a JSON object.")
    result = engine.suggest(_require_data(body), **options)
    payload = result.to_dict()
    payload["response"] = format_suggestions_message(result.suggestions)
    return jsonify(payload)


@app.route("/api/chart-types", methods=["GET"])
def chart_types():
    return jsonify({"chartTypes": [d.summary() for d in engine.get_chart_types().values()]})


@app.route("/api/chart-types/<chart_type>/resources", methods=["GET"])
def chart_type_resources(chart_type: str):
    if chart_type != "general" and chart_type not in engine.get_chart_types():
        raise UnsupportedChartTypeError(chart_type)
    return jsonify(resources_payload(chart_type))


@app.route("/api/chart-config", methods=["POST"])
def chart_config():
    body = _json_body()
    chart_type = body.get("chartType")
    if not chart_type:
        raise InputError("Request body needs a 'chartType' field.")
    data = _require_data(body)
    analysis = engine.analyze(data)
    config = build_chart_config(
        {"chartType": chart_type, "educationalContext": body.get("educationalContext")},
        data,
        options=body.get("options") or {},
        metadata=analysis.metadata,
        characteristics=analysis.characteristics,
        definitions=engine.get_chart_types(),
    )
    return jsonify(config)


# --- Main Execution ---
if __name__ == "__main__":
    app.run(
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=os.environ.get('FLASK_DEBUG', '0') == '1',
    )
