"""
MedPulse - Web API

A small Flask JSON API over the content intelligence and karma services.

Run with: python -m web.app
Or: cd web && python app.py
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, request, jsonify
from medpulse.services import get_ai_service, get_karma_service
from medpulse.storage import StorageError
from medpulse.models.post import CONTENT_TYPES
from medpulse.config import (
    APP_ENV,
    SUMMARY_MODEL_NAME,
    is_store_configured,
    validate_config,
)

app = Flask(__name__)


def _json_body() -> dict:
    """Request JSON as a dict; anything else counts as no data."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data: dict, key: str) -> str:
    """Stripped string field from a JSON body; non-strings count as missing."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


# =============================================================================
# Content Intelligence Endpoints
# =============================================================================

@app.route("/api/ai/summarize", methods=["POST"])
def api_summarize():
    """Summarize a post body and store the summary."""
    data = _json_body()

    post_id = data.get("post_id")
    if isinstance(post_id, int) and not isinstance(post_id, bool):
        post_id = str(post_id)
    post_id = post_id.strip() if isinstance(post_id, str) else ""
    content = data.get("content")

    if not post_id:
        return jsonify({"error": "post_id required"}), 400
    if not _text_field(data, "content"):
        return jsonify({"error": "content required"}), 400

    result = get_ai_service().generate_summary(post_id, content)

    return jsonify({
        "success": True,
        "summary": result.summary,
        "model": result.model,
        "id": result.record_id,
        "stored": result.success,
        "error": result.error,
    })


@app.route("/api/ai/summary/<post_id>")
def api_get_summary(post_id):
    """Latest stored summary for a post."""
    record = get_ai_service().get_summary(post_id)

    if record is None:
        return jsonify({"error": f"No summary for post {post_id}"}), 404

    return jsonify(record.to_dict())


@app.route("/api/ai/analyze", methods=["POST"])
def api_analyze():
    """Sentiment analysis of a piece of text."""
    data = _json_body()
    text = data.get("text")

    if not _text_field(data, "text"):
        return jsonify({"error": "text required"}), 400

    result = get_ai_service().analyze_content(text)

    return jsonify({
        "success": True,
        "analysis": result.analysis.to_dict(),
        "stored": result.success,
        "error": result.error,
    })


@app.route("/api/ai/report", methods=["POST"])
def api_report():
    """Readability and tone report for a draft."""
    data = _json_body()
    text = data.get("text")

    if not _text_field(data, "text"):
        return jsonify({"error": "text required"}), 400

    report = get_ai_service().content_report(text)
    return jsonify({"success": True, "report": report.to_dict()})


@app.route("/api/ai/insights")
def api_insights():
    """Knowledge-base insights for a query."""
    query = request.args.get("q", "").strip()

    if not query:
        return jsonify({"error": "Query parameter 'q' is required"}), 400

    insights = get_ai_service().get_medical_insights(query)

    return jsonify({
        "success": True,
        "query": query,
        "count": len(insights),
        "insights": [i.to_dict() for i in insights],
    })


@app.route("/api/trending")
def api_trending():
    """Trending topics over the recent post window."""
    outcome = get_ai_service().get_trending_topics()

    return jsonify({
        "success": True,
        "fallback": outcome.used_fallback,
        "error": outcome.error,
        "topics": [t.to_dict() for t in outcome.items],
    })


@app.route("/api/search")
def api_search():
    """Search with synonym expansion and medical re-ranking."""
    query = request.args.get("q", "").strip()
    content_type = request.args.get("type", "all")

    if not query:
        return jsonify({"error": "Query parameter 'q' is required"}), 400

    if content_type not in CONTENT_TYPES:
        return jsonify({
            "error": f"Parameter 'type' must be one of: {', '.join(CONTENT_TYPES)}"
        }), 400

    outcome = get_ai_service().intelligent_search(query, content_type)

    return jsonify({
        "success": True,
        "query": query,
        "count": len(outcome.items),
        "fallback": outcome.used_fallback,
        "error": outcome.error,
        "results": [r.to_dict() for r in outcome.items],
    })


# =============================================================================
# Karma Endpoints
# =============================================================================

@app.route("/api/karma/<user_id>")
def api_karma_stats(user_id):
    """Derived karma stats for a user."""
    try:
        stats = get_karma_service().get_stats(user_id)
    except StorageError as e:
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({"success": True, "user_id": user_id, "stats": stats.to_dict()})


@app.route("/api/karma/<user_id>/activities", methods=["POST"])
def api_karma_award(user_id):
    """Append a karma activity for a user."""
    data = _json_body()
    activity_type = _text_field(data, "activity_type")
    description = data.get("description")

    if not activity_type:
        return jsonify({"error": "activity_type required"}), 400
    if description is not None and not isinstance(description, str):
        return jsonify({"error": "description must be a string"}), 400

    try:
        result = get_karma_service().award(user_id, activity_type, description)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not result.success:
        return jsonify({"success": False, "error": result.error}), 500

    return jsonify({"success": True, "activity": result.activity.to_dict()}), 201


@app.route("/api/leaderboard")
def api_leaderboard():
    """Top users by total karma."""
    limit = request.args.get("limit")
    if limit is not None:
        try:
            limit = int(limit)
        except ValueError:
            return jsonify({"error": "Parameter 'limit' must be an integer"}), 400
        if limit < 1:
            return jsonify({"error": "Parameter 'limit' must be at least 1"}), 400

    try:
        entries = get_karma_service().get_leaderboard(limit)
    except StorageError as e:
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({
        "success": True,
        "count": len(entries),
        "leaderboard": [entry.to_dict() for entry in entries],
    })


@app.route("/api/status")
def api_status():
    """Configuration and backend status."""
    return jsonify({
        "app_env": APP_ENV,
        "store_configured": is_store_configured(),
        "storage": get_ai_service().storage.name,
        "model": SUMMARY_MODEL_NAME,
        "config_errors": validate_config(),
    })


if __name__ == "__main__":
    print("=" * 50)
    print("MedPulse API")
    print("=" * 50)
    print("Listening on http://localhost:5001")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=5001)
