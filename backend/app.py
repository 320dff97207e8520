import io
import os
import logging
from typing import Optional

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS
from dotenv import load_dotenv

from domain.constants import parse_direction
from players.gestures import direction_from_drag, direction_from_key
from services.board_renderer import BoardRenderer
from services.high_score_store import HighScoreStore
from services.session import GameSession

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


def _allowed_origins():
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        return [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    # sensible defaults for local dev
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def _direction_from_payload(payload: dict):
    """
    Accept {"direction": "UP"}, {"key": "w"} or {"dx": 12, "dy": -3}.
    Returns None for a gesture too small to count.
    """
    if "direction" in payload:
        return parse_direction(payload["direction"])

    if "key" in payload:
        direction = direction_from_key(str(payload["key"]))
        if direction is None:
            raise ValueError(f"Unknown key: {payload['key']!r}")
        return direction

    if "dx" in payload or "dy" in payload:
        try:
            dx = float(payload.get("dx", 0))
            dy = float(payload.get("dy", 0))
            min_distance = float(payload.get("min_distance", 0))
        except (TypeError, ValueError):
            raise ValueError("dx, dy and min_distance must be numbers")
        return direction_from_drag(dx, dy, min_distance=min_distance)

    raise ValueError("Expected one of 'direction', 'key' or 'dx'/'dy'")


def create_app(session: Optional[GameSession] = None, autostart: bool = False) -> Flask:
    """
    Build the Flask app around a game session.

    With autostart the session's tick scheduler starts immediately;
    otherwise ticks are driven by whoever owns the session.
    """
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": _allowed_origins()}})

    if session is None:
        session = GameSession(store=HighScoreStore())
    renderer = BoardRenderer()
    app.config["GAME_SESSION"] = session

    if autostart:
        session.start()

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current snapshot plus the best score."""
        try:
            data = session.snapshot().to_dict()
            data["high_score"] = session.high_score
            return jsonify(data)
        except Exception as error:
            logging.error(f"Error reading game state: {error}")
            return jsonify({"error": "Failed to read game state"}), 500

    @app.route("/api/direction", methods=["POST"])
    def change_direction():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Expected a JSON object"}), 400

        try:
            direction = _direction_from_payload(payload)
        except ValueError as error:
            return jsonify({"error": str(error)}), 400

        try:
            if direction is not None:
                session.change_direction(direction)

            snapshot = session.snapshot()
            return jsonify({
                "requested": direction.value if direction is not None else None,
                "direction": snapshot.to_dict()["direction"],
            })
        except Exception as error:
            logging.error(f"Error changing direction: {error}")
            return jsonify({"error": "Failed to change direction"}), 500

    @app.route("/api/reset", methods=["POST"])
    def reset_game():
        try:
            data = session.restart().to_dict()
            data["high_score"] = session.high_score
            return jsonify(data)
        except Exception as error:
            logging.error(f"Error resetting game: {error}")
            return jsonify({"error": "Failed to reset game"}), 500

    @app.route("/api/high-score", methods=["GET"])
    def get_high_score():
        return jsonify({"high_score": session.high_score})

    @app.route("/api/frame.png", methods=["GET"])
    def get_frame():
        """Render the current board as a PNG."""
        try:
            image = renderer.render(session.snapshot(), high_score=session.high_score)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            buffer.seek(0)
            return send_file(buffer, mimetype="image/png")
        except Exception as error:
            logging.error(f"Error rendering frame: {error}")
            return jsonify({"error": "Failed to render frame"}), 500

    return app


if __name__ == "__main__":
    app = create_app(autostart=True)
    app.run(debug=bool(os.getenv("FLASK_DEBUG")), port=int(os.getenv("PORT", "5000")), use_reloader=False)
