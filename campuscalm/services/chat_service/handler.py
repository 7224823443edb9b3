"""Chat Service HTTP handler.

Serves POST /api/chat for the chat widget, plus health and readiness checks
and the widget's static bundle. Raw message text is never logged; use
short_fingerprint() when a log line needs to refer to a message.
"""
import logging
import os

from dotenv import load_dotenv
from flask import Flask, request, jsonify, send_from_directory
from flask_cors import CORS

from campuscalm.shared.utils import short_fingerprint
from .config import ChatServiceConfig
from .errors import UpstreamError, ValidationError
from .pipeline import ChatPipeline

logger = logging.getLogger(__name__)

# Load .env before reading configuration
load_dotenv()

config = ChatServiceConfig.from_env()
pipeline = ChatPipeline.from_config(config)
static_dir = os.path.abspath(config.static_dir)

# Initialize Flask app; static files are served by the routes below
app = Flask(__name__, static_folder=None)
CORS(app)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint.

    Returns:
        200 with service status
    """
    return jsonify({
        "status": "healthy",
        "service": "chat-service",
        "model": config.model_name,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies a generative client is configured.

    Returns:
        200 if ready, 503 if not
    """
    if pipeline is None or pipeline.llm is None:
        return jsonify({"status": "not_ready", "reason": "llm_not_configured"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/api/chat", methods=["POST"])
async def chat():
    """Classify a message, ask the model for a reply and return both.

    Request Body:
        {"message": "Student message text"}

    Response:
        {
            "parsed": {...model JSON, or {"raw": text}...},
            "mood": "very negative" | "negative" | "neutral" | "positive" | "very positive",
            "score": -5,
            "urgent": true | false,
            "rawModelResponse": "..."
        }

    Error Handling:
        400 when message is missing or not a non-empty string.
        500 with detail when the generative call fails or anything else breaks.
    """
    data = request.get_json(silent=True)
    message = data.get("message") if isinstance(data, dict) else None

    try:
        payload = await pipeline.handle(message)

    except ValidationError as e:
        logger.warning(
            "CHAT_REQUEST_INVALID",
            extra={
                "reason": _invalid_reason(message),
                "body_type": type(data).__name__,
            }
        )
        return jsonify({"error": str(e)}), 400

    except UpstreamError as e:
        logger.error(
            "CHAT_UPSTREAM_ERROR",
            extra={
                "text_fp": short_fingerprint(message),
                "error": str(e),
                "cause_type": type(e.__cause__).__name__ if e.__cause__ else None,
            }
        )
        return jsonify({"error": "Server error", "detail": str(e)}), 500

    except Exception as e:
        logger.exception(
            "CHAT_REQUEST_ERROR",
            extra={
                "error": str(e),
                "error_type": type(e).__name__,
            }
        )
        return jsonify({"error": "Server error", "detail": str(e)}), 500

    return jsonify(payload.to_dict()), 200


def _invalid_reason(message) -> str:
    if message is None:
        return "missing_message"
    if isinstance(message, str) and message:
        return "message_too_long"
    return "invalid_message"


@app.route("/", methods=["GET"])
def index():
    """Serve the chat widget, or a banner when no bundle is deployed."""
    if os.path.isfile(os.path.join(static_dir, "index.html")):
        return send_from_directory(static_dir, "index.html")
    return "campuscalm chat service is running. POST /api/chat with {\"message\": ...}\n", 200, {
        "Content-Type": "text/plain; charset=utf-8"
    }


@app.route("/<path:filename>", methods=["GET"])
def static_files(filename):
    """Serve widget assets from STATIC_DIR."""
    return send_from_directory(static_dir, filename)


if __name__ == "__main__":
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", config.port))
    app.run(host="0.0.0.0", port=port)
