import logging
from datetime import timedelta
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from podcast_gateway.config.settings import Settings, load_settings
from podcast_gateway.infra import openai_client
from podcast_gateway.service import submission_service
from podcast_gateway.service.submission_service import SubmissionError

logger = logging.getLogger(__name__)

SETTINGS_KEY = "GATEWAY_SETTINGS"

ALLOWED_METHODS = ["POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]
MAX_AGE = timedelta(hours=24)

CORS_HEADERS = {
    "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    "Access-Control-Max-Age": str(int(MAX_AGE.total_seconds())),
}

gateway = Blueprint("gateway", __name__)


def _settings() -> Settings:
    return current_app.config[SETTINGS_KEY]


@gateway.before_app_request
def preflight():
    # Answer every OPTIONS request here, even for unknown paths.
    if request.method == "OPTIONS":
        return current_app.response_class(status=200)
    return None


@gateway.after_app_request
def fixed_cors_headers(response):
    # Same permissive set on every response, preflight or not.
    response.headers.update(CORS_HEADERS)
    return response


@gateway.route("/submit-email", methods=["POST"])
def submit_email():
    try:
        record = submission_service.parse_submission(request.get_json(force=True, silent=True))
    except SubmissionError as e:
        return jsonify({"error": str(e)}), 400
    try:
        result = submission_service.submit(record, _settings())
    except Exception as e:
        logger.exception("Email submission error")
        return jsonify({"success": False, "error": str(e) or "Failed to submit email"}), 500
    return jsonify(result.to_dict()), 200 if result.success else 500


@gateway.route("/", defaults={"path": ""}, methods=["POST"])
@gateway.route("/<path:path>", methods=["POST"])
def chat_proxy(path):
    try:
        body = request.get_json(force=True)
        status, data = openai_client.forward_chat_completion(body, _settings())
        return jsonify(data), status
    except Exception as e:
        logger.error("Chat proxy error: %s", e)
        return jsonify({"error": str(e)}), 500


@gateway.app_errorhandler(405)
def method_not_allowed(_e):
    return current_app.response_class("Method not allowed", status=405, mimetype="text/plain")


def create_app(settings: Optional[Settings] = None) -> Flask:
    app = Flask(__name__)
    app.config[SETTINGS_KEY] = settings or load_settings()
    app.register_blueprint(gateway)
    # After the blueprint: after-request hooks run in reverse, fixed_cors_headers last.
    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        max_age=MAX_AGE,
    )
    return app
