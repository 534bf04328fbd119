"""
Flask REST API for Movie Pitch Service.

Thin transport over MoviePitchService: every route forwards to the
service's dispatch table and serializes the resulting snapshot.
"""
import json
import logging
import queue
from typing import Iterator, Optional

from flask import Flask, Response, jsonify, request, send_from_directory
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .exceptions import MoviePitchError, StorageError, ValidationError
from .models import MovieState
from .service import MoviePitchService

logger = logging.getLogger(__name__)


def _sse(state: MovieState) -> str:
    return f"event: state\ndata: {json.dumps(state.to_dict())}\n\n"


def stream_snapshots(
    service: MoviePitchService,
    session_id: str,
    heartbeat_s: float = 15.0,
) -> Iterator[str]:
    """
    Server-Sent Events stream of full state snapshots for one session.

    Starts with the current snapshot, then yields one event per update.
    """
    updates: "queue.Queue[MovieState]" = queue.Queue()
    unsubscribe = service.subscribe(session_id, updates.put)
    try:
        yield _sse(service.get_state(session_id))
        while True:
            try:
                state = updates.get(timeout=heartbeat_s)
            except queue.Empty:
                yield ": keep-alive\n\n"
                continue
            yield _sse(state)
    finally:
        unsubscribe()


def create_app(
    service: MoviePitchService,
    blob_dir: Optional[str] = None,
    rate_limits: bool = True,
) -> Flask:
    """
    Build the Flask application.

    :param service: Wired MoviePitchService
    :param blob_dir: Directory served under /posters (LocalBlobStore root)
    :param rate_limits: Enable flask-limiter limits
    :return: Flask app
    """
    app = Flask(__name__)
    app.config["RATELIMIT_ENABLED"] = rate_limits

    limiter = Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=["300 per hour", "60 per minute"],
        storage_uri="memory://",
    )

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        logger.warning(f"Validation failed: {e}")
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(StorageError)
    def handle_storage_error(e):
        logger.error(f"Storage failure: {e}")
        return jsonify({"error": str(e)}), 503

    @app.errorhandler(MoviePitchError)
    def handle_service_error(e):
        logger.error(f"Service error: {e}", exc_info=True)
        return jsonify({"error": str(e)}), 500

    @app.route("/health")
    @limiter.exempt
    def health():
        return jsonify({"ok": True, "operations": list(service.operations)})

    @app.route("/sessions/<session_id>/state", methods=["GET"])
    def get_state(session_id: str):
        return jsonify(service.get_state(session_id).to_dict())

    @app.route("/sessions/<session_id>/operations/<operation>", methods=["POST"])
    @limiter.limit("20 per minute")
    def call_operation(session_id: str, operation: str):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        args = data.get("args", [])

        logger.info(f"Operation - Session: {session_id}, Operation: {operation}")
        result = service.call(session_id, operation, args)
        return jsonify(result.to_dict())

    @app.route("/sessions/<session_id>/events", methods=["GET"])
    @limiter.exempt
    def events(session_id: str):
        # Session id errors surface as 400 before streaming starts
        service.get_state(session_id)
        return Response(
            stream_snapshots(service, session_id),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    if blob_dir:
        @app.route("/posters/<path:key>", methods=["GET"])
        def poster(key: str):
            return send_from_directory(blob_dir, key)

    return app
