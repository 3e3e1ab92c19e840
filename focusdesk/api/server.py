"""REST backend for FocusDesk.

Stateless per-request handlers over ``focusdesk.database.store``.  Each
request opens and commits its own database session; there is no
cross-request state beyond the store itself.

Run with::

    python -m focusdesk serve --port 3000
"""

from __future__ import annotations

from flask import Flask, jsonify, request

from ..database import store
from ..database.store import StoreError
from ..settings import Settings
from .assistant import Assistant, AssistantError


class BadRequest(ValueError):
    """The request body was not usable."""


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def create_app(
    settings: Settings | None = None,
    assistant: Assistant | None = None,
) -> Flask:
    """Build the Flask application.

    The database must already be configured (``configure_engine`` /
    ``init_db``); the app only talks to the store module.
    """
    settings = settings or Settings()
    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["assistant"] = assistant or Assistant.from_settings(settings)

    # ── error handlers ────────────────────────────────────────────────

    @app.errorhandler(BadRequest)
    def _bad_request(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(StoreError)
    def _store_error(exc):
        app.logger.error("Store failure on %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": "Database error"}), 500

    @app.errorhandler(AssistantError)
    def _assistant_error(exc):
        app.logger.error("AI Error: %s", exc)
        return jsonify({"error": "Failed to generate AI response"}), 500

    # ── health ────────────────────────────────────────────────────────

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    # ── tasks ─────────────────────────────────────────────────────────

    @app.get("/api/tasks")
    def list_tasks():
        return jsonify(store.list_tasks())

    @app.post("/api/tasks")
    def create_task():
        new_id = store.create_task(_json_body())
        return jsonify({"id": new_id}), 201

    @app.patch("/api/tasks/<int:task_id>")
    def patch_task(task_id: int):
        ok = store.update_task(task_id, _json_body())
        return jsonify({"success": ok}), (200 if ok else 404)

    # ── lectures ──────────────────────────────────────────────────────

    @app.get("/api/lectures")
    def list_lectures():
        return jsonify(store.list_lectures())

    @app.post("/api/lectures")
    def create_lecture():
        new_id = store.create_lecture(_json_body())
        return jsonify({"id": new_id}), 201

    @app.patch("/api/lectures/<int:lecture_id>")
    def patch_lecture(lecture_id: int):
        ok = store.update_lecture(lecture_id, _json_body())
        return jsonify({"success": ok}), (200 if ok else 404)

    # ── projects ──────────────────────────────────────────────────────

    @app.get("/api/projects")
    def list_projects():
        return jsonify(store.list_projects())

    @app.post("/api/projects")
    def create_project():
        new_id = store.create_project(_json_body())
        return jsonify({"id": new_id}), 201

    # ── internship logs ───────────────────────────────────────────────

    @app.get("/api/internship")
    def list_internship_logs():
        return jsonify(store.list_internship_logs())

    @app.post("/api/internship")
    def create_internship_log():
        new_id = store.create_internship_log(_json_body())
        return jsonify({"id": new_id}), 201

    # ── focus sessions ────────────────────────────────────────────────

    @app.get("/api/focus")
    def list_focus_sessions():
        return jsonify(store.list_focus_sessions())

    @app.post("/api/focus")
    def create_focus_session():
        body = _json_body()
        new_id = store.create_focus_session(body.get("duration"), body.get("type"))
        return jsonify({"id": new_id}), 201

    # ── analytics ─────────────────────────────────────────────────────

    @app.get("/api/analytics")
    def analytics():
        return jsonify(store.analytics())

    # ── AI passthrough ────────────────────────────────────────────────

    @app.post("/api/ai/chat")
    def ai_chat():
        body = _json_body()
        message = str(body.get("message") or "").strip()
        if not message:
            raise BadRequest("message is required")
        text = app.extensions["assistant"].reply(message, body.get("context"))
        return jsonify({"text": text})

    return app
