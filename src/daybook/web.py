"""Daybook web app."""

import logging
from pathlib import Path

from flask import Flask, abort, render_template, request, send_from_directory

from .core.entries import Entry
from .ports.entry_store import EntryStore, StorageUnavailable
from .views import TemporalView

logger = logging.getLogger(__name__)

WEBSITE_DIR = Path(__file__).parent / "website"
ASSET_MAX_AGE = 86400


def _parse_entry(payload) -> Entry:
    """Validate a /new_entry JSON body. Aborts with 400 on bad input."""
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object")

    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        abort(400, description="Field 'title' is required")

    text = payload.get("text", "")
    if text is None:
        text = ""
    if not isinstance(text, str):
        abort(400, description="Field 'text' must be a string")

    timestamp = payload.get("timestamp")
    if timestamp is not None and (not isinstance(timestamp, int) or isinstance(timestamp, bool)):
        abort(400, description="Field 'timestamp' must be an integer")

    return Entry(title=title, text=text, timestamp=timestamp)


def create_app(store: EntryStore, view: TemporalView) -> Flask:
    """Create the Flask app around an already initialized store."""
    app = Flask(__name__, template_folder=str(WEBSITE_DIR), static_folder=None)

    @app.get("/")
    def index():
        return render_template("index.html", **view.index_context())

    @app.post("/new_entry")
    def new_entry():
        try:
            entry = store.insert(_parse_entry(request.get_json(silent=True)))
        except ValueError as e:
            abort(400, description=str(e))
        logger.info(f"Stored entry {entry.title!r} at {entry.timestamp}")
        return "", 201

    def _asset(filename: str, mimetype: str):
        return send_from_directory(WEBSITE_DIR, filename, mimetype=mimetype, max_age=ASSET_MAX_AGE)

    @app.get("/style.css")
    def style():
        return _asset("style.css", "text/css")

    @app.get("/script.js")
    def script():
        return _asset("script.js", "text/javascript")

    @app.get("/favicon.svg")
    def favicon():
        return _asset("favicon.svg", "image/svg+xml")

    @app.errorhandler(StorageUnavailable)
    def storage_unavailable(e):
        logger.error(f"Storage unavailable: {e}")
        return {"error": "Journal storage is unavailable"}, 500

    return app
