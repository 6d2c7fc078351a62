"""HTTP front door: JSON API over the cached snapshot, image proxy, static files."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

from flask import Flask, Response, abort, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import NotFound

from dota_tracker.calendar_gen import create_upcoming_calendar
from dota_tracker.config import Settings
from dota_tracker.fetch import FetchError
from dota_tracker.html_gen import generate_index_html
from dota_tracker.images import ImageProxy, is_trusted
from dota_tracker.players import PlayerHeroCache
from dota_tracker.refresh import Refresher

log = logging.getLogger(__name__)

IMAGE_MAX_AGE = 86400


def create_app(
    settings: Settings,
    refresher: Refresher,
    player_heroes: PlayerHeroCache,
    images: ImageProxy,
) -> Flask:
    """Build the Flask app around already-constructed caches."""
    # static_folder=None so the catch-all route below owns every non-API path
    app = Flask(__name__, static_folder=None)
    CORS(app, resources={r"/api/*": {"origins": "*"}}, send_wildcard=True)
    static_dir = Path(settings.static_dir).resolve()
    index_html = generate_index_html(refresher.teams)

    @app.route("/api/data")
    def api_data():
        """Return the current snapshot, or 503 until the first refresh lands."""
        snapshot = refresher.snapshot
        if snapshot is None:
            return jsonify({"error": "Data is loading..."}), 503
        return jsonify(snapshot.to_dict())

    @app.route("/api/player/<int:account_id>/heroes")
    def api_player_heroes(account_id: int):
        try:
            return jsonify(player_heroes.get(account_id))
        except FetchError as e:
            log.warning(f"Player {account_id} heroes failed: {e}")
            return jsonify({"error": str(e)}), 500

    @app.route("/api/img")
    def api_img():
        url = request.args.get("url", "")
        if not is_trusted(url):
            return Response("Bad request", status=400, mimetype="text/plain")
        try:
            image = images.get(url)
        except FetchError as e:
            log.warning(f"Image proxy failed for {url}: {e}")
            return Response("Image fetch failed", status=502, mimetype="text/plain")

        response = Response(image.data, mimetype=image.content_type)
        response.headers["Cache-Control"] = f"public, max-age={IMAGE_MAX_AGE}"
        return response

    @app.route("/api/refresh")
    def api_refresh():
        """Kick off a full refresh in the background and return immediately."""
        if refresher.is_refreshing:
            return jsonify({"status": "refresh already running"})
        threading.Thread(target=refresher.refresh_all, name="manual-refresh", daemon=True).start()
        return jsonify({"status": "refresh started"})

    @app.route("/api/upcoming.ics")
    def api_upcoming_ics():
        snapshot = refresher.snapshot
        if snapshot is None:
            return Response("Data is loading...", status=503, mimetype="text/plain")
        cal = create_upcoming_calendar(snapshot.upcoming, snapshot.team_config)
        return Response(cal.to_ical(), mimetype="text/calendar")

    @app.route("/api/status")
    def api_status():
        """Health check with cache state."""
        snapshot = refresher.snapshot
        return jsonify({
            "ok": snapshot is not None,
            "refreshing": refresher.is_refreshing,
            "last_updated": snapshot.last_updated if snapshot else None,
            "live_updated": snapshot.live_updated if snapshot else None,
            "failed_fetches": len(snapshot.errors) if snapshot else 0,
            "player_hero_cache": len(player_heroes),
            "image_cache": len(images),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.route("/")
    def index():
        return Response(index_html, mimetype="text/html")

    @app.route("/<path:filename>")
    def static_files(filename: str):
        if filename.startswith("api/"):
            abort(404)
        try:
            return send_from_directory(static_dir, filename)
        except NotFound:
            return Response("Not found", status=404, mimetype="text/plain")

    @app.errorhandler(404)
    def not_found(_e):
        return Response("Not found", status=404, mimetype="text/plain")

    return app
