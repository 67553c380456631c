"""HTTP entrypoint that triggers venue seeding and serves the venues table (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict

from flask import Flask, jsonify, request

from venue_seeder.core import db
from venue_seeder.core.config import get_settings
from venue_seeder.core.db import StorageError
from venue_seeder.etl.transform import build_search_map_url, truncate_description
from venue_seeder.jobs.seed_venues import seed_database
from venue_seeder.models import Venue

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

_REQUIRED_VENUE_FIELDS = ("name", "category", "district", "description")

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, never touches the database."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "worker_port_config": settings.worker_port,
                "revision": os.getenv("K_REVISION", "unknown"),
                "region": os.getenv("X_GOOGLE_RUNTIMEREGION", "unknown"),
            }
        ),
        200,
    )


@app.get("/api/seed")
def seed_status() -> Any:
    """Report whether seeding is configured and how many venues exist."""
    settings = get_settings()
    has_api_key = bool(settings.google_api_key)
    has_db = bool(settings.database_url)

    venue_count = 0
    if has_db:
        try:
            venue_count = db.count_venues()
        except StorageError as exc:
            logger.error("Error counting venues: %s", exc)

    return jsonify(
        {
            "status": "ready",
            "configured": {"database": has_db, "apiKey": has_api_key},
            "currentVenues": venue_count,
            "instructions": {
                "seedDatabase": 'POST /api/seed with {"areas": ["ginza", "osaka"]}',
                "seedGinzaOnly": 'POST /api/seed with {"areas": ["ginza"]}',
                "seedOsakaOnly": 'POST /api/seed with {"areas": ["osaka"]}',
            },
            "note": (
                "API key is configured. POST to this endpoint to start seeding."
                if has_api_key
                else "Set GOOGLE_PLACES_API_KEY before seeding."
            ),
        }
    ), 200


@app.post("/api/seed")
def run_seed() -> Any:
    """
    Seed the venues table synchronously.
    Optional JSON fields: areas (list of "ginza" / "osaka"), apiKey (overrides GOOGLE_PLACES_API_KEY)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    settings = get_settings()

    api_key = payload.get("apiKey") or settings.google_api_key
    if not api_key:
        return (
            jsonify(
                {
                    "error": "Google Places API key required",
                    "message": "Provide apiKey in request body or set GOOGLE_PLACES_API_KEY",
                }
            ),
            400,
        )

    areas = payload.get("areas")
    if areas is not None and (not isinstance(areas, list) or not all(isinstance(a, str) for a in areas)):
        return jsonify({"error": "areas must be a list of area names"}), 400

    if not settings.database_url:
        return jsonify({"error": "Database not configured"}), 500

    logger.info("Starting database seeding for areas=%s", areas or "default")
    started = time.monotonic()
    try:
        result = seed_database(settings, areas or None, api_key=str(api_key))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Seeding error: %s", exc)
        return jsonify({"error": "Seeding failed", "details": str(exc)}), 500
    duration = f"{time.monotonic() - started:.2f}s"

    return (
        jsonify(
            {
                "success": result.success,
                "message": f"Seeded {result.total} venues in {duration}",
                "results": result.to_results(),
                "stats": result.stats,
                "duration": duration,
                "errors": result.errors,
            }
        ),
        200,
    )


@app.get("/api/venues")
def get_venues() -> Any:
    """Recent venues. Query params: limit (default 10), district, category."""
    try:
        limit = int(request.args.get("limit", "10"))
    except ValueError:
        return jsonify({"error": "limit must be numeric"}), 400
    if limit <= 0:
        return jsonify({"error": "limit must be positive"}), 400

    try:
        venues = db.list_venues(
            limit=limit,
            district=request.args.get("district") or None,
            category=request.args.get("category") or None,
        )
    except StorageError as exc:
        logger.error("Get venues error: %s", exc)
        return jsonify({"error": "Failed to fetch venues", "details": str(exc)}), 500

    return jsonify({"venues": venues, "count": len(venues)}), 200


@app.post("/api/venues")
def add_venue() -> Any:
    """Add a venue by hand. Same (name, district) dedupe key as the seeder."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    missing = [f for f in _REQUIRED_VENUE_FIELDS if not str(payload.get(f) or "").strip()]
    if missing:
        return jsonify({"error": f"Missing required fields: {', '.join(missing)}"}), 400

    rating_raw = payload.get("rating")
    try:
        rating = float(rating_raw) if rating_raw is not None else 0.0
    except (TypeError, ValueError):
        return jsonify({"error": "rating must be numeric"}), 400

    name = str(payload["name"]).strip()
    district = str(payload["district"]).strip()
    venue = Venue(
        name=name,
        category=str(payload["category"]).strip(),
        district=district,
        description=truncate_description(str(payload["description"]).strip()),
        map_url=payload.get("map_url") or build_search_map_url(name, district),
        rating=rating,
    )

    try:
        if db.venue_exists(venue.name, venue.district):
            return jsonify({"error": "Venue already exists with this name in this district"}), 409
        db.insert_venue(venue)
    except StorageError as exc:
        logger.error("Add venue error: %s", exc)
        return jsonify({"error": "Failed to add venue", "details": str(exc)}), 500

    return jsonify({"success": True, "message": "Venue added successfully", "venue": venue.to_row()}), 200


def main() -> None:
    """Cloud Run injects PORT; fall back to WORKER_PORT for local runs."""
    env_port = os.getenv("PORT")
    logger.info("[BOOT] ENV PORT=%s", env_port)

    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)

    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
