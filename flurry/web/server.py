"""Flurry Web — Flask JSON API hosting one progression engine session.

A development harness for the game loop: the loop posts snapshots and
events, the server answers with derived stats and unlock notifications.
"""

from __future__ import annotations

import logging
import threading

from flask import Flask, jsonify, request

from flurry.engine.catalog import Catalog, default_catalog
from flurry.engine.economy import available_upgrades, upgrade_cost
from flurry.engine.game_state import GameSnapshot
from flurry.engine.progression import ProgressionEngine
from flurry.engine.recompute import UnlockNotification

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)

# ---------------------------------------------------------------------------
# In-memory engine session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_engine: ProgressionEngine | None = None
_pending_notifications: list[UnlockNotification] = []


def _ensure_engine() -> ProgressionEngine:
    """Create the engine if not yet started."""
    global _engine
    if _engine is None:
        _engine = ProgressionEngine(default_catalog())
        _engine.subscribe(_pending_notifications.append)
    return _engine


def reset_session(catalog: Catalog | None = None) -> None:
    """Drop the current session; the next request starts a fresh one."""
    global _engine
    with _lock:
        _pending_notifications.clear()
        _engine = None
        if catalog is not None:
            _engine = ProgressionEngine(catalog)
            _engine.subscribe(_pending_notifications.append)


def _drain_notifications() -> list[dict]:
    notifs = [
        {
            "id": n.entry_id,
            "name": n.name,
            "kind": n.kind,
            "unlocked_at": n.unlocked_at,
        }
        for n in _pending_notifications
    ]
    _pending_notifications.clear()
    return notifs


def _entry_json(entry) -> dict:
    return {
        "id": entry.id,
        "name": entry.name,
        "description": entry.description,
        "kind": entry.kind.value,
        "category": entry.category,
        "cost": entry.cost,
        "order": entry.order,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/catalog")
def api_catalog():
    with _lock:
        engine = _ensure_engine()
        return jsonify({
            "entries": [_entry_json(e) for e in engine.catalog],
            "assistants": {
                aid: {"name": a.name, "group": a.group, "base_sps": a.base_sps}
                for aid, a in engine.catalog.assistants.items()
            },
        })


@app.route("/api/recompute", methods=["POST"])
def api_recompute():
    with _lock:
        engine = _ensure_engine()
        body = request.get_json(silent=True) or {}
        try:
            snapshot = GameSnapshot.from_dict(body)
        except (TypeError, ValueError) as exc:
            logger.warning("Rejected snapshot: %s", exc)
            return jsonify({"error": f"bad snapshot: {exc}"}), 400
        stats = engine.recompute(snapshot)
        data = stats.to_dict()
        data["notifications"] = _drain_notifications()
        data["available"] = [
            {"id": e.id, "cost": upgrade_cost(e, stats)}
            for e in available_upgrades(engine.catalog, engine.tracker)
        ]
        return jsonify(data)


@app.route("/api/event", methods=["POST"])
def api_event():
    with _lock:
        engine = _ensure_engine()
        body = request.get_json(silent=True) or {}
        name = body.get("name")
        if not isinstance(name, str) or not name:
            return jsonify({"error": "event name required"}), 400
        payload = body.get("payload") or {}
        if not isinstance(payload, dict):
            return jsonify({"error": "payload must be an object"}), 400
        engine.on_event(name, payload)
        return jsonify({"queued": len(engine.pending_events)})


@app.route("/api/jump", methods=["POST"])
def api_jump():
    with _lock:
        engine = _ensure_engine()
        body = request.get_json(silent=True) or {}
        classes = body.get("classes")
        if classes is not None and (
            not isinstance(classes, list)
            or not all(isinstance(c, str) and c for c in classes)
        ):
            return jsonify({"error": "classes must be a list of strings"}), 400
        cleared = engine.on_jump(classes)
        return jsonify({"cleared": cleared})


@app.route("/api/achievements")
def api_achievements():
    with _lock:
        engine = _ensure_engine()
        progress = engine.achievement_progress()
        return jsonify({
            "unlocked": progress.unlocked,
            "total": progress.total,
            "categories": {
                category: [s.to_dict() for s in statuses]
                for category, statuses in engine.achievements_by_category().items()
            },
        })


@app.route("/api/unlocks")
def api_unlocks():
    with _lock:
        engine = _ensure_engine()
        return jsonify(engine.tracker.to_dict())


def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    app.run(host=host, port=port, debug=debug, threaded=True)
