from datetime import datetime, timezone
from typing import Optional

from flask import Flask

from . import settings
from .app_utils import make_ok
from .config import setup_logger
from .constants import GOAL_ORIGIN_LABELS, GOAL_ORIGINS
from .routes.clubs_api import bp as clubs_api_bp
from .services.club_service import ClubService
from .storage import ClubStore

logger = setup_logger(__name__)


def create_app(service: Optional[ClubService] = None) -> Flask:
    """Build the Flask app around a club service (snapshot-backed by default)."""
    app = Flask(__name__)
    app.json.ensure_ascii = False

    if service is None:
        store = ClubStore(settings.DATA_FILE, seed_path=settings.SEED_FILE)
        service = ClubService(store, persist=settings.STORAGE_ENABLED)
    app.extensions["club_service"] = service

    app.register_blueprint(clubs_api_bp)

    @app.route("/health", methods=["GET"])
    def health():
        return make_ok(
            {"ok": True, "ts": datetime.now(timezone.utc).isoformat()},
            "OK",
            status_code=200,
        )

    @app.route("/api/origins", methods=["GET"])
    def origins():
        """Origin tags in declaration order with their display labels."""
        return make_ok(
            {"origins": [{"origin": code, "label": GOAL_ORIGIN_LABELS[code]} for code in GOAL_ORIGINS]}
        )

    logger.info("app_created: %d clubs loaded", len(service.clubs))
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host=settings.DEV_SERVER_HOST, port=settings.DEV_SERVER_PORT, debug=True)
