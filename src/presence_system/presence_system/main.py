from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_directory, list_tables

from .container import Container, build_container
from .access_codes.controller import register as register_access_codes
from .attendance.controller import register as register_attendance
from .schedules.controller import register as register_schedules

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Container | None = None) -> Flask:
    """Application factory.

    Passing a ready ``container`` skips settings-driven database bootstrap.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 10)) * 1024 * 1024

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_directory(
                db_config,
                branch_id=int(getattr(settings, "DEFAULT_BRANCH_ID", 1)),
                branch_name=getattr(settings, "DEFAULT_BRANCH_NAME", "Main Branch"),
            )
            logger.info("Demo seed ready")

        container = build_container(db_config=db_config, settings=settings)

    register_access_codes(app, container)
    register_attendance(app, container)
    register_schedules(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"}), 200

    @app.errorhandler(413)
    def too_large(_e):
        return jsonify({"success": False, "error": "VALIDATION", "message": "Uploaded file is too large"}), 413

    return app
