from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import DEFAULT_LOCAL_TIMEZONE, DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS
from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .edits.controller import register as register_edits
from .payroll.controller import register as register_payroll
from .sync.controller import register as register_sync

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            tz_name=getattr(settings, "LOCAL_TIMEZONE", DEFAULT_LOCAL_TIMEZONE),
            sync_timeout_seconds=getattr(settings, "SYNC_BATCH_TIMEOUT_SECONDS", DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS),
        )

    register_payroll(app, container)
    register_edits(app, container)
    register_attendance(app, container)
    register_sync(app, container)

    return app
