from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.responses import error_response
from .container import Container, build_container
from .core.exceptions import DomainError
from .corrections.routes import register as register_corrections
from .database.bootstrap import apply_schema, list_tables
from .session.routes import register as register_session
from .summary.routes import register as register_summary

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            api_base_url=getattr(settings, "API_BASE_URL"),
            api_timeout=float(getattr(settings, "API_TIMEOUT_SECONDS", 10)),
            api_token=getattr(settings, "API_TOKEN", None),
            tick_seconds=float(getattr(settings, "COUNTDOWN_TICK_SECONDS", 1)),
        )
        logger.info(
            f"settings={settings_module} db={db_config.get('user')}@{db_config.get('host')}:"
            f"{db_config.get('port', 3306)}/{db_config.get('database')}"
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            logger.info(f"schema ready (tables={len(list_tables(container.conn))})")

    app.extensions["attendance_session"] = container

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e)

    register_session(app, container)
    register_summary(app, container)
    register_corrections(app, container)

    return app
