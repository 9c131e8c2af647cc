from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_month
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .fees.controller import register as register_fees
from .users.controller import register as register_users

_LOGGER = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Flask application factory.

    ``container`` is built from the active settings module unless one is
    passed in (tests hand in a container backed by in-memory repositories).
    """

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
        fee_epoch = parse_month(getattr(settings, "FEE_EPOCH", "2025-07"))
        _LOGGER.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(db_config=db_config, fee_epoch=fee_epoch)

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            _LOGGER.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    register_users(app, container)
    register_attendance(app, container)
    register_fees(app, container)

    return app
