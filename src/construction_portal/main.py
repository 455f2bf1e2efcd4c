from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .credentials.controller import register as register_credentials
from .database.bootstrap import ensure_demo_profiles, ensure_indexes, list_collections
from .profiles.controller import register as register_profiles

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
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        container = build_container(
            db_config=db_config,
            bcrypt_rounds=int(getattr(settings, "BCRYPT_ROUNDS", 10)),
        )
        logger.info("settings=%s db=%s", settings_module, db_config.get("database"))

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(container.conn.db)
            logger.info("schema ready (collections=%d)", len(list_collections(container.conn.db)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_profiles(container.conn.db)

    register_credentials(app, container)
    register_profiles(app, container)

    return app
