from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logging import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_DATE_FORMAT, DEFAULT_PAGE_SIZE, DEFAULT_WORKING_SET_LIMIT
from .core.exceptions import ParseFailure
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .requests.controller import register as register_requests
from .revenue.controller import register as register_revenue
from .tables.cells import format_amount, format_date, parse_amount

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[3]


def _money(value, precise: bool = True) -> str:
    try:
        return format_amount(parse_amount(value), precise=precise)
    except ParseFailure:
        return format_amount(0.0, precise=precise)


def _short_date(value, date_format: str) -> str:
    if value is None or value == "":
        return "N/A"
    try:
        return format_date(value, date_format)
    except ParseFailure:
        return "N/A"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        debug=app.config["DEBUG"],
        json=bool(getattr(settings, "LOG_JSON", False)),
    )

    page_size = int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE))
    working_set_limit = int(getattr(settings, "WORKING_SET_LIMIT", DEFAULT_WORKING_SET_LIMIT))
    date_format = str(getattr(settings, "DATE_FORMAT", DEFAULT_DATE_FORMAT))

    app.jinja_env.filters["money"] = _money
    app.jinja_env.filters["short_date"] = lambda v: _short_date(v, date_format)

    if container is None:
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_ROOT / "database" / "seed.sql")

        container = build_container(
            db_config=db_config,
            page_size=page_size,
            working_set_limit=working_set_limit,
            date_format=date_format,
        )

    register_requests(app, container)
    register_revenue(app, container)

    return app
