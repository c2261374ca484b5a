from __future__ import annotations

import importlib
import logging

from config import get_settings_module

from shift_calendar.database.bootstrap import apply_schema, list_tables
from shift_calendar.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    logger.info(
        "OK: Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        conn.config.user,
        conn.config.host,
        conn.config.port,
        conn.config.database,
        len(tables),
    )


if __name__ == "__main__":
    main()
