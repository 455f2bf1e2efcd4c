from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from construction_portal.database.bootstrap import ensure_indexes, list_collections
from construction_portal.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    conn = DatabaseConnection(DBConfig(uri=db_config["uri"], database=db_config["database"], timeout_ms=db_config["timeout_ms"]))
    try:
        indexes = ensure_indexes(conn.db)
        print(
            "OK: Created indexes -> "
            f"{db_config['database']} (indexes={len(indexes)}, collections={len(list_collections(conn.db))})"
        )
    finally:
        conn.close()


if __name__ == "__main__":
    main()
