import os
from pathlib import Path
import sqlite3

DB_FILENAME = "survey.db"
DEFAULT_DB_PATH = Path(__file__).resolve().parents[2] / "data" / DB_FILENAME


def resolve_db_path() -> Path:
    env_value = os.environ.get("SURVEY_DB_PATH", "").strip()
    return Path(env_value).expanduser() if env_value else DEFAULT_DB_PATH


def get_db(db_path: str | Path | None = None) -> sqlite3.Connection:
    target = Path(db_path) if db_path is not None else resolve_db_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(target, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn
