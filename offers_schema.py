import logging
import os
import sqlite3

from offers_config import StoreConfig, get_config
from offers_errors import ConnectionFailure

logger = logging.getLogger(__name__)

COMPARISONS_DDL = """
CREATE TABLE IF NOT EXISTS offer_comparisons (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
  updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""

OFFERS_DDL = """
CREATE TABLE IF NOT EXISTS offers (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  comparison_id INTEGER NOT NULL,
  buyer_name TEXT NOT NULL,
  purchase_price REAL NOT NULL,
  down_payment REAL NOT NULL,
  seller_note_amount REAL NOT NULL,
  seller_note_rate REAL NOT NULL,
  seller_note_duration INTEGER NOT NULL,
  has_balloon INTEGER DEFAULT 0,
  balloon_year INTEGER DEFAULT 5,
  closing_date TEXT,
  contingencies TEXT,
  created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
  FOREIGN KEY(comparison_id) REFERENCES offer_comparisons(id) ON DELETE CASCADE
);
"""

INDEX_DDL = "CREATE INDEX IF NOT EXISTS idx_comparison_id ON offers(comparison_id);"


def connect(cfg: StoreConfig) -> sqlite3.Connection:
    """
    Opens a connection with dict-like rows and FK enforcement on.
    Any failure here is reported as ConnectionFailure.
    """
    try:
        conn = sqlite3.connect(cfg.db_path, timeout=cfg.timeout)
        conn.row_factory = sqlite3.Row
        # Cascades only fire with this on, and it is per connection.
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as e:
        logger.exception("Database connection failed: %s", cfg.db_path)
        raise ConnectionFailure() from e
    return conn


def ensure_schema(cfg: StoreConfig) -> None:
    """
    Creates the data directory, both tables and the offers index if missing.
    Safe to run repeatedly; meant to be called once at startup.
    """
    try:
        os.makedirs(cfg.data_dir, exist_ok=True)
    except OSError as e:
        logger.exception("Could not create data directory: %s", cfg.data_dir)
        raise ConnectionFailure() from e

    conn = connect(cfg)
    try:
        with conn:
            conn.execute(COMPARISONS_DDL)
            conn.execute(OFFERS_DDL)
            conn.execute(INDEX_DDL)
    except sqlite3.Error as e:
        logger.exception("Schema setup failed: %s", cfg.db_path)
        raise ConnectionFailure() from e
    finally:
        conn.close()
    logger.debug("Schema ensured at %s", cfg.db_path)


def table_names(cfg: StoreConfig) -> list:
    conn = connect(cfg)
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
    finally:
        conn.close()
    return [r["name"] for r in rows]


if __name__ == "__main__":
    cfg = get_config()
    ensure_schema(cfg)
    print(f"DB ready: {cfg.db_path} ({', '.join(table_names(cfg))})")
