import logging
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from offers_config import StoreConfig, get_config
from offers_errors import TransactionFailure
from offers_schema import connect, ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_BALLOON_YEAR = 5

OFFER_INSERT = """
    INSERT INTO offers (
      comparison_id, buyer_name, purchase_price, down_payment,
      seller_note_amount, seller_note_rate, seller_note_duration,
      has_balloon, balloon_year, closing_date, contingencies, created_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""


def _now() -> str:
    # CURRENT_TIMESTAMP layout plus microseconds, so text order is time order.
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")


def _offer_params(comparison_id: int, offer: Mapping[str, Any], created_at: str) -> tuple:
    balloon_year = offer.get("balloon_year")
    return (
        comparison_id,
        offer.get("buyer_name"),
        offer.get("purchase_price"),
        offer.get("down_payment"),
        offer.get("seller_note_amount"),
        offer.get("seller_note_rate"),
        offer.get("seller_note_duration"),
        1 if offer.get("has_balloon") else 0,
        DEFAULT_BALLOON_YEAR if balloon_year is None else balloon_year,
        offer.get("closing_date"),
        offer.get("contingencies"),
        created_at,
    )


def _offer_row(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["has_balloon"] = bool(d["has_balloon"])
    return d


@dataclass(frozen=True)
class ComparisonStore:
    """
    Saved offer comparisons in a single SQLite file.

    Every call opens its own connection and closes it before returning.
    The schema must already exist; see `open_store` / `ensure_schema`.
    """
    cfg: StoreConfig = field(default_factory=StoreConfig)

    def save(self, name: str, offers: Iterable[Mapping[str, Any]]) -> int:
        """
        Inserts the comparison and all its offers in one transaction.
        Returns the new comparison id. On any statement failure nothing is
        kept and TransactionFailure is raised with the original error chained.
        """
        conn = connect(self.cfg)
        count = 0
        try:
            with conn:
                now = _now()
                cur = conn.execute(
                    "INSERT INTO offer_comparisons (name, created_at, updated_at) VALUES (?, ?, ?)",
                    (name, now, now),
                )
                comparison_id = cur.lastrowid

                for offer in offers:
                    conn.execute(OFFER_INSERT, _offer_params(comparison_id, offer, now))
                    count += 1
        except sqlite3.Error as e:
            logger.warning("Save of comparison %r rolled back: %s", name, e)
            raise TransactionFailure(f"Saving comparison {name!r} failed: {e}") from e
        finally:
            conn.close()

        logger.info("Saved comparison %s (%r) with %d offers", comparison_id, name, count)
        return comparison_id

    def load(self, comparison_id: int) -> Optional[Dict[str, Any]]:
        """
        Returns {"comparison": {...}, "offers": [...]} or None if the id is unknown.
        """
        conn = connect(self.cfg)
        try:
            row = conn.execute(
                "SELECT * FROM offer_comparisons WHERE id = ?", (comparison_id,)
            ).fetchone()
            if not row:
                logger.debug("Comparison %s not found", comparison_id)
                return None

            offer_rows = conn.execute(
                "SELECT * FROM offers WHERE comparison_id = ? ORDER BY id", (comparison_id,)
            ).fetchall()
        finally:
            conn.close()

        return {
            "comparison": dict(row),
            "offers": [_offer_row(r) for r in offer_rows],
        }

    def list_all(self) -> List[Dict[str, Any]]:
        """
        Every comparison with its offer_count, most recently touched first.
        """
        conn = connect(self.cfg)
        try:
            rows = conn.execute("""
                SELECT c.*, COUNT(o.id) AS offer_count
                FROM offer_comparisons c
                LEFT JOIN offers o ON c.id = o.comparison_id
                GROUP BY c.id
                ORDER BY c.updated_at DESC, c.id DESC
            """).fetchall()
        finally:
            conn.close()
        return [dict(r) for r in rows]

    def delete(self, comparison_id: int) -> bool:
        conn = connect(self.cfg)
        try:
            with conn:
                cur = conn.execute("DELETE FROM offer_comparisons WHERE id = ?", (comparison_id,))
        finally:
            conn.close()
        logger.info("Deleted comparison %s (%d rows)", comparison_id, cur.rowcount)
        return True

    def touch(self, comparison_id: int) -> bool:
        conn = connect(self.cfg)
        try:
            with conn:
                cur = conn.execute(
                    "UPDATE offer_comparisons SET updated_at = ? WHERE id = ?",
                    (_now(), comparison_id),
                )
        finally:
            conn.close()
        logger.debug("Touched comparison %s (%d rows)", comparison_id, cur.rowcount)
        return True


def open_store(cfg: Optional[StoreConfig] = None) -> ComparisonStore:
    """Startup entry point: resolve config, make sure the schema exists, hand back a store."""
    cfg = cfg or get_config()
    ensure_schema(cfg)
    return ComparisonStore(cfg)


# --- quick "smoke test" runner ---
if __name__ == "__main__":
    store = open_store()
    saved = store.list_all()
    print("Saved comparisons:", len(saved))
    for c in saved[:10]:
        print(f"  {c['id']}: {c['name']} ({c['offer_count']} offers, updated {c['updated_at']})")
