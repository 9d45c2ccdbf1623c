from typing import Optional

import pandas as pd

from offers_store import ComparisonStore

COMPARISON_COLUMNS = ["id", "name", "created_at", "updated_at", "offer_count"]

OFFER_COLUMNS = [
    "id", "comparison_id", "buyer_name", "purchase_price", "down_payment",
    "seller_note_amount", "seller_note_rate", "seller_note_duration",
    "has_balloon", "balloon_year", "closing_date", "contingencies", "created_at",
]


def comparisons_frame(store: ComparisonStore) -> pd.DataFrame:
    """Saved comparisons as a table, same order as list_all()."""
    return pd.DataFrame(store.list_all(), columns=COMPARISON_COLUMNS)


def offers_frame(store: ComparisonStore, comparison_id: int) -> Optional[pd.DataFrame]:
    """
    Offers of one comparison in stored order.
    None when the comparison doesn't exist.
    """
    loaded = store.load(comparison_id)
    if loaded is None:
        return None
    return pd.DataFrame(loaded["offers"], columns=OFFER_COLUMNS)
