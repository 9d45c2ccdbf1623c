import pytest

from offers_config import StoreConfig
from offers_store import open_store


@pytest.fixture
def cfg(tmp_path):
    # Nested on purpose: ensure_schema has to create the data directory.
    return StoreConfig(db_path=str(tmp_path / "data" / "offers.db"))


@pytest.fixture
def store(cfg):
    return open_store(cfg)


def make_offer(buyer_name="Alice", **overrides):
    offer = {
        "buyer_name": buyer_name,
        "purchase_price": 300000.0,
        "down_payment": 50000.0,
        "seller_note_amount": 250000.0,
        "seller_note_rate": 0.06,
        "seller_note_duration": 60,
    }
    offer.update(overrides)
    return offer
