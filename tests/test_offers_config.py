import pytest

from offers_config import DEFAULT_DB_PATH, DEFAULT_TIMEOUT, StoreConfig, get_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("OFFERS_DB_PATH", raising=False)
    monkeypatch.delenv("OFFERS_DB_TIMEOUT", raising=False)


def test_defaults():
    cfg = get_config()
    assert cfg.db_path == DEFAULT_DB_PATH
    assert cfg.timeout == DEFAULT_TIMEOUT
    assert DEFAULT_DB_PATH.endswith("offers.db")


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("OFFERS_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("OFFERS_DB_TIMEOUT", "1.5")

    cfg = get_config()
    assert cfg.db_path == str(tmp_path / "x.db")
    assert cfg.timeout == 1.5


def test_blank_values_fall_back(monkeypatch):
    monkeypatch.setenv("OFFERS_DB_PATH", "   ")
    monkeypatch.setenv("OFFERS_DB_TIMEOUT", "")
    assert get_config() == StoreConfig()


def test_bad_timeout(monkeypatch):
    monkeypatch.setenv("OFFERS_DB_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        get_config()


def test_data_dir(tmp_path):
    cfg = StoreConfig(db_path=str(tmp_path / "data" / "offers.db"))
    assert cfg.data_dir == str(tmp_path / "data")
