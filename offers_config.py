import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "data", "offers.db")
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class StoreConfig:
    db_path: str = DEFAULT_DB_PATH

    # Seconds SQLite waits on a locked database before giving up.
    timeout: float = DEFAULT_TIMEOUT

    @property
    def data_dir(self) -> str:
        return os.path.dirname(os.path.abspath(self.db_path))


def _getenv(name: str) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def get_config() -> StoreConfig:
    """
    The only place env vars are read.
    Loads `.env` if present, without overriding variables already set.
    """
    load_dotenv(override=False)

    timeout = _getenv("OFFERS_DB_TIMEOUT")
    return StoreConfig(
        db_path=_getenv("OFFERS_DB_PATH") or DEFAULT_DB_PATH,
        timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
    )
