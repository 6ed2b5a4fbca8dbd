# storefront/config/settings.py

"""Central configuration for the storefront viewer."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront viewer."""

    # --- Catalog service ---
    API_BASE_URL: str = os.getenv(
        "STOREFRONT_API_BASE_URL", "https://fakestoreapi.com"
    ).rstrip("/")
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Catalog view ---
    DEFAULT_CATEGORY: str = "all"
    DEFAULT_SORT: dict[str, str] = {"type": "price", "value": "asc"}
    SORT_OPTIONS: list[dict[str, str]] = [
        {"type": "price", "value": "asc", "label": "Price: Low to High"},
        {"type": "price", "value": "desc", "label": "Price: High to Low"},
        {"type": "rating", "value": "asc", "label": "Rating: Low to High"},
        {"type": "rating", "value": "desc", "label": "Rating: High to Low"},
        {"type": "name", "value": "asc", "label": "Name: A to Z"},
        {"type": "name", "value": "desc", "label": "Name: Z to A"},
    ]

    # --- Promotional offers ---
    OFFER_PROBABILITY: float = 0.2      # Chance a product gets an offer
    MAX_DISCOUNT_PERCENT: int = 20      # Exclusive upper bound

    # --- Auth schema ---
    AUTH_TABLE_PREFIX: str = "e-comm-site_"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
    DATA_DIR: Path = BASE_DIR / "data"
    AUTH_DB_PATH: Path = Path(
        os.getenv("STOREFRONT_AUTH_DB", str(DATA_DIR / "auth.db"))
    )
