# storefront/services/catalog_client.py

"""HTTP client for the public catalog REST API."""

import json
import logging
from typing import Any

from curl_cffi import requests as curl_requests

from storefront.config.settings import Settings
from storefront.exceptions import NetworkError, ParseError
from storefront.models.product import Product

ALL_CATEGORIES = "all"


class CatalogClient:
    """Blocking client for the products and categories endpoints.

    Every call is a single GET with no retry.  Failures surface as
    ``NetworkError`` or ``ParseError`` for the caller to handle.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.logger = logging.getLogger("storefront.catalog_client")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()

    # ── URLs ─────────────────────────────────────────────

    def products_url(self, category: str = ALL_CATEGORIES) -> str:
        """Unfiltered endpoint for ``"all"``, category-scoped otherwise.

        The category string is interpolated as-is; unknown names just
        produce an empty list from the server.
        """
        if category == ALL_CATEGORIES:
            return f"{self.base_url}/products"
        return f"{self.base_url}/products/category/{category}"

    def categories_url(self) -> str:
        return f"{self.base_url}/products/categories"

    # ── Requests ─────────────────────────────────────────

    def _get_json(self, url: str) -> Any:
        """GET *url* and decode the JSON body."""
        self.logger.debug("GET %s", url)
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.settings.REQUEST_TIMEOUT,
            )
        except Exception as exc:
            raise NetworkError(
                f"Request to {url} failed: {exc}", url=url
            ) from exc

        if resp.status_code != 200:
            raise NetworkError(
                f"HTTP {resp.status_code} from {url}",
                url=url,
                status_code=resp.status_code,
            )

        try:
            return json.loads(resp.text)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ParseError(
                f"Invalid JSON from {url}: {exc}", url=url
            ) from exc

    def fetch_products(
        self, category: str = ALL_CATEGORIES,
    ) -> list[Product]:
        """Fetch the catalog (or one category) in server order."""
        url = self.products_url(category)
        data = self._get_json(url)
        if not isinstance(data, list):
            raise ParseError(
                f"Expected a product list from {url}, "
                f"got {type(data).__name__}",
                url=url,
            )
        items: list[Any] = data
        products = [Product.from_json(item) for item in items]
        self.logger.info(
            "Fetched %d products (category=%s)", len(products), category
        )
        return products

    def fetch_categories(self) -> list[str]:
        """Fetch the ordered list of category names."""
        url = self.categories_url()
        data = self._get_json(url)
        if not isinstance(data, list) or not all(
            isinstance(c, str) for c in data
        ):
            raise ParseError(
                f"Expected a list of category names from {url}", url=url
            )
        categories: list[str] = data
        self.logger.info("Fetched %d categories", len(categories))
        return categories
