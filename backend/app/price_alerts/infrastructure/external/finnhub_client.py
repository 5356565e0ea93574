"""Finnhub REST API client for current stock quotes.

Finnhub API documentation: https://finnhub.io/docs/api
Free tier rate limit: 60 requests per minute.
"""

import logging
import math
from typing import Any, Optional

import httpx

from app.price_alerts.application.exceptions import MarketDataError
from app.price_alerts.application.interfaces.market_data import MarketDataGateway, Quote
from app.price_alerts.domain.entities.alert import normalize_symbol

logger = logging.getLogger(__name__)

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


class FinnhubClient(MarketDataGateway):
    """Finnhub REST API client implementing the MarketDataGateway interface.

    ``/quote`` supplies price and percent change; ``/stock/profile2``
    supplies the company name on a best-effort basis.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _api_key: Finnhub API token.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://finnhub.io/api/v1",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the Finnhub client.

        Args:
            api_key: Finnhub API token.
            base_url: Finnhub API base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Ticker symbol (e.g., "AAPL").

        Returns:
            Quote with price, percent change and company name.

        Raises:
            MarketDataError: On HTTP errors, rate limiting or unknown symbols.
        """
        clean_symbol = normalize_symbol(symbol)
        if not self._api_key:
            raise MarketDataError(clean_symbol, "FINNHUB_API_KEY is not configured")

        data = await self._get_json("/quote", clean_symbol)

        current_price = _as_float(data.get("c"))
        # Finnhub answers unknown symbols with an all-zero payload
        if not current_price:
            raise MarketDataError(clean_symbol, "no quote data (unknown symbol?)")

        return Quote(
            symbol=clean_symbol,
            current_price=current_price,
            change_percent=_as_float(data.get("dp")),
            company_name=await self._company_name(clean_symbol),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _company_name(self, symbol: str) -> Optional[str]:
        try:
            profile = await self._get_json("/stock/profile2", symbol)
        except MarketDataError as e:
            logger.debug(f"No Finnhub profile for {symbol}: {e.reason}")
            return None
        name = profile.get("name")
        if not isinstance(name, str):
            return None
        return name.strip() or None

    async def _get_json(self, path: str, symbol: str) -> dict[str, Any]:
        try:
            response = await self._client.get(
                path,
                params={"symbol": symbol, "token": self._api_key},
            )
        except httpx.HTTPError as e:
            raise MarketDataError(symbol, f"request failed: {e!r}") from e

        if response.status_code == 429:
            raise MarketDataError(symbol, "rate limited")
        if response.status_code != 200:
            raise MarketDataError(symbol, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise MarketDataError(symbol, "invalid JSON response") from e

        if not isinstance(data, dict):
            raise MarketDataError(symbol, "unexpected response shape")
        return data
