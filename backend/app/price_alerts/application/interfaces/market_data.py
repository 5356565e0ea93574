"""Market data interface for fetching a current quote per ticker symbol."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Quote:
    """Current market snapshot for one symbol.

    Any field may be missing when the provider has no usable value; callers
    degrade instead of failing.

    Attributes:
        symbol: Normalized ticker symbol (e.g., "AAPL").
        current_price: Last traded price.
        change_percent: Percent change against the previous close.
        company_name: Display name of the issuer.
    """

    symbol: str
    current_price: Optional[float]
    change_percent: Optional[float]
    company_name: Optional[str] = None


class MarketDataGateway(ABC):
    """Abstract base class for market data providers."""

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Normalized ticker symbol.

        Returns:
            The provider's current Quote.

        Raises:
            MarketDataError: On network failure, rate limiting or an
                unknown symbol.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
