"""Interfaces for external collaborators (market data, email delivery)."""

from app.price_alerts.application.interfaces.email_transport import EmailMessage, EmailTransport
from app.price_alerts.application.interfaces.market_data import MarketDataGateway, Quote

__all__ = [
    "EmailMessage",
    "EmailTransport",
    "MarketDataGateway",
    "Quote",
]
