"""SQLAlchemy ORM models mapping to domain entities.

These models represent the database schema and handle persistence concerns.
They should be converted to/from domain entities via repository mappers.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import DeclarativeBase

from app.price_alerts.domain.entities.alert import AlertDirection


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UserModel(Base):
    """ORM model for the users table (owned by the account system).

    Only the email preference columns are read by this service.
    """

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    email_unsubscribed = Column(Boolean, default=False, nullable=False)
    daily_news_enabled = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<UserModel(id='{self.id}', email='{self.email}')>"


class StockAlertModel(Base):
    """ORM model for stock_alerts table."""

    __tablename__ = "stock_alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    symbol = Column(String(20), nullable=False)
    direction = Column(SQLEnum(AlertDirection), nullable=False)
    threshold_percent = Column(Numeric(6, 2), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    last_notified_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        # One alert per configuration per user
        Index(
            "ux_stock_alerts_user_symbol_direction_threshold",
            "user_id",
            "symbol",
            "direction",
            "threshold_percent",
            unique=True,
        ),
        # Evaluation pass loads by active flag
        Index("ix_stock_alerts_active_symbol", "active", "symbol"),
        CheckConstraint(
            "threshold_percent >= 0.1 AND threshold_percent <= 100",
            name="ck_stock_alerts_threshold_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<StockAlertModel(id={self.id}, symbol='{self.symbol}', active={self.active})>"
