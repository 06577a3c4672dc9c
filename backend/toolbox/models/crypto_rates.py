from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Column, DateTime, String, Text

from toolbox.db.base import Base, new_id, utcnow
from toolbox.db.types import DecimalText


class CryptoRate(Base):
    """
    Cached exchange rate between two currency codes.

    (from_currency, to_currency) is a logical cache key only; there is no
    unique constraint, so readers pick the freshest row by last_updated.
    """

    __tablename__ = "crypto_rates"

    id = Column(String(36), primary_key=True, default=new_id)
    from_currency = Column(Text, nullable=False, index=True)
    to_currency = Column(Text, nullable=False, index=True)
    rate = Column(DecimalText, nullable=False)  # exact decimal text, never float
    market_data = Column(JSON, nullable=True, default=dict, info={"schema_type": dict[str, Any]})  # marketCap/change24h/volume24h
    last_updated = Column(DateTime(timezone=True), default=utcnow)
