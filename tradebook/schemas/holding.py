"""
tradebook/schemas/holding.py

Read-only view of a current position, derived from trades.
"""

from decimal import Decimal
from pydantic import BaseModel


class HoldingRead(BaseModel):
    ticker: str
    asset_type: str
    currency: str
    quantity: Decimal
    average_price: Decimal
