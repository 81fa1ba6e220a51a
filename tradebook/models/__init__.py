# tradebook/models/__init__.py

"""
Centralizes model imports so every table is registered on Base.metadata
before create_tables() runs.
"""

from tradebook.database import Base

# Models from user.py
from .user import User

# Models from account.py
from .account import Account

# Models (and enums) from trade.py
from .trade import Trade, TradeType, AssetType

# Models from investment_profile.py
from .investment_profile import InvestmentProfile
