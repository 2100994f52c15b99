# banana_bank/models/__init__.py

"""
Centralizes model imports so both tables are registered on Base.metadata
whenever any model is imported.
"""

from banana_bank.database import Base

from .user import User, DEFAULT_BALANCE
from .account import Account
