"""
Transaction model - represents a buy/sell ledger entry for an asset.
"""

from enum import Enum
from typing import Optional
from datetime import date
from sqlmodel import SQLModel, Field


class TransactionType(str, Enum):
    BUY = "BUY"    # 买入 / 定投
    SELL = "SELL"  # 卖出 / 赎回


class Transaction(SQLModel):
    """
    Represents a buy/sell transaction for an asset.
    Entries are written once and never edited; asset_name is a snapshot
    of the asset name at transaction time and is not kept in sync with renames.
    """
    id: str
    asset_id: str
    asset_name: str = Field(default="")
    transaction_type: TransactionType
    amount: float  # Transaction value, non-negative magnitude
    transaction_date: date
    notes: Optional[str] = Field(default=None)
