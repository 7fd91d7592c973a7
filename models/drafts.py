"""
Form payloads submitted to the ledger: new-asset/settings drafts and transaction drafts.
"""

from typing import Optional
from datetime import date
from sqlmodel import SQLModel, Field

from models.transaction import TransactionType


class AssetDraft(SQLModel):
    """Editable asset fields, as entered for a new asset or a settings update."""
    name: str
    code: Optional[str] = Field(default=None)
    investment_direction: str = Field(default="")
    target_amount: Optional[float] = Field(default=None)
    notes: Optional[str] = Field(default=None)


class TransactionDraft(SQLModel):
    """A buy/sell entry before it is assigned an id and bound to an asset."""
    transaction_type: TransactionType = Field(default=TransactionType.BUY)
    amount: float = Field(default=0.0)
    transaction_date: date = Field(default_factory=date.today)
    notes: Optional[str] = Field(default=None)
