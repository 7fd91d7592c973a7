"""
Asset model - represents a tracked fund position.
"""

from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class AssetStatus(str, Enum):
    """Lifecycle of an asset. ACTIVE -> DELETED is one-way."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class Asset(SQLModel):
    """Represents a fund holding with cost basis, market value and a planning target."""
    id: str
    name: str
    code: Optional[str] = Field(default=None)  # e.g., "007467"
    investment_direction: str = Field(default="")  # e.g., "黄金", "债券"; free-text group key
    cost_basis: float = Field(default=0.0)  # Net invested: buys minus sells, may go negative
    current_value: float = Field(default=0.0)  # Market value, floored at 0 by transactions
    target_amount: Optional[float] = Field(default=None)  # Planning target, None behaves as 0
    status: AssetStatus = Field(default=AssetStatus.ACTIVE)
    notes: Optional[str] = Field(default=None)

    @property
    def is_active(self) -> bool:
        return self.status != AssetStatus.DELETED

    @property
    def gain(self) -> float:
        """Unrealised gain: current value minus cost basis."""
        return self.current_value - self.cost_basis
