"""
Data models for WealthFolio.
Ledger entities are plain SQLModel models; StorageEntry is the only table.
"""

from models.asset import Asset, AssetStatus
from models.transaction import Transaction, TransactionType
from models.drafts import AssetDraft, TransactionDraft
from models.storage_entry import StorageEntry

__all__ = [
    'Asset',
    'AssetStatus',
    'Transaction',
    'TransactionType',
    'AssetDraft',
    'TransactionDraft',
    'StorageEntry',
]
