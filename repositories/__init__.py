"""
Repositories package for WealthFolio.
Provides the persistence gateway: a versioned key-value store and id generation.
"""

from repositories.storage_repository import StorageRepository, generate_id
from repositories.asset_repository import AssetRepository
from repositories.transaction_repository import TransactionRepository

__all__ = [
    'StorageRepository',
    'AssetRepository',
    'TransactionRepository',
    'generate_id',
]
