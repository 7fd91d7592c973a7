"""
Transaction Repository - persists the transaction log as one JSON blob.
Optimized with optional session parameter for transaction reuse.
"""

from typing import Optional, List
from pydantic import TypeAdapter
from sqlmodel import Session

from config import get_settings
from models import Transaction
from repositories.storage_repository import StorageRepository

_transactions_adapter = TypeAdapter(List[Transaction])


class TransactionRepository:
    """Repository for the transaction log."""

    @staticmethod
    def get_all(session: Optional[Session] = None) -> List[Transaction]:
        """
        Retrieve the transaction log, newest first.

        Args:
            session: Optional existing session for transaction reuse

        Returns:
            List of Transaction objects, empty if none were stored
        """
        raw = StorageRepository.get(get_settings().transactions_key, session=session)
        if not raw:
            return []
        return _transactions_adapter.validate_json(raw)

    @staticmethod
    def save_all(transactions: List[Transaction], session: Optional[Session] = None) -> None:
        """
        Replace the stored transaction log.

        Args:
            transactions: Full transaction list, newest first
            session: Optional existing session for transaction reuse
        """
        StorageRepository.set(
            get_settings().transactions_key,
            TransactionRepository.serialize(transactions),
            session=session
        )

    @staticmethod
    def serialize(transactions: List[Transaction]) -> str:
        """JSON array form of the log, as stored."""
        return _transactions_adapter.dump_json(transactions).decode("utf-8")
