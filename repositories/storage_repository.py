"""
Storage Repository - key-value access layer over the StorageEntry table.
Optimized with optional session parameter for transaction reuse.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Dict, Optional, List
from sqlmodel import Session, select

from db_engine import get_engine
from models import StorageEntry

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 7


def generate_id() -> str:
    """Generate a short opaque identifier, e.g. "k3x9q0a"."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class StorageRepository:
    """Repository for raw key-value reads and writes."""

    @staticmethod
    def get(key: str, session: Optional[Session] = None) -> Optional[str]:
        """
        Read the serialized blob stored under a key.

        Args:
            key: Storage key
            session: Optional existing session for transaction reuse

        Returns:
            Stored string or None if the key has never been written
        """
        def _get(sess: Session) -> Optional[str]:
            entry = sess.get(StorageEntry, key)
            return entry.value if entry else None

        if session is not None:
            return _get(session)
        else:
            with Session(get_engine()) as session:
                return _get(session)

    @staticmethod
    def set(key: str, value: str, session: Optional[Session] = None) -> None:
        """
        Write a serialized blob, replacing whatever the key held before.

        Args:
            key: Storage key
            value: Serialized content
            session: Optional existing session for transaction reuse
        """
        StorageRepository.set_many({key: value}, session=session)

    @staticmethod
    def set_many(items: Dict[str, str], session: Optional[Session] = None) -> None:
        """
        Write several blobs in one commit; either all keys change or none do.

        Args:
            items: Mapping of storage key to serialized content
            session: Optional existing session for transaction reuse
        """
        def _set_many(sess: Session) -> None:
            try:
                for key, value in items.items():
                    entry = sess.get(StorageEntry, key)
                    if entry:
                        entry.value = value
                        entry.updated_at = datetime.now(timezone.utc)
                    else:
                        entry = StorageEntry(key=key, value=value)
                    sess.add(entry)
                sess.commit()
            except Exception as e:
                sess.rollback()
                raise e
            logger.debug(f"Stored {len(items)} entries: {', '.join(items)}")

        if session is not None:
            _set_many(session)
        else:
            with Session(get_engine()) as session:
                _set_many(session)

    @staticmethod
    def delete(key: str, session: Optional[Session] = None) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed, False otherwise
        """
        def _delete(sess: Session) -> bool:
            entry = sess.get(StorageEntry, key)
            if entry:
                sess.delete(entry)
                sess.commit()
                return True
            return False

        if session is not None:
            return _delete(session)
        else:
            with Session(get_engine()) as session:
                return _delete(session)

    @staticmethod
    def keys(session: Optional[Session] = None) -> List[str]:
        """List every stored key, including ones abandoned by a version bump."""
        def _keys(sess: Session) -> List[str]:
            results = sess.exec(select(StorageEntry.key).order_by(StorageEntry.key))
            return list(results.all())

        if session is not None:
            return _keys(session)
        else:
            with Session(get_engine()) as session:
                return _keys(session)
