"""
Asset Repository - persists the asset collection as one JSON blob.
Optimized with optional session parameter for transaction reuse.
"""

import logging
from typing import Optional, List
from pydantic import TypeAdapter
from sqlmodel import Session

from config import get_settings
from models import Asset
from repositories.seed_data import default_assets
from repositories.storage_repository import StorageRepository

logger = logging.getLogger(__name__)

_assets_adapter = TypeAdapter(List[Asset])


class AssetRepository:
    """Repository for the asset collection."""

    @staticmethod
    def get_all(session: Optional[Session] = None) -> List[Asset]:
        """
        Retrieve all assets, including soft-deleted ones.
        Writes and returns the seed set when nothing has been stored yet.

        Args:
            session: Optional existing session for transaction reuse

        Returns:
            List of Asset objects in stored order
        """
        settings = get_settings()
        raw = StorageRepository.get(settings.assets_key, session=session)
        if not raw:
            if not settings.seed_default_assets:
                return []
            assets = default_assets()
            logger.info(f"No assets under {settings.assets_key}, seeding {len(assets)} example holdings")
            AssetRepository.save_all(assets, session=session)
            return assets
        return _assets_adapter.validate_json(raw)

    @staticmethod
    def save_all(assets: List[Asset], session: Optional[Session] = None) -> None:
        """
        Replace the stored asset collection.

        Args:
            assets: Full asset list to persist
            session: Optional existing session for transaction reuse
        """
        StorageRepository.set(get_settings().assets_key, AssetRepository.serialize(assets), session=session)

    @staticmethod
    def serialize(assets: List[Asset]) -> str:
        """JSON array form of the collection, as stored."""
        return _assets_adapter.dump_json(assets).decode("utf-8")
