"""
Ledger service: owns the asset and transaction collections and applies
create / trade / settings / value-correction / soft-delete operations.

Every operation takes a LedgerState and returns a new LedgerState. Input
lists and the entities in them are never mutated, so a caller can keep the
previous state around. Operations never raise for an unknown asset id; they
log and hand back the state unchanged.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from models import (
    Asset,
    AssetDraft,
    AssetStatus,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from repositories import generate_id

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


@dataclass
class LedgerState:
    """Assets in creation order and transactions newest first."""
    assets: List[Asset] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None


@dataclass
class LedgerSubmission:
    """
    A single form submission.

    With no asset_id a new asset is created from `asset` and `transaction`.
    Otherwise `asset` is applied as a settings update when `update_settings`
    is set, and `transaction`, if present, is booked against the asset.
    """
    asset_id: Optional[str] = None
    asset: Optional[AssetDraft] = None
    transaction: Optional[TransactionDraft] = None
    update_settings: bool = False


def _replace_asset(state: LedgerState, asset_id: str, changes: Dict) -> LedgerState:
    """Return a state where the asset with asset_id carries `changes`."""
    assets = [
        asset.model_copy(update=changes) if asset.id == asset_id else asset
        for asset in state.assets
    ]
    return LedgerState(assets=assets, transactions=list(state.transactions))


class LedgerService:
    """Mutation operations over a LedgerState."""

    @staticmethod
    def create_asset(
        state: LedgerState,
        draft: AssetDraft,
        initial_transaction: TransactionDraft,
        id_factory: IdFactory = generate_id
    ) -> LedgerState:
        """
        Add a new ACTIVE asset funded by its initial transaction.

        Cost basis and current value both start at the initial amount,
        whatever the transaction type. Input is accepted as given; the
        form layer owns validation.

        Args:
            state: Current ledger state
            draft: Name, code, direction, target and notes of the new asset
            initial_transaction: Opening entry, conventionally a BUY
            id_factory: Identifier generator for the asset and its entry

        Returns:
            New LedgerState with the asset appended and its entry at the head
        """
        asset = Asset(
            id=id_factory(),
            name=draft.name,
            code=draft.code,
            investment_direction=draft.investment_direction,
            target_amount=draft.target_amount,
            cost_basis=initial_transaction.amount,
            current_value=initial_transaction.amount,
            status=AssetStatus.ACTIVE,
            notes=draft.notes or "",
        )
        entry = Transaction(
            id=id_factory(),
            asset_id=asset.id,
            asset_name=asset.name,
            transaction_type=initial_transaction.transaction_type,
            amount=initial_transaction.amount,
            transaction_date=initial_transaction.transaction_date,
            notes=initial_transaction.notes,
        )
        logger.info(f"Created asset {asset.id} ({asset.name}) with {entry.transaction_type.value} {entry.amount}")
        return LedgerState(
            assets=[*state.assets, asset],
            transactions=[entry, *state.transactions],
        )

    @staticmethod
    def apply_transaction(
        state: LedgerState,
        asset_id: str,
        transaction_type: Union[TransactionType, str],
        amount: float,
        transaction_date: Optional[date] = None,
        notes: Optional[str] = None,
        id_factory: IdFactory = generate_id
    ) -> LedgerState:
        """
        Book a buy or sell against an existing asset.

        BUY adds the amount to cost basis and current value, SELL subtracts
        it from both. Current value is then floored at zero; cost basis is
        not, so oversized sells can leave it negative.

        Args:
            state: Current ledger state
            asset_id: Target asset; unknown ids leave the state unchanged
            transaction_type: BUY or SELL
            amount: Non-negative transaction value
            transaction_date: Defaults to today
            notes: Optional free text stored on the entry
            id_factory: Identifier generator for the entry

        Returns:
            New LedgerState with updated balances and the entry at the head
        """
        asset = state.find_asset(asset_id)
        if asset is None:
            logger.warning(f"Transaction for unknown asset {asset_id} ignored")
            return state

        transaction_type = TransactionType(transaction_type)
        if transaction_type == TransactionType.BUY:
            cost_basis = asset.cost_basis + amount
            current_value = asset.current_value + amount
        else:
            cost_basis = asset.cost_basis - amount
            current_value = asset.current_value - amount

        if current_value < 0:
            logger.debug(f"Current value of {asset_id} floored at 0 (was {current_value})")
            current_value = 0.0

        entry = Transaction(
            id=id_factory(),
            asset_id=asset.id,
            asset_name=asset.name,
            transaction_type=transaction_type,
            amount=amount,
            transaction_date=transaction_date or date.today(),
            notes=notes,
        )
        new_state = _replace_asset(state, asset_id, {
            "cost_basis": cost_basis,
            "current_value": current_value,
        })
        new_state.transactions.insert(0, entry)
        logger.debug(f"{transaction_type.value} {amount} on {asset_id}: cost={cost_basis}, value={current_value}")
        return new_state

    @staticmethod
    def update_asset_settings(
        state: LedgerState,
        asset_id: str,
        name: str,
        code: Optional[str],
        investment_direction: str,
        target_amount: Optional[float]
    ) -> LedgerState:
        """Overwrite the editable fields. Balances, status and history stay as they are."""
        if state.find_asset(asset_id) is None:
            logger.warning(f"Settings update for unknown asset {asset_id} ignored")
            return state
        return _replace_asset(state, asset_id, {
            "name": name,
            "code": code,
            "investment_direction": investment_direction,
            "target_amount": target_amount,
        })

    @staticmethod
    def correct_value(state: LedgerState, asset_id: str, new_value: float) -> LedgerState:
        """Set the market value directly. Cost basis is untouched and no entry is written."""
        if state.find_asset(asset_id) is None:
            logger.warning(f"Value correction for unknown asset {asset_id} ignored")
            return state
        return _replace_asset(state, asset_id, {"current_value": new_value})

    @staticmethod
    def soft_delete_asset(state: LedgerState, asset_id: str) -> LedgerState:
        """Mark an asset DELETED. Its transactions stay in the log."""
        if state.find_asset(asset_id) is None:
            logger.warning(f"Delete for unknown asset {asset_id} ignored")
            return state
        logger.info(f"Asset {asset_id} soft-deleted")
        return _replace_asset(state, asset_id, {"status": AssetStatus.DELETED})

    @staticmethod
    def submit(
        state: LedgerState,
        submission: LedgerSubmission,
        id_factory: IdFactory = generate_id
    ) -> LedgerState:
        """
        Apply a combined form submission.

        Settings are written before the transaction, so an entry booked in
        the same submission records the new name.
        """
        if submission.asset_id is None:
            draft = submission.asset or AssetDraft(name="")
            opening = submission.transaction or TransactionDraft()
            return LedgerService.create_asset(state, draft, opening, id_factory=id_factory)

        new_state = state
        if submission.update_settings and submission.asset is not None:
            draft = submission.asset
            new_state = LedgerService.update_asset_settings(
                new_state,
                submission.asset_id,
                name=draft.name,
                code=draft.code,
                investment_direction=draft.investment_direction,
                target_amount=draft.target_amount,
            )

        if submission.transaction is not None:
            tx = submission.transaction
            new_state = LedgerService.apply_transaction(
                new_state,
                submission.asset_id,
                tx.transaction_type,
                tx.amount,
                transaction_date=tx.transaction_date,
                notes=tx.notes,
                id_factory=id_factory,
            )
        return new_state
