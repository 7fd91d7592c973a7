"""
Portfolio session: the state holder a front end drives.
Loads the ledger from storage, runs ledger operations, persists after each
one, and keeps the advisory text and loading flag for display.
"""

import logging
from datetime import date
from typing import List, Optional

from config import get_settings
from db_engine import get_session, init_db
from models import Asset, AssetDraft, Transaction, TransactionDraft, TransactionType
from repositories import AssetRepository, StorageRepository, TransactionRepository, generate_id
from services.advisory import AdvisoryService
from services.analytics import (
    AllocationShare,
    AnalyticsService,
    DeviationRow,
    DirectionAllocation,
    HoldingRow,
    PortfolioStats,
    ProfitLeaderRow,
    SectorPerformance,
)
from services.ledger import IdFactory, LedgerService, LedgerState, LedgerSubmission

logger = logging.getLogger(__name__)

# Names this short are not worth a category suggestion
_MIN_SUGGESTION_NAME_LENGTH = 3


class PortfolioSession:
    """
    Holds the current LedgerState for one user session.

    Mutations are synchronous and run one at a time. Advisory requests are
    coroutines and may be awaited while further mutations happen; they only
    touch `analysis` and `is_analyzing`, never the ledger.
    """

    def __init__(
        self,
        advisory: Optional[AdvisoryService] = None,
        id_factory: IdFactory = generate_id,
        state: Optional[LedgerState] = None
    ):
        """
        Args:
            advisory: Advisory gateway; built from settings when omitted
            id_factory: Identifier generator for new assets and transactions
            state: Initial state; loaded from storage when omitted
        """
        self.advisory = advisory or AdvisoryService()
        self.id_factory = id_factory
        init_db()
        if state is None:
            with get_session() as session:
                state = LedgerState(
                    assets=AssetRepository.get_all(session=session),
                    transactions=TransactionRepository.get_all(session=session),
                )
            logger.info(f"Session loaded {len(state.assets)} assets, {len(state.transactions)} transactions")
        self.state = state
        self.analysis: Optional[str] = None
        self.is_analyzing: bool = False

    # ==================== Persistence ====================

    def _commit(self, new_state: LedgerState) -> LedgerState:
        """Persist a new state, then adopt it. Both collections are written in one commit."""
        if new_state is self.state:
            return self.state
        settings = get_settings()
        StorageRepository.set_many({
            settings.assets_key: AssetRepository.serialize(new_state.assets),
            settings.transactions_key: TransactionRepository.serialize(new_state.transactions),
        })
        self.state = new_state
        return self.state

    # ==================== Ledger operations ====================

    def create_asset(self, draft: AssetDraft, initial_transaction: TransactionDraft) -> LedgerState:
        return self._commit(LedgerService.create_asset(
            self.state, draft, initial_transaction, id_factory=self.id_factory
        ))

    def apply_transaction(
        self,
        asset_id: str,
        transaction_type: TransactionType,
        amount: float,
        transaction_date: Optional[date] = None,
        notes: Optional[str] = None
    ) -> LedgerState:
        return self._commit(LedgerService.apply_transaction(
            self.state, asset_id, transaction_type, amount,
            transaction_date=transaction_date, notes=notes, id_factory=self.id_factory
        ))

    def update_asset_settings(
        self,
        asset_id: str,
        name: str,
        code: Optional[str],
        investment_direction: str,
        target_amount: Optional[float]
    ) -> LedgerState:
        return self._commit(LedgerService.update_asset_settings(
            self.state, asset_id, name, code, investment_direction, target_amount
        ))

    def correct_value(self, asset_id: str, new_value: float) -> LedgerState:
        return self._commit(LedgerService.correct_value(self.state, asset_id, new_value))

    def soft_delete_asset(self, asset_id: str) -> LedgerState:
        return self._commit(LedgerService.soft_delete_asset(self.state, asset_id))

    def submit(self, submission: LedgerSubmission) -> LedgerState:
        return self._commit(LedgerService.submit(self.state, submission, id_factory=self.id_factory))

    # ==================== Views ====================

    @property
    def assets(self) -> List[Asset]:
        return self.state.assets

    @property
    def transactions(self) -> List[Transaction]:
        return self.state.transactions

    @property
    def active_assets(self) -> List[Asset]:
        return AnalyticsService.active_assets(self.state.assets)

    def stats(self) -> PortfolioStats:
        return AnalyticsService.compute_stats(self.active_assets)

    def direction_allocation(self) -> List[DirectionAllocation]:
        return AnalyticsService.group_by_direction(self.active_assets)

    def allocation_shares(self) -> List[AllocationShare]:
        return AnalyticsService.allocation_shares(self.active_assets)

    def sector_performance(self) -> List[SectorPerformance]:
        return AnalyticsService.sector_performance(self.active_assets)

    def deviation_report(self) -> List[DeviationRow]:
        return AnalyticsService.deviation_report(self.active_assets)

    def profit_leaders(self) -> List[ProfitLeaderRow]:
        return AnalyticsService.profit_leaders(self.active_assets)

    def holdings(self) -> List[HoldingRow]:
        return AnalyticsService.holdings_view(self.state.assets)

    def history(self, asset_id: Optional[str] = None) -> List[Transaction]:
        return AnalyticsService.transaction_history(self.state.transactions, asset_id)

    # ==================== Advisory ====================

    async def request_analysis(self) -> str:
        """
        Fetch fresh commentary for the current portfolio.

        The snapshot is taken when the request starts. Overlapping requests
        are not cancelled; whichever resolves last sets `analysis`.
        """
        limit = get_settings().advisory_recent_transactions
        assets = list(self.state.assets)
        recent = list(self.state.transactions[:limit])

        self.is_analyzing = True
        self.analysis = None
        try:
            result = await self.advisory.aanalyze_portfolio(assets, recent)
        finally:
            self.is_analyzing = False
        self.analysis = result
        return result

    async def suggest_direction(self, fund_name: str) -> str:
        """Category suggestion for a new fund name; "" for names too short to classify."""
        if len(fund_name) < _MIN_SUGGESTION_NAME_LENGTH:
            return ""
        return await self.advisory.asuggest_category(fund_name)
