"""
Services package for WealthFolio.
Provides core business logic separated from presentation and data layers.
"""

from services.ledger import LedgerService, LedgerState, LedgerSubmission
from services.analytics import (
    AnalyticsService,
    PortfolioStats,
    DirectionAllocation,
    AllocationShare,
    SectorPerformance,
    DeviationRow,
    ProfitLeaderRow,
    HoldingRow,
    TONE_UP,
    TONE_DOWN,
)
from services.advisory import AdvisoryService
from services.session import PortfolioSession

__all__ = [
    # Ledger
    'LedgerService',
    'LedgerState',
    'LedgerSubmission',
    # Analytics
    'AnalyticsService',
    'PortfolioStats',
    'DirectionAllocation',
    'AllocationShare',
    'SectorPerformance',
    'DeviationRow',
    'ProfitLeaderRow',
    'HoldingRow',
    'TONE_UP',
    'TONE_DOWN',
    # Advisory
    'AdvisoryService',
    # Session
    'PortfolioSession',
]
