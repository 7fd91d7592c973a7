"""
Portfolio analytics: aggregate statistics and chart-ready projections.
All functions are read-only over the asset/transaction lists and are
recomputed on every call.
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import pandas as pd

from config import get_settings
from models import Asset, Transaction

logger = logging.getLogger(__name__)

TONE_UP = "up"      # gain / overweight, rendered in the hot colour
TONE_DOWN = "down"  # loss / underweight, rendered in the cool colour


@dataclass
class PortfolioStats:
    """Totals over active assets."""
    total_value: float
    total_cost: float
    total_gain: float
    gain_percentage: float
    target_total: float
    completion_rate: Optional[float] = None  # total_value / target_total in %, None without targets


class DirectionAllocation(NamedTuple):
    label: str
    total_value: float


class AllocationShare(NamedTuple):
    label: str
    total_value: float
    share_pct: float


@dataclass
class SectorPerformance:
    label: str
    cost: float
    value: float
    gain: float
    roi: float  # percent, 2 decimals


@dataclass
class DeviationRow:
    asset_id: str
    label: str
    actual: float
    target: float
    diff: float  # actual - target


@dataclass
class ProfitLeaderRow:
    asset_id: str
    label: str
    gain: float


@dataclass
class HoldingRow:
    """One line of the editable holdings table."""
    asset_id: str
    name: str
    code: Optional[str]
    investment_direction: str
    cost_basis: float
    current_value: float
    target_amount: float
    deviation: float
    gain: float
    gain_pct: float


def _target(asset: Asset) -> float:
    return asset.target_amount or 0.0


def _direction_frame(assets: List[Asset], other_label: str) -> pd.DataFrame:
    """One row per asset with its normalized direction label, cost and value."""
    return pd.DataFrame(
        [
            {
                "direction": asset.investment_direction or other_label,
                "cost": asset.cost_basis,
                "value": asset.current_value,
            }
            for asset in assets
        ],
        columns=["direction", "cost", "value"],
    )


def _grouped_by_direction(assets: List[Asset], other_label: Optional[str]) -> pd.DataFrame:
    """Cost and value summed per direction, groups in first-seen order."""
    label = other_label if other_label is not None else get_settings().other_direction_label
    df = _direction_frame(assets, label)
    return df.groupby("direction", sort=False)[["cost", "value"]].sum()


class AnalyticsService:
    """
    Derivations over the ledger.
    Every method expects the already-filtered active assets unless noted.
    """

    @staticmethod
    def active_assets(assets: List[Asset]) -> List[Asset]:
        """Assets that are not soft-deleted, in stored order."""
        return [asset for asset in assets if asset.is_active]

    @staticmethod
    def compute_stats(active_assets: List[Asset]) -> PortfolioStats:
        """
        Calculate portfolio totals.

        Gain percentage is 0 unless total cost is positive.

        Args:
            active_assets: Assets with ACTIVE status

        Returns:
            PortfolioStats for the given assets
        """
        total_value = 0.0
        total_cost = 0.0
        target_total = 0.0

        for asset in active_assets:
            total_value += asset.current_value
            total_cost += asset.cost_basis
            target_total += _target(asset)

        total_gain = total_value - total_cost
        gain_percentage = (total_gain / total_cost * 100) if total_cost > 0 else 0.0
        completion_rate = (total_value / target_total * 100) if target_total > 0 else None

        return PortfolioStats(
            total_value=total_value,
            total_cost=total_cost,
            total_gain=total_gain,
            gain_percentage=gain_percentage,
            target_total=target_total,
            completion_rate=completion_rate,
        )

    @staticmethod
    def group_by_direction(
        active_assets: List[Asset],
        other_label: Optional[str] = None
    ) -> List[DirectionAllocation]:
        """
        Sum current value per investment direction.

        Assets without a direction fall under the "other" label. Groups are
        sorted by value, largest first; equal values keep first-seen order.
        """
        grouped = _grouped_by_direction(active_assets, other_label)
        grouped = grouped.sort_values("value", ascending=False, kind="mergesort")
        return [
            DirectionAllocation(str(label), float(row["value"]))
            for label, row in grouped.iterrows()
        ]

    @staticmethod
    def allocation_shares(
        active_assets: List[Asset],
        other_label: Optional[str] = None
    ) -> List[AllocationShare]:
        """Direction allocation with each group's share of total value in percent."""
        allocation = AnalyticsService.group_by_direction(active_assets, other_label)
        total = sum(item.total_value for item in allocation)
        return [
            AllocationShare(
                item.label,
                item.total_value,
                (item.total_value / total * 100) if total else 0.0,
            )
            for item in allocation
        ]

    @staticmethod
    def sector_performance(
        active_assets: List[Asset],
        other_label: Optional[str] = None
    ) -> List[SectorPerformance]:
        """
        Aggregate return per investment direction.

        ROI is (value - cost) / cost * 100 rounded to 2 decimals, 0 when the
        group's cost is not positive. Rows are sorted by ROI, best first.
        """
        grouped = _grouped_by_direction(active_assets, other_label)

        rows = []
        for label, row in grouped.iterrows():
            cost = float(row["cost"])
            value = float(row["value"])
            gain = value - cost
            roi = round(gain / cost * 100, 2) if cost > 0 else 0.0
            rows.append(SectorPerformance(label=str(label), cost=cost, value=value, gain=gain, roi=roi))

        rows.sort(key=lambda r: r.roi, reverse=True)
        return rows

    @staticmethod
    def deviation_report(active_assets: List[Asset]) -> List[DeviationRow]:
        """Current value against target per asset, most overweight first."""
        rows = [
            DeviationRow(
                asset_id=asset.id,
                label=asset.name,
                actual=asset.current_value,
                target=_target(asset),
                diff=asset.current_value - _target(asset),
            )
            for asset in active_assets
        ]
        rows.sort(key=lambda r: r.diff, reverse=True)
        return rows

    @staticmethod
    def profit_leaders(active_assets: List[Asset]) -> List[ProfitLeaderRow]:
        """Unrealised gain per asset, largest first."""
        rows = [
            ProfitLeaderRow(asset_id=asset.id, label=asset.name, gain=asset.gain)
            for asset in active_assets
        ]
        rows.sort(key=lambda r: r.gain, reverse=True)
        return rows

    @staticmethod
    def holdings_view(assets: List[Asset]) -> List[HoldingRow]:
        """
        Rows for the holdings table. Takes the full asset list and drops
        deleted assets itself.
        """
        rows = []
        for asset in AnalyticsService.active_assets(assets):
            gain = asset.gain
            rows.append(HoldingRow(
                asset_id=asset.id,
                name=asset.name,
                code=asset.code,
                investment_direction=asset.investment_direction,
                cost_basis=asset.cost_basis,
                current_value=asset.current_value,
                target_amount=_target(asset),
                deviation=asset.current_value - _target(asset),
                gain=gain,
                gain_pct=(gain / asset.cost_basis * 100) if asset.cost_basis != 0 else 0.0,
            ))
        return rows

    @staticmethod
    def transaction_history(
        transactions: List[Transaction],
        asset_id: Optional[str] = None
    ) -> List[Transaction]:
        """
        The transaction log, newest first, optionally for one asset.
        Entries of soft-deleted assets are included.
        """
        if asset_id is None:
            return list(transactions)
        return [tx for tx in transactions if tx.asset_id == asset_id]

    @staticmethod
    def tone(value: float, strict: bool = False) -> str:
        """
        Display sign of a gain, ROI or deviation.

        Zero counts as "up" unless strict, which deviation uses.
        """
        positive = value > 0 if strict else value >= 0
        return TONE_UP if positive else TONE_DOWN
