"""Tests for AnalyticsService derivations."""

from datetime import date

import pytest

from models import AssetStatus, Transaction, TransactionType
from services.analytics import TONE_DOWN, TONE_UP, AnalyticsService
from tests.conftest import make_asset


@pytest.fixture
def portfolio():
    return [
        make_asset("g1", investment_direction="Gold", cost_basis=80, current_value=100, target_amount=150),
        make_asset("b1", investment_direction="Bonds", cost_basis=60, current_value=50, target_amount=20),
        make_asset("g2", investment_direction="Gold", cost_basis=220, current_value=200, target_amount=100),
        make_asset("o1", investment_direction="", cost_basis=0, current_value=30, target_amount=None),
    ]


class TestComputeStats:
    """Test AnalyticsService.compute_stats."""

    def test_empty(self):
        """No assets gives all zeros."""
        stats = AnalyticsService.compute_stats([])
        assert stats.total_value == 0
        assert stats.total_cost == 0
        assert stats.total_gain == 0
        assert stats.target_total == 0
        assert stats.gain_percentage == 0
        assert stats.completion_rate is None

    def test_totals(self, portfolio):
        """Totals, gain and completion over the given assets."""
        stats = AnalyticsService.compute_stats(portfolio)
        assert stats.total_value == 380
        assert stats.total_cost == 360
        assert stats.total_gain == 20
        assert stats.gain_percentage == pytest.approx(20 / 360 * 100)
        assert stats.target_total == 270
        assert stats.completion_rate == pytest.approx(380 / 270 * 100)

    def test_zero_cost_guard(self):
        """Zero total cost gives 0% instead of dividing."""
        stats = AnalyticsService.compute_stats([make_asset("a", cost_basis=0, current_value=10)])
        assert stats.gain_percentage == 0

    def test_active_filter(self, portfolio):
        """Deleted assets are dropped by active_assets."""
        portfolio[0] = portfolio[0].model_copy(update={"status": AssetStatus.DELETED})
        active = AnalyticsService.active_assets(portfolio)
        assert [a.id for a in active] == ["b1", "g2", "o1"]


class TestGroupByDirection:
    """Test AnalyticsService.group_by_direction and allocation_shares."""

    def test_gold_and_bonds(self):
        """Values are summed per direction, largest group first."""
        assets = [
            make_asset("a", investment_direction="Gold", current_value=100),
            make_asset("b", investment_direction="Gold", current_value=200),
            make_asset("c", investment_direction="Bonds", current_value=50),
        ]
        assert AnalyticsService.group_by_direction(assets) == [("Gold", 300), ("Bonds", 50)]

    def test_missing_direction_uses_other_label(self, portfolio, settings):
        """Empty directions are grouped under the configured label."""
        labels = [row.label for row in AnalyticsService.group_by_direction(portfolio)]
        assert settings.other_direction_label in labels
        assert "" not in labels

    def test_custom_other_label(self, portfolio):
        labels = [row.label for row in AnalyticsService.group_by_direction(portfolio, other_label="Other")]
        assert labels == ["Gold", "Bonds", "Other"]

    def test_totals_match_stats(self, portfolio):
        """No double counting or omission across groups."""
        allocation = AnalyticsService.group_by_direction(portfolio)
        stats = AnalyticsService.compute_stats(portfolio)
        assert sum(row.total_value for row in allocation) == pytest.approx(stats.total_value)

    def test_ties_keep_encounter_order(self):
        assets = [
            make_asset("a", investment_direction="X", current_value=10),
            make_asset("b", investment_direction="Y", current_value=10),
        ]
        assert [row.label for row in AnalyticsService.group_by_direction(assets)] == ["X", "Y"]

    def test_empty(self):
        assert AnalyticsService.group_by_direction([]) == []

    def test_allocation_shares(self, portfolio):
        """Shares add up to 100%."""
        shares = AnalyticsService.allocation_shares(portfolio, other_label="Other")
        assert shares[0].label == "Gold"
        assert shares[0].share_pct == pytest.approx(300 / 380 * 100)
        assert sum(s.share_pct for s in shares) == pytest.approx(100)

    def test_allocation_shares_zero_total(self):
        shares = AnalyticsService.allocation_shares([make_asset("a", current_value=0)])
        assert shares[0].share_pct == 0


class TestSectorPerformance:
    """Test AnalyticsService.sector_performance."""

    def test_roi_per_direction(self, portfolio):
        """ROI per group, rounded, best first."""
        rows = AnalyticsService.sector_performance(portfolio, other_label="Other")

        assert [row.label for row in rows] == ["Gold", "Other", "Bonds"]
        gold, other, bonds = rows
        assert other.roi == 0  # zero cost
        assert gold.cost == 300
        assert gold.value == 300
        assert gold.roi == 0
        assert bonds.gain == -10
        assert bonds.roi == round(-10 / 60 * 100, 2)

    def test_gains_sum_to_total_gain(self, portfolio):
        rows = AnalyticsService.sector_performance(portfolio)
        stats = AnalyticsService.compute_stats(portfolio)
        assert sum(row.gain for row in rows) == pytest.approx(stats.total_gain)

    def test_rounding(self):
        assets = [make_asset("a", cost_basis=3, current_value=4)]
        assert AnalyticsService.sector_performance(assets)[0].roi == 33.33


class TestPerAssetRankings:
    """Test deviation_report, profit_leaders and holdings_view."""

    def test_deviation_sorted(self, portfolio):
        """Most overweight first, missing target counts as 0."""
        rows = AnalyticsService.deviation_report(portfolio)
        assert [(row.asset_id, row.diff) for row in rows] == [
            ("g2", 100), ("b1", 30), ("o1", 30), ("g1", -50),
        ]
        assert rows[2].target == 0
        assert rows[0].label == "Fund g2"

    def test_profit_leaders_sorted(self, portfolio):
        rows = AnalyticsService.profit_leaders(portfolio)
        assert [(row.asset_id, row.gain) for row in rows] == [
            ("o1", 30), ("g1", 20), ("b1", -10), ("g2", -20),
        ]

    def test_holdings_view(self, portfolio):
        """Active assets only, in stored order, with per-asset figures."""
        portfolio[1] = portfolio[1].model_copy(update={"status": AssetStatus.DELETED})
        rows = AnalyticsService.holdings_view(portfolio)

        assert [row.asset_id for row in rows] == ["g1", "g2", "o1"]
        g1 = rows[0]
        assert g1.gain == 20
        assert g1.gain_pct == pytest.approx(25)
        assert g1.deviation == -50
        assert rows[2].gain_pct == 0


class TestHistoryAndTone:
    """Test transaction_history and tone."""

    def test_history_filter(self):
        txs = [
            Transaction(id="t2", asset_id="a2", asset_name="B", transaction_type=TransactionType.SELL,
                        amount=5, transaction_date=date(2025, 2, 1)),
            Transaction(id="t1", asset_id="a1", asset_name="A", transaction_type=TransactionType.BUY,
                        amount=10, transaction_date=date(2025, 1, 1)),
        ]
        assert [tx.id for tx in AnalyticsService.transaction_history(txs)] == ["t2", "t1"]
        assert [tx.id for tx in AnalyticsService.transaction_history(txs, "a1")] == ["t1"]

    def test_tone(self):
        """Zero is up for gains, down for strict deviation."""
        assert AnalyticsService.tone(5) == TONE_UP
        assert AnalyticsService.tone(0) == TONE_UP
        assert AnalyticsService.tone(-0.01) == TONE_DOWN
        assert AnalyticsService.tone(0, strict=True) == TONE_DOWN
        assert AnalyticsService.tone(1, strict=True) == TONE_UP
