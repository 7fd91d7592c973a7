"""Tests for PortfolioSession orchestration."""

import asyncio
from unittest.mock import patch

import pytest

from config import reload_settings
from db_engine import reset_engine
from models import AssetDraft, AssetStatus, TransactionDraft, TransactionType
from repositories import AssetRepository, TransactionRepository
from repositories.seed_data import DEFAULT_ASSETS
from services.advisory import AdvisoryService
from services.ledger import LedgerState, LedgerSubmission
from services.session import PortfolioSession
from tests.conftest import FakeLLMClient, GatedAdvisory, make_asset


def _session(id_factory, advisory=None):
    return PortfolioSession(advisory=advisory or AdvisoryService(client=FakeLLMClient()), id_factory=id_factory)


class TestSessionPersistence:
    """Every mutation is written through to storage."""

    def test_loads_seed(self, id_factory):
        session = _session(id_factory)
        assert len(session.assets) == len(DEFAULT_ASSETS)
        assert session.transactions == []
        assert len(session.holdings()) == len(DEFAULT_ASSETS)

    def test_trade_persisted(self, id_factory):
        session = _session(id_factory)
        before = session.state.find_asset("3").current_value

        session.apply_transaction("3", TransactionType.BUY, 100)

        reloaded = _session(id_factory)
        assert reloaded.state.find_asset("3").current_value == before + 100
        assert [tx.asset_id for tx in TransactionRepository.get_all()] == ["3"]

    def test_create_and_delete(self, id_factory):
        session = _session(id_factory)
        session.create_asset(
            AssetDraft(name="富国全球科技", investment_direction="海外科技", target_amount=3000),
            TransactionDraft(amount=600),
        )
        session.soft_delete_asset("id1")

        stored = {asset.id: asset for asset in AssetRepository.get_all()}
        assert stored["id1"].status == AssetStatus.DELETED
        assert "id1" not in [a.id for a in session.active_assets]
        assert [tx.asset_id for tx in session.history("id1")] == ["id1"]

    def test_settings_correction_and_submit(self, id_factory):
        session = _session(id_factory)
        session.update_asset_settings("2", "平安鑫瑞混合C", "011762", "固收+", 15000)
        session.correct_value("2", 1100)
        session.submit(LedgerSubmission(asset_id="2", transaction=TransactionDraft(amount=50)))

        asset = _session(id_factory).state.find_asset("2")
        assert asset.investment_direction == "固收+"
        assert asset.target_amount == 15000
        assert asset.current_value == 1150

    def test_unknown_asset_writes_nothing(self, id_factory, settings):
        session = _session(id_factory)
        session.apply_transaction("missing", TransactionType.BUY, 1)
        assert TransactionRepository.get_all() == []

    def test_given_state_on_fresh_database(self, id_factory):
        """A session built from an explicit state still creates its table before writing."""
        reset_engine()
        reload_settings()
        session = PortfolioSession(
            advisory=AdvisoryService(client=FakeLLMClient()),
            id_factory=id_factory,
            state=LedgerState(assets=[make_asset("a1")]),
        )

        session.apply_transaction("a1", TransactionType.BUY, 10)

        assert session.state.find_asset("a1").current_value == 1010
        assert [tx.asset_id for tx in TransactionRepository.get_all()] == ["a1"]
        assert [a.id for a in AssetRepository.get_all()] == ["a1"]

    def test_failed_write_keeps_state_and_storage(self, id_factory):
        """Assets and transactions are written together; a failure changes neither."""
        session = _session(id_factory)
        before = session.state
        stored_before = AssetRepository.get_all()

        with patch("services.session.TransactionRepository.serialize", side_effect=RuntimeError("encode failed")):
            with pytest.raises(RuntimeError):
                session.apply_transaction("3", TransactionType.BUY, 100)

        assert session.state is before
        assert AssetRepository.get_all() == stored_before
        assert TransactionRepository.get_all() == []

    def test_views_follow_state(self, id_factory):
        """Derived views are recomputed from the current state."""
        session = _session(id_factory)
        total_before = session.stats().total_value

        session.correct_value("1", 0)

        assert session.stats().total_value < total_before
        assert session.profit_leaders()[-1].asset_id == "1"
        labels = [row.label for row in session.direction_allocation()]
        assert labels[0] == "宽基指数"
        assert len(session.sector_performance()) == len(labels)
        assert len(session.allocation_shares()) == len(labels)
        assert len(session.deviation_report()) == len(DEFAULT_ASSETS)


class TestSessionAdvisory:
    """Advisory requests run beside ledger operations."""

    def test_request_analysis(self, id_factory, settings):
        client = FakeLLMClient(reply="建议增配债券")
        session = _session(id_factory, advisory=AdvisoryService(client=client))
        for _ in range(settings.advisory_recent_transactions + 5):
            session.apply_transaction("1", TransactionType.BUY, 1)

        result = asyncio.run(session.request_analysis())

        assert result == "建议增配债券"
        assert session.analysis == "建议增配债券"
        assert session.is_analyzing is False
        assert client.prompts[0].count("买入/定投") == settings.advisory_recent_transactions

    def test_ledger_usable_while_pending(self, id_factory):
        """Mutations proceed while a request is in flight; the snapshot is not fed back."""
        advisory = GatedAdvisory(reply="done")
        session = _session(id_factory, advisory=advisory)

        async def scenario():
            task = asyncio.create_task(session.request_analysis())
            await asyncio.sleep(0)
            assert session.is_analyzing is True
            assert session.analysis is None

            session.apply_transaction("1", TransactionType.SELL, 10)
            assert len(session.transactions) == 1

            advisory.release()
            return await task

        assert asyncio.run(scenario()) == "done"
        assert session.analysis == "done"
        assert session.is_analyzing is False
        snapshot_assets, snapshot_recent = advisory.calls[0]
        assert snapshot_recent == []

    def test_suggest_direction(self, id_factory):
        advisory = GatedAdvisory()
        session = _session(id_factory, advisory=advisory)

        assert asyncio.run(session.suggest_direction("AB")) == ""
        assert asyncio.run(session.suggest_direction("国泰黄金ETF")) == "黄金"
        assert advisory.calls == ["国泰黄金ETF"]
