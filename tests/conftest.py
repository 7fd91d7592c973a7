"""Shared test fixtures: in-memory storage and fake advisory backends."""

import asyncio
import itertools
from typing import List, Optional

import pytest

from config import reload_settings
from db_engine import init_db, reset_engine
from models import Asset, AssetStatus


@pytest.fixture(autouse=True)
def settings(monkeypatch):
    """Point every test at a fresh in-memory database with no LLM credentials."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LLM_MODE", "cloud")
    monkeypatch.setenv("ADVISORY_LANGUAGE", "zh")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.delenv("STORAGE_VERSION", raising=False)
    monkeypatch.delenv("SEED_DEFAULT_ASSETS", raising=False)
    reset_engine()
    current = reload_settings()
    init_db()
    yield current
    reset_engine()


@pytest.fixture
def id_factory():
    """Deterministic ids: id1, id2, ..."""
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


def make_asset(asset_id: str = "a1", **overrides) -> Asset:
    fields = dict(
        id=asset_id,
        name=f"Fund {asset_id}",
        code=None,
        investment_direction="黄金",
        cost_basis=1000.0,
        current_value=1000.0,
        target_amount=2000.0,
        status=AssetStatus.ACTIVE,
    )
    fields.update(overrides)
    return Asset(**fields)


class FakeLLMClient:
    """Stands in for LLMClient; records prompts and replies with fixed text."""

    def __init__(self, reply: str = "分析结果", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def invoke(self, message: str, system_message: Optional[str] = None) -> str:
        self.prompts.append(message)
        if self.error:
            raise self.error
        return self.reply

    async def ainvoke(self, message: str, system_message: Optional[str] = None) -> str:
        return self.invoke(message, system_message)


class GatedAdvisory:
    """Advisory double whose analysis only resolves once `release()` is called."""

    def __init__(self, reply: str = "ok"):
        self.reply = reply
        self.gate = asyncio.Event()
        self.calls = []

    def release(self):
        self.gate.set()

    async def aanalyze_portfolio(self, assets, recent_transactions):
        self.calls.append((assets, recent_transactions))
        await self.gate.wait()
        return self.reply

    async def asuggest_category(self, fund_name):
        self.calls.append(fund_name)
        return "黄金"
