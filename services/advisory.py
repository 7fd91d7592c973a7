"""
Advisory service for LLM-generated portfolio commentary and fund categorisation.
Every public method resolves to a string; configuration problems and API
failures are logged and turned into fallback text, never raised.
"""

import logging
from typing import List, Optional

from config import get_settings
from llm_engine import LLMClient
from models import Asset, Transaction, TransactionType
from prompts import get_analysis_template, get_category_template

logger = logging.getLogger(__name__)


FALLBACK_MESSAGES = {
    "zh": {
        "not_configured": "未检测到 API Key，请配置环境变量。",
        "unavailable": "抱歉，暂时无法分析您的投资组合。请稍后再试。",
    },
    "en": {
        "not_configured": "No API key detected. Please configure the environment variables.",
        "unavailable": "Sorry, the portfolio analysis is unavailable right now. Please try again later.",
    },
}

_HOLDING_LINE = {
    "zh": "- {name} [{direction}]: 当前市值 {value} (投入本金: {cost}, 目标持仓: {target}). 收益率: {gain_pct}%",
    "en": "- {name} [{direction}]: market value {value} (invested: {cost}, target: {target}). Return: {gain_pct}%",
}

_TRANSACTION_LINE = {
    "zh": "- {date} {name} {action} {amount}",
    "en": "- {date} {name} {action} {amount}",
}

_ACTION_LABELS = {
    "zh": {TransactionType.BUY: "买入/定投", TransactionType.SELL: "卖出/赎回"},
    "en": {TransactionType.BUY: "buy", TransactionType.SELL: "sell"},
}

_NO_TRANSACTIONS = {"zh": "无", "en": "None"}


class AdvisoryService:
    """
    Gateway to the text-generation backend.
    The LLM client is created lazily, on the first request that needs it.
    """

    def __init__(self, client: Optional[LLMClient] = None, language: Optional[str] = None):
        """
        Args:
            client: Pre-built LLM client; built from settings when omitted
            language: Output language ("zh" or "en"), defaults to settings
        """
        self._client = client
        self.language = language or get_settings().advisory_language

    def _fallback(self, kind: str) -> str:
        return FALLBACK_MESSAGES.get(self.language, FALLBACK_MESSAGES["en"])[kind]

    def is_configured(self) -> bool:
        """Check if a backend is available."""
        return self._client is not None or get_settings().is_advisory_configured

    def _get_client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(language=self.language)
        return self._client

    def build_analysis_prompt(self, assets: List[Asset], recent_transactions: List[Transaction]) -> str:
        """Render active holdings and recent transactions into the analysis request."""
        active = [asset for asset in assets if asset.is_active]
        language = self.language if self.language in _HOLDING_LINE else "en"

        holding_lines = []
        for asset in active:
            gain = asset.current_value - asset.cost_basis
            gain_pct = f"{gain / asset.cost_basis * 100:.2f}" if asset.cost_basis != 0 else "0"
            holding_lines.append(_HOLDING_LINE[language].format(
                name=asset.name,
                direction=asset.investment_direction,
                value=asset.current_value,
                cost=asset.cost_basis,
                target=asset.target_amount or 0,
                gain_pct=gain_pct,
            ))

        transaction_lines = [
            _TRANSACTION_LINE[language].format(
                date=tx.transaction_date.isoformat(),
                name=tx.asset_name,
                action=_ACTION_LABELS[language][tx.transaction_type],
                amount=tx.amount,
            )
            for tx in recent_transactions
        ]

        # dict.fromkeys keeps first-seen order
        directions = list(dict.fromkeys(asset.investment_direction for asset in active))

        return get_analysis_template(language).format(
            holdings="\n".join(holding_lines),
            transactions="\n".join(transaction_lines) or _NO_TRANSACTIONS[language],
            directions=", ".join(directions),
        )

    def build_category_prompt(self, fund_name: str) -> str:
        language = self.language if self.language in _HOLDING_LINE else "en"
        return get_category_template(language).format(fund_name=fund_name)

    def analyze_portfolio(self, assets: List[Asset], recent_transactions: List[Transaction]) -> str:
        """
        Ask the advisor for commentary on the portfolio.

        Args:
            assets: Asset list; deleted assets are filtered out here
            recent_transactions: Most recent transactions, newest first

        Returns:
            Markdown commentary, or a fallback message when unconfigured or failing
        """
        if not self.is_configured():
            logger.warning("Portfolio analysis requested but no LLM backend is configured")
            return self._fallback("not_configured")

        try:
            prompt = self.build_analysis_prompt(assets, recent_transactions)
            return self._get_client().invoke(prompt)
        except Exception as e:
            logger.error(f"Portfolio analysis failed: {e}")
            return self._fallback("unavailable")

    async def aanalyze_portfolio(self, assets: List[Asset], recent_transactions: List[Transaction]) -> str:
        """Async counterpart of analyze_portfolio(), same fallback behaviour."""
        if not self.is_configured():
            logger.warning("Portfolio analysis requested but no LLM backend is configured")
            return self._fallback("not_configured")

        try:
            prompt = self.build_analysis_prompt(assets, recent_transactions)
            return await self._get_client().ainvoke(prompt)
        except Exception as e:
            logger.error(f"Portfolio analysis failed: {e}")
            return self._fallback("unavailable")

    def suggest_category(self, fund_name: str) -> str:
        """
        Suggest a short investment direction for a fund name.

        Returns:
            Category label, or "" when unconfigured or failing
        """
        if not self.is_configured():
            return ""

        try:
            text = self._get_client().invoke(self.build_category_prompt(fund_name))
            return (text or "").strip()
        except Exception as e:
            logger.error(f"Category suggestion for {fund_name!r} failed: {e}")
            return ""

    async def asuggest_category(self, fund_name: str) -> str:
        """Async counterpart of suggest_category()."""
        if not self.is_configured():
            return ""

        try:
            text = await self._get_client().ainvoke(self.build_category_prompt(fund_name))
            return (text or "").strip()
        except Exception as e:
            logger.error(f"Category suggestion for {fund_name!r} failed: {e}")
            return ""
