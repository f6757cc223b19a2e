"""Shared fixtures for the InvestAI test suite."""

from __future__ import annotations

import json
from typing import Any

import pytest

from investai.cache import RegionCache
from investai.llm import ReasoningClient
from investai.researcher import StockResearcher
from investai.search import SearchProvider
from tests.helpers.fake_llm import ScriptedChatModel


def fenced(payload: dict[str, Any], before: str = "Here you go:", after: str = "Enjoy.") -> str:
    """Wrap ``payload`` the way a chatty model does: prose plus a json fence."""
    return f"{before}\n```json\n{json.dumps(payload, ensure_ascii=False)}\n```\n{after}"


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def analysis_payload() -> dict[str, Any]:
    """A complete "exists: true" analysis payload for PETR4."""
    return {
        "exists": True,
        "symbol": "PETR4",
        "companyName": "Petróleo Brasileiro S.A. - Petrobras",
        "currentPrice": "R$ 38,45",
        "currency": "BRL",
        "sector": "Petróleo e Gás",
        "description": "Estatal integrada de energia.",
        "keyStats": {
            "marketCap": "R$ 500 bi",
            "peRatio": "4,2",
            "dividendYield": "14,5%",
            "week52High": "R$ 42,10",
            "week52Low": "R$ 31,80",
        },
        "news": [
            {
                "title": "Petrobras anuncia dividendos",
                "source": "Valor",
                "date": "2026-10-17",
                "url": "https://valor.globo.com/x",
            },
            {"title": "Produção recorde", "source": "InfoMoney", "date": "2026-10-16"},
        ],
        "pros": ["P/L: 4.2 (Baixo)", "ROE: 25% (Alto)"],
        "cons": ["Dív. Líq/EBITDA: 1.1x (Moderada)"],
        "valuation": "Barato",
        "financialHealthScore": 78,
        "metrics": [
            {"name": "Crescimento", "value": "+3% a.a.", "score": 55},
            {"name": "Rentabilidade", "value": "ROE 25%", "score": 85},
            {"name": "Dívida", "value": "1.1x", "score": 70},
            {"name": "Valuation", "value": "P/L 4.2", "score": 90},
            {"name": "Momentum", "value": "+8% 3m", "score": 60},
        ],
        "lastUpdated": "2001-01-01T00:00:00Z",
    }


@pytest.fixture
def recommendations_payload() -> dict[str, Any]:
    return {
        "sectors": [
            {
                "sectorName": "Tecnologia / Growth",
                "stocks": [
                    {
                        "symbol": "TOTS3",
                        "name": "Totvs",
                        "price": "R$ 35,10",
                        "reason": "Receita recorrente crescendo 15% a.a.",
                        "trend": "up",
                    },
                    {
                        "symbol": "LWSA3",
                        "name": "Locaweb",
                        "price": "R$ 5,20",
                        "reason": "Margens pressionadas.",
                        "trend": "down",
                    },
                ],
            },
            {
                "sectorName": "Finanças / Bancos",
                "stocks": [
                    {
                        "symbol": "ITUB4",
                        "name": "Itaú Unibanco",
                        "price": "R$ 36,00",
                        "reason": "ROE acima de 20%.",
                        "trend": "neutral",
                    }
                ],
            },
        ]
    }


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scripted_model() -> ScriptedChatModel:
    return ScriptedChatModel()


@pytest.fixture
def make_researcher():
    """Factory for a researcher over a scripted model with zero backoff."""

    def _make(*responses: Any, cache: RegionCache | None = None, max_retries: int = 2):
        model = ScriptedChatModel(responses=list(responses))
        client = ReasoningClient(model, provider=SearchProvider.NONE)
        researcher = StockResearcher(
            client=client,
            cache=cache,
            max_retries=max_retries,
            retry_delay=0.0,
        )
        return researcher, model

    return _make
