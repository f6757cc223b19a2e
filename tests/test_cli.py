"""Tests for the command-line front end."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from investai import cli
from investai.llm import ReasoningClient
from investai.researcher import StockResearcher
from investai.search import SearchProvider
from tests.conftest import fenced
from tests.helpers.fake_llm import ScriptedChatModel

ROOT = Path(__file__).resolve().parents[1]

# Runs the CLI in a fresh interpreter, where logging has no handlers configured.
SCRIPTED_CLI = """
import sys
from investai import cli
from investai.llm import ReasoningClient
from investai.researcher import StockResearcher
from investai.search import SearchProvider
from tests.helpers.fake_llm import ScriptedChatModel

model = ScriptedChatModel(responses=["SECRET-DIAGNOSTIC {broken"])
researcher = StockResearcher(
    client=ReasoningClient(model, provider=SearchProvider.NONE),
    retry_delay=0.0,
)
cli.build_researcher = lambda settings, debug=False: researcher
sys.exit(cli.main(["analyze", "PETR4"]))
"""


@pytest.fixture(autouse=True)
def restore_package_logger():
    package_logger = logging.getLogger("investai")
    saved = list(package_logger.handlers)
    yield
    package_logger.handlers[:] = saved


@pytest.fixture
def use_responses(monkeypatch):
    """Make the CLI build a researcher over a scripted model."""
    monkeypatch.delenv("INVESTAI_SEARCH_PROVIDER", raising=False)

    def _use(*responses):
        model = ScriptedChatModel(responses=list(responses))
        researcher = StockResearcher(
            client=ReasoningClient(model, provider=SearchProvider.NONE),
            retry_delay=0.0,
        )
        monkeypatch.setattr(cli, "build_researcher", lambda settings, debug=False: researcher)
        return model

    return _use


class TestAnalyzeCommand:

    def test_report(self, use_responses, capsys, analysis_payload) -> None:
        use_responses(fenced(analysis_payload))
        assert cli.main(["analyze", "PETR4"]) == 0
        out = capsys.readouterr().out
        assert "PETR4 - Petróleo Brasileiro" in out
        assert "Valuation: Barato" in out
        assert "+ P/L: 4.2 (Baixo)" in out

    def test_json_output_uses_wire_names(self, use_responses, capsys, analysis_payload) -> None:
        use_responses(fenced(analysis_payload))
        assert cli.main(["analyze", "PETR4", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["symbol"] == "PETR4"
        assert data["companyName"].startswith("Petróleo")
        assert data["lastUpdated"] != analysis_payload["lastUpdated"]

    def test_not_found(self, use_responses, capsys) -> None:
        use_responses('{"exists": false}')
        assert cli.main(["analyze", "Empresa Inventada"]) == 1
        err = capsys.readouterr().err
        assert cli.not_found_message("Empresa Inventada") in err

    def test_failure_shows_generic_message_only(self, use_responses, capsys) -> None:
        use_responses("SECRET-DIAGNOSTIC no json")
        assert cli.main(["analyze", "PETR4"]) == 2
        captured = capsys.readouterr()
        assert cli.CONNECTION_ERROR_MESSAGE in captured.err
        assert "SECRET-DIAGNOSTIC" not in captured.out
        assert "SECRET-DIAGNOSTIC" not in captured.err

    def test_failure_logs_nothing_above_debug(self, use_responses, caplog) -> None:
        use_responses("SECRET-DIAGNOSTIC no json")
        with caplog.at_level(logging.DEBUG, logger="investai.cli"):
            assert cli.main(["analyze", "PETR4"]) == 2
        cli_records = [r for r in caplog.records if r.name == "investai.cli"]
        assert cli_records
        assert all(r.levelno == logging.DEBUG for r in cli_records)


class TestMarketCommand:

    def test_lists_sectors(self, use_responses, capsys, recommendations_payload) -> None:
        use_responses(fenced(recommendations_payload))
        assert cli.main(["market", "BR"]) == 0
        out = capsys.readouterr().out
        assert "Tecnologia / Growth" in out
        assert "▲ TOTS3" in out
        assert "▼ LWSA3" in out

    def test_empty_state(self, use_responses, capsys) -> None:
        use_responses('{"sectors": []}')
        assert cli.main(["market", "US"]) == 0
        assert cli.EMPTY_MARKET_MESSAGE in capsys.readouterr().out

    def test_json_output(self, use_responses, capsys, recommendations_payload) -> None:
        use_responses(fenced(recommendations_payload))
        assert cli.main(["market", "BR", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["sectorName"] == "Tecnologia / Growth"

    def test_unknown_region_rejected_by_parser(self, use_responses) -> None:
        use_responses("{}")
        with pytest.raises(SystemExit):
            cli.main(["market", "EU"])


class TestTerminalOutput:

    def test_raw_model_text_never_reaches_stderr(self) -> None:
        env = {k: v for k, v in os.environ.items() if not k.startswith("INVESTAI_")}
        env["PYTHONPATH"] = str(ROOT)
        proc = subprocess.run(
            [sys.executable, "-c", SCRIPTED_CLI],
            cwd=ROOT,
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )
        assert proc.returncode == 2
        assert cli.CONNECTION_ERROR_MESSAGE in proc.stderr
        assert "SECRET-DIAGNOSTIC" not in proc.stderr
        assert "Traceback" not in proc.stderr
        assert "SECRET-DIAGNOSTIC" not in proc.stdout
