"""Unit tests for selfhosted_check.cli.main."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest
import structlog
from click.testing import CliRunner

from selfhosted_check import __version__
from selfhosted_check.cli.main import cli, run_analyzers
from selfhosted_check.cluster.errors import ClusterQueryError
from selfhosted_check.console import silent_reporter
from selfhosted_check.models.config import SelfHostedCheckConfig
from selfhosted_check.models.results import DiagnosticResult, failure_result
from tests.fakes import FakeClusterClient, custom_resource


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_LEVEL", "ACTIVE_FILTERS", "COLOR"):
        monkeypatch.delenv(f"SELFHOSTED_CHECK_{name}", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def _outcome() -> dict[str, list[DiagnosticResult]]:
    return {
        "SelfHostedInstallCheck": [
            failure_result("In namespace instana-kafka, statefulSet kafka is not running", "StatefulSet", "kafka"),
            failure_result("the server is unavailable"),
        ]
    }


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_prints_version(self) -> None:
        result = CliRunner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "selfhosted-check" in result.output


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------


class TestAnalyzeCommand:
    def test_pretty_output(self) -> None:
        with patch("selfhosted_check.cli.main._analyze", new=AsyncMock(return_value=_outcome())):
            result = CliRunner().invoke(cli, ["analyze", "--no-color"])
        assert result.exit_code == 0
        assert "2 problem(s) detected" in result.output
        assert "0: StatefulSet kafka" in result.output
        assert "- Error: In namespace instana-kafka, statefulSet kafka is not running" in result.output
        assert "1: cluster query" in result.output

    def test_no_problems(self) -> None:
        with patch("selfhosted_check.cli.main._analyze", new=AsyncMock(return_value={"SelfHostedInstallCheck": []})):
            result = CliRunner().invoke(cli, ["analyze", "--no-color"])
        assert result.exit_code == 0
        assert "No problems detected." in result.output

    def test_json_output(self) -> None:
        with patch("selfhosted_check.cli.main._analyze", new=AsyncMock(return_value=_outcome())):
            result = CliRunner().invoke(cli, ["analyze", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "ProblemDetected"
        assert data["problems"] == 2
        assert data["results"][0] == {
            "analyzer": "SelfHostedInstallCheck",
            "kind": "StatefulSet",
            "name": "kafka",
            "failures": [
                {"text": "In namespace instana-kafka, statefulSet kafka is not running", "sensitive": []}
            ],
        }

    def test_filters_passed_through(self) -> None:
        mock = AsyncMock(return_value={})
        with patch("selfhosted_check.cli.main._analyze", new=mock):
            CliRunner().invoke(cli, ["analyze", "--filter", "A", "--filter", "B"])
        assert mock.await_args.args[2] == {"A", "B"}

    def test_default_filters_from_config(self) -> None:
        mock = AsyncMock(return_value={})
        with patch("selfhosted_check.cli.main._analyze", new=mock):
            CliRunner().invoke(cli, ["analyze"])
        assert mock.await_args.args[2] == {"SelfHostedInstallCheck"}

    def test_cluster_error_exits_nonzero(self) -> None:
        error = ClusterQueryError("list_namespaces", "Unauthorized")
        with patch("selfhosted_check.cli.main._analyze", new=AsyncMock(side_effect=error)):
            result = CliRunner().invoke(cli, ["analyze"])
        assert result.exit_code == 1
        assert "list_namespaces" in result.output
        assert "Unauthorized" in result.output

    def test_invalid_config_exits_nonzero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_LOG_LEVEL", "loud")
        result = CliRunner().invoke(cli, ["analyze"])
        assert result.exit_code == 1
        assert "LOG_LEVEL" in result.output


# ---------------------------------------------------------------------------
# run_analyzers
# ---------------------------------------------------------------------------


class TestRunAnalyzers:
    @pytest.mark.asyncio
    async def test_runs_install_check_when_active(self) -> None:
        cluster = FakeClusterClient(
            namespaces=["instana-units"],
            objects={("Unit", "instana-units"): [custom_resource("Unit", "unit0", "instana-units", "Pending")]},
        )
        outcome = await run_analyzers(
            cluster, SelfHostedCheckConfig(), silent_reporter(), {"SelfHostedInstallCheck"}
        )
        assert list(outcome) == ["SelfHostedInstallCheck"]
        assert [r.kind for r in outcome["SelfHostedInstallCheck"]] == ["Unit"]

    @pytest.mark.asyncio
    async def test_inactive_integration_does_not_touch_cluster(self) -> None:
        cluster = FakeClusterClient(namespaces=["instana-core"])
        outcome = await run_analyzers(cluster, SelfHostedCheckConfig(), silent_reporter(), {"Pod"})
        assert outcome == {}
        assert cluster.calls == []
