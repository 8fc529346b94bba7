"""selfhosted-check command-line interface.

Commands:
    selfhosted-check analyze [--filter NAME]... [--json]   Run the active analyzers.
    selfhosted-check version                              Print version and exit.

Cluster credentials come from the in-cluster service account when present,
otherwise from the local kubeconfig.
"""

from __future__ import annotations

import asyncio
import json

import click
import kubernetes_asyncio.config as k8s_config
from kubernetes_asyncio import client as k8s_client

from selfhosted_check import __version__
from selfhosted_check.cluster.client import ClusterClient, KubernetesClusterClient
from selfhosted_check.cluster.errors import ClusterQueryError
from selfhosted_check.config import load_config
from selfhosted_check.console import ConsoleReporter
from selfhosted_check.integration import SelfHostedIntegration
from selfhosted_check.models.config import SelfHostedCheckConfig
from selfhosted_check.models.results import DiagnosticResult
from selfhosted_check.observability.logging import get_logger, setup_logging
from selfhosted_check.registry import AnalyzerRegistry

AnalyzerResults = dict[str, list[DiagnosticResult]]

# ---------------------------------------------------------------------------
# Analyzer execution
# ---------------------------------------------------------------------------


async def run_analyzers(
    cluster: ClusterClient,
    config: SelfHostedCheckConfig,
    console: ConsoleReporter,
    active_filters: set[str],
) -> AnalyzerResults:
    """Register the integration's analyzers and run the active ones in order."""
    registry = AnalyzerRegistry()
    integration = SelfHostedIntegration(cluster, config=config, console=console)
    if not integration.is_active(active_filters):
        return {}
    integration.add_analyzers(registry)

    outcome: AnalyzerResults = {}
    for name, analyzer in registry.active(active_filters):
        outcome[name] = await analyzer.analyze()
    return outcome


async def _analyze(config: SelfHostedCheckConfig, console: ConsoleReporter, active_filters: set[str]) -> AnalyzerResults:
    """Connect to the cluster and run the analyzers."""
    log = get_logger("cli")
    try:
        k8s_config.load_incluster_config()  # type: ignore[no-untyped-call]
        log.info("k8s client configured from in-cluster service account")
    except k8s_config.ConfigException:
        await k8s_config.load_kube_config()
        log.info("k8s client configured from kubeconfig")

    async with k8s_client.ApiClient() as api_client:
        cluster = KubernetesClusterClient(api_client)
        return await run_analyzers(cluster, config, console, active_filters)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
def cli() -> None:
    """selfhosted-check — readiness diagnostics for a self-hosted install."""


@cli.command("version")
def cmd_version() -> None:
    """Print the selfhosted-check version and exit."""
    click.echo(f"selfhosted-check {__version__}")


@cli.command("analyze")
@click.option(
    "--filter",
    "filters",
    multiple=True,
    metavar="NAME",
    help="Analyzer to run; repeatable. Defaults to SELFHOSTED_CHECK_ACTIVE_FILTERS.",
)
@click.option("--json", "output_json", is_flag=True, default=False, help="Print results as JSON.")
@click.option("--no-color", is_flag=True, default=False, help="Disable coloured output.")
@click.option("--log-level", default=None, metavar="LEVEL", help="Override SELFHOSTED_CHECK_LOG_LEVEL.")
def cmd_analyze(filters: tuple[str, ...], output_json: bool, no_color: bool, log_level: str | None) -> None:
    """Check data stores, Core and Unit readiness and report every problem found."""
    try:
        config = load_config()
    except ValueError as err:
        raise click.ClickException(str(err)) from err

    setup_logging(log_level or config.log.level)
    active_filters = set(filters) or set(config.active_filters)
    color = config.output.color and not no_color
    console = ConsoleReporter(enabled=not output_json, color=color)

    try:
        outcome = asyncio.run(_analyze(config, console, active_filters))
    except ClusterQueryError as err:
        raise click.ClickException(f"cluster query {err.operation} failed: {err}") from err

    if output_json:
        click.echo(json.dumps(_to_json(outcome), indent=2))
        return
    _print_results(outcome, color)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _to_json(outcome: AnalyzerResults) -> dict[str, object]:
    results = [{"analyzer": name, **r.to_dict()} for name, items in outcome.items() for r in items]
    return {
        "status": "ProblemDetected" if results else "OK",
        "problems": len(results),
        "results": results,
    }


def _print_results(outcome: AnalyzerResults, color: bool) -> None:
    results = [r for items in outcome.values() for r in items]
    click.echo("")
    if not results:
        click.echo(click.style("No problems detected.", fg="green"), color=color)
        return

    click.echo(click.style(f"{len(results)} problem(s) detected:", bold=True), color=color)
    for index, result in enumerate(results):
        title = f"{result.kind} {result.name}".strip() or "cluster query"
        click.echo(click.style(f"{index}: {title}", bold=True), color=color)
        for failure in result.failures:
            click.echo(click.style("- Error: ", fg="red") + failure.text, color=color)
        click.echo("")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
