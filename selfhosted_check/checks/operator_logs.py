"""Error context mining from operator pod logs.

For every line containing ``ERROR`` the excerpt gets the error line followed
by the ``WARNING`` lines among the preceding *lookback* lines. A warning is
attributed to the first error after it only: the window for the next error
starts after the previous error line. Each pod's log is scanned on its own;
windows never span two pods.
"""

from __future__ import annotations

from collections.abc import Sequence

from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.models.document import object_name
from selfhosted_check.observability.logging import get_logger

_logger = get_logger("checks.operator_logs")

ERROR_MARKER = "ERROR"
WARNING_MARKER = "WARNING"
DEFAULT_LOOKBACK = 10
OPERATOR_LABEL_SELECTOR = "app.kubernetes.io/component=operator"


def scan_log_lines(
    lines: Sequence[str],
    last_error_index: int = 0,
    lookback: int = DEFAULT_LOOKBACK,
) -> tuple[list[str], int]:
    """Scan one pod's lines and return (excerpt lines, updated last_error_index).

    ``last_error_index`` is the first line index a lookback window may reach;
    pass 0 for a fresh log.
    """
    excerpt: list[str] = []
    for i, line in enumerate(lines):
        if ERROR_MARKER not in line:
            continue
        excerpt.append(line)
        start = max(last_error_index, i - lookback)
        excerpt.extend(prior for prior in lines[start:i] if WARNING_MARKER in prior)
        last_error_index = i + 1
    return excerpt, last_error_index


async def collect_operator_errors(
    cluster: ClusterClient,
    namespace: str,
    label_selector: str = OPERATOR_LABEL_SELECTOR,
    lookback: int = DEFAULT_LOOKBACK,
) -> str:
    """Read the full log of every operator pod in *namespace* and build the excerpt.

    Every excerpt line ends with a newline; the result is empty when no
    error lines were found.

    Raises:
        ClusterQueryError: if the pods cannot be listed or any log cannot be
            read. No partial excerpt is returned.
    """
    pods = await cluster.list_pods(namespace, label_selector=label_selector)
    excerpt: list[str] = []
    for pod in pods:
        name = object_name(pod)
        async with cluster.pod_log_stream(namespace, name) as stream:
            text = await stream.read()
        pod_excerpt, _ = scan_log_lines(text.split("\n"), last_error_index=0, lookback=lookback)
        _logger.debug("operator_log_scanned", namespace=namespace, pod=name, excerpt_lines=len(pod_excerpt))
        excerpt.extend(pod_excerpt)

    _logger.info("operator_logs_collected", namespace=namespace, pods=len(pods), excerpt_lines=len(excerpt))
    return "".join(line + "\n" for line in excerpt)
