"""selfhosted-check - readiness diagnostics for a self-hosted Instana install."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("selfhosted-check")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
