"""Network-wide platform commands the clone engine delegates to.

Rewriting every occurrence of a URL across a tenant's rows and flushing the
object cache are done by the platform's own tooling. The engine only sees the
``ReferenceRewriter`` and ``CacheFlusher`` protocols; ``PlatformCommand``
implements both by running the platform CLI (``wp`` by default).
"""

from __future__ import annotations

import subprocess
from typing import Protocol, Sequence, runtime_checkable

from tenant_clone.core.logging_config import LoggerMixin


@runtime_checkable
class ReferenceRewriter(Protocol):
    def replace_references(self, old_url: str, new_url: str, table_prefix: str) -> None: ...


@runtime_checkable
class CacheFlusher(Protocol):
    def flush_cache(self) -> None: ...


class PlatformCommand(LoggerMixin):
    """Run platform CLI subcommands.

    Args:
        command: Command prefix, e.g. ``["wp", "--path=/var/www/html", "--allow-root"]``.

    Any non-zero exit raises ``subprocess.CalledProcessError``; nothing is retried.
    """

    def __init__(self, command: Sequence[str] = ("wp",)):
        self.command = list(command)

    def run(self, *args: str) -> subprocess.CompletedProcess:
        argv = [*self.command, *args]
        self._logger.debug(f"Running {' '.join(argv)}")
        result = subprocess.run(argv, check=True, capture_output=True, text=True)
        if result.stdout:
            self._logger.info(result.stdout.rstrip())
        return result

    def replace_references(self, old_url: str, new_url: str, table_prefix: str) -> None:
        """Replace ``old_url`` by ``new_url`` in every table starting with ``table_prefix``."""
        self.run("search-replace", old_url, new_url, f"{table_prefix}*", "--network")

    def flush_cache(self) -> None:
        self.run("cache", "flush")
