"""
Host registry — lookup of host adapters by target name.
"""

from __future__ import annotations

import logging

from rampante.adapters.base import HostAdapter
from rampante.core.errors import UsageError

logger = logging.getLogger(__name__)


class HostRegistry:
    """Name → HostAdapter, in registration order."""

    def __init__(self) -> None:
        self._hosts: dict[str, HostAdapter] = {}

    def register(self, host: HostAdapter) -> None:
        if host.name in self._hosts:
            logger.warning("Overwriting existing host adapter: %s", host.name)
        self._hosts[host.name] = host
        logger.debug("Registered host: %s", host.name)

    def supported(self) -> list[str]:
        return list(self._hosts.keys())

    def get(self, name: str) -> HostAdapter:
        """Look up a host, raising ``UsageError`` for unknown targets."""
        host = self._hosts.get(name)
        if host is None:
            raise UsageError(
                f"CLI target '{name}' is not supported. "
                f"Supported targets: {', '.join(self.supported())}",
                remediation=f"Use one of: {', '.join(self.supported())}.",
            )
        return host


def default_registry() -> HostRegistry:
    from rampante.adapters.hosts import ClaudeHost, CodexHost, GeminiHost

    registry = HostRegistry()
    registry.register(CodexHost())
    registry.register(ClaudeHost())
    registry.register(GeminiHost())
    return registry
