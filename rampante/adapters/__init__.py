"""Adapters — bindings for the host CLIs rampante installs into.

Public re-exports for convenient access.
"""

from rampante.adapters.base import HostAdapter
from rampante.adapters.hosts import ClaudeHost, CodexHost, GeminiHost
from rampante.adapters.registry import HostRegistry, default_registry

__all__ = [
    "ClaudeHost",
    "CodexHost",
    "GeminiHost",
    "HostAdapter",
    "HostRegistry",
    "default_registry",
]
