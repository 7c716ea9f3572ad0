"""
Error taxonomy — every failure the CLI can report, with its exit code.

Core services raise these; use cases either let them propagate or fold
them into per-asset outcomes; ``main.py`` turns them into a red line,
a remediation hint, and ``sys.exit(err.exit_code)``.

    UsageError            1   bad arguments, unsupported target
    PermissionDenied      2   cannot read/write a required path
    InvalidFlagPlacement  2   preview flag present but not first token
    DependencyMissing     3   catalog / template / required dir absent
    ValidationError       4   malformed catalog, settings, or template
"""

from __future__ import annotations

from pathlib import Path

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PERMISSION = 2
EXIT_DEPENDENCY = 3
EXIT_VALIDATION = 4


class RampanteError(Exception):
    """Base class. Carries a message and an actionable remediation."""

    exit_code: int = EXIT_USAGE
    default_remediation: str = "Run 'rampante --help' for usage."

    def __init__(self, message: str, remediation: str | None = None):
        super().__init__(message)
        self.message = message
        self.remediation = remediation or self.default_remediation

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "kind": self.kind,
            "remediation": self.remediation,
            "exit_code": self.exit_code,
        }


class UsageError(RampanteError):
    exit_code = EXIT_USAGE


class SideEffectBlocked(UsageError):
    """A preview-mode context reached a helper that would mutate state."""

    default_remediation = "Drop the preview flag to perform the operation."


class PermissionDenied(RampanteError):
    exit_code = EXIT_PERMISSION
    default_remediation = "Check ownership and permissions of the path, then retry."


class InvalidFlagPlacement(RampanteError):
    exit_code = EXIT_PERMISSION
    default_remediation = "Put the preview flag first, e.g. '--dry-run Build a todo app'."


class DependencyMissing(RampanteError):
    exit_code = EXIT_DEPENDENCY
    default_remediation = "Run 'rampante install <target>' to install the required files."


class ValidationError(RampanteError):
    exit_code = EXIT_VALIDATION
    default_remediation = "Fix the file contents and retry."


def wrap_os_error(exc: OSError, path: Path | str, action: str) -> RampanteError:
    """Translate an ``OSError`` raised while touching *path* into our taxonomy."""
    if isinstance(exc, FileNotFoundError):
        return DependencyMissing(f"Cannot {action} {path}: file not found")
    return PermissionDenied(f"Cannot {action} {path}: {exc.strerror or exc}")
