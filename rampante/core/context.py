"""
Run context — what one invocation is allowed to touch.

A ``RunContext`` is built once by the CLI (or by a test) and passed
explicitly to every function that could write to disk.  There is no
module-level "dry-run active" switch: the mode travels with the call.

    ctx = RunContext.from_env(project_root=Path.cwd())
    guard_side_effect(ctx, "write", target)   # raises in preview mode
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

from rampante.core.errors import SideEffectBlocked

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "RAMPANTE_HOME"

Mode = Literal["normal", "preview"]


class RunContext(BaseModel):
    """Per-invocation execution context."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    home: Path
    mode: Mode = "normal"

    @property
    def is_preview(self) -> bool:
        return self.mode == "preview"

    @property
    def allows_side_effects(self) -> bool:
        """Pure predicate: may this context mutate the filesystem?"""
        return self.mode == "normal"

    def as_preview(self) -> RunContext:
        return self.model_copy(update={"mode": "preview"})

    @classmethod
    def from_env(
        cls,
        project_root: Path | None = None,
        mode: Mode = "normal",
        environ: dict[str, str] | None = None,
    ) -> RunContext:
        """Build a context, honouring the ``RAMPANTE_HOME`` override."""
        env = os.environ if environ is None else environ
        override = env.get(HOME_ENV_VAR, "").strip()
        home = Path(override).expanduser() if override else Path.home()
        root = (project_root or Path.cwd()).resolve()
        logger.debug("RunContext: root=%s home=%s mode=%s", root, home, mode)
        return cls(project_root=root, home=home, mode=mode)


def guard_side_effect(ctx: RunContext, operation: str, path: Path | str) -> None:
    """Raise ``SideEffectBlocked`` if *ctx* forbids mutations."""
    if not ctx.allows_side_effects:
        raise SideEffectBlocked(f"Side effect blocked in preview mode: {operation} {path}")
