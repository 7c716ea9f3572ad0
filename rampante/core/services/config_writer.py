"""
Configuration writer — marker-guarded block inside a user-owned config file.

The file is free-form text that belongs to the user.  We only ever look
for one marker line (a TOML table header such as
``[mcp_servers.context7]``).  Bytes outside our block are preserved
exactly:

    marker absent             → block appended after the existing bytes
    marker present            → left alone (stale values are not refreshed)
    marker present, replace   → block swapped in place, from the marker
                                line up to the next table header that is
                                not inside an open array, or EOF
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from pathlib import Path

from rampante.core.context import RunContext
from rampante.core.errors import PermissionDenied, ValidationError
from rampante.core.models.asset import PathState
from rampante.core.models.settings import Context7Settings
from rampante.core.persistence.files import atomic_write_bytes, probe_path, read_bytes

logger = logging.getLogger(__name__)

CONTEXT7_MARKER = "[mcp_servers.context7]"

_TABLE_HEADER_RE = re.compile(rb"[ \t]*\[\[?[^\[\]\r\n]+\]\]?[ \t]*(?:#.*)?")


class BlockOutcome(str, Enum):
    ALREADY_PRESENT = "already-present"
    APPENDED = "appended"
    CREATED_WITH_BLOCK = "created-with-block"
    REPLACED = "replaced"


def render_context7_block(settings: Context7Settings | None = None) -> str:
    """TOML table registering the context7 MCP server."""
    settings = settings or Context7Settings()
    return (
        f"{CONTEXT7_MARKER}\n"
        f"command = {json.dumps(settings.command)}\n"
        f"args = {json.dumps(settings.args)}\n"
    )


def has_block(config_path: Path, marker: str) -> bool:
    """Read-only check used by verification and install previews."""
    if probe_path(config_path) != PathState.EXISTS:
        return False
    return marker.encode("utf-8") in read_bytes(config_path)


def _bracket_delta(line: bytes) -> int:
    """Net ``[`` minus ``]`` on *line*, ignoring strings and comments."""
    depth = 0
    quote = None
    i = 0
    while i < len(line):
        ch = line[i:i + 1]
        if quote is not None:
            if ch == b"\\" and quote == b'"':
                i += 1
            elif ch == quote:
                quote = None
        elif ch in (b'"', b"'"):
            quote = ch
        elif ch == b"#":
            break
        elif ch == b"[":
            depth += 1
        elif ch == b"]":
            depth -= 1
        i += 1
    return depth


def _block_end(existing: bytes, body_start: int) -> int:
    """Offset of the first table header after *body_start* that sits
    outside any open array, or EOF."""
    depth = 0
    pos = body_start
    for line in existing[body_start:].splitlines(keepends=True):
        if depth <= 0 and _TABLE_HEADER_RE.fullmatch(line.rstrip(b"\r\n")):
            return pos
        depth = max(depth + _bracket_delta(line), 0)
        pos += len(line)
    return len(existing)


def _splice(existing: bytes, marker: bytes, payload: bytes) -> bytes:
    """Replace the block that starts at *marker* with *payload*."""
    start = existing.index(marker)
    line_start = existing.rfind(b"\n", 0, start) + 1
    body_start = existing.find(b"\n", start)
    if body_start == -1:
        return existing[:line_start] + payload
    tail = existing[_block_end(existing, body_start + 1):]
    if tail:
        payload += b"\n"
    return existing[:line_start] + payload + tail


def decide_block(state: PathState, present: bool, replace: bool) -> BlockOutcome:
    """Map one probe of the config file to the block action.

    Args:
        state: Probe result for the config file.
        present: Whether the marker was found in the file's bytes.
        replace: Rewrite an existing block instead of leaving it.

    Raises:
        PermissionDenied: the config file could not be inspected.
    """
    if state == PathState.DENIED:
        raise PermissionDenied("Config file cannot be inspected")
    if state == PathState.MISSING:
        return BlockOutcome.CREATED_WITH_BLOCK
    if present:
        return BlockOutcome.REPLACED if replace else BlockOutcome.ALREADY_PRESENT
    return BlockOutcome.APPENDED


def ensure_block(
    ctx: RunContext,
    config_path: Path,
    marker: str,
    block: str,
    replace: bool = False,
) -> BlockOutcome:
    """Make sure *marker* is present in *config_path*, appending *block* if not.

    Args:
        replace: Rewrite an existing block in place instead of leaving it.

    Raises:
        ValidationError: *block* does not itself contain *marker*.
        PermissionDenied: the file cannot be read or written.
    """
    if marker not in block:
        raise ValidationError(f"Config block does not contain its marker {marker!r}")

    state = probe_path(config_path)
    if state == PathState.DENIED:
        raise PermissionDenied(f"Cannot inspect {config_path}")

    existing = read_bytes(config_path) if state == PathState.EXISTS else b""
    payload = (block if block.endswith("\n") else block + "\n").encode("utf-8")
    marker_bytes = marker.encode("utf-8")

    outcome = decide_block(state, marker_bytes in existing, replace)
    if outcome == BlockOutcome.ALREADY_PRESENT:
        logger.info("%s already present in %s", marker, config_path)
        return outcome

    if outcome == BlockOutcome.REPLACED:
        atomic_write_bytes(ctx, config_path, _splice(existing, marker_bytes, payload))
        logger.info("Replaced %s in %s", marker, config_path)
        return outcome

    separator = b"\n" if existing else b""
    atomic_write_bytes(ctx, config_path, existing + separator + payload)
    if outcome == BlockOutcome.CREATED_WITH_BLOCK:
        logger.info("Created %s with %s", config_path, marker)
    else:
        logger.info("Appended %s to %s", marker, config_path)
    return outcome
