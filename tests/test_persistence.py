"""
Tests for file persistence — probing, atomic writes, the write decision.
"""

import os
from pathlib import Path

import pytest

from rampante.core.context import RunContext
from rampante.core.errors import PermissionDenied, SideEffectBlocked
from rampante.core.models.asset import AssetStatus, PathState
from rampante.core.persistence.files import (
    atomic_write_bytes,
    atomic_write_text,
    decide_write,
    probe_path,
)


class TestProbePath:
    def test_exists(self, tmp_path: Path):
        f = tmp_path / "a.txt"
        f.write_text("x")
        assert probe_path(f) == PathState.EXISTS

    def test_missing(self, tmp_path: Path):
        assert probe_path(tmp_path / "nope") == PathState.MISSING

    def test_parent_is_a_file(self, tmp_path: Path):
        f = tmp_path / "a.txt"
        f.write_text("x")
        assert probe_path(f / "child") == PathState.MISSING

    def test_dangling_symlink_exists(self, tmp_path: Path):
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "gone")
        assert probe_path(link) == PathState.EXISTS

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores file permissions")
    def test_denied(self, tmp_path: Path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o000)
        try:
            assert probe_path(locked / "file") == PathState.DENIED
        finally:
            locked.chmod(0o700)


class TestDecideWrite:
    @pytest.mark.parametrize("state,force,expected", [
        (PathState.MISSING, False, AssetStatus.CREATED),
        (PathState.MISSING, True, AssetStatus.CREATED),
        (PathState.EXISTS, False, AssetStatus.SKIPPED_EXISTS),
        (PathState.EXISTS, True, AssetStatus.RECREATED),
    ])
    def test_table(self, state, force, expected):
        assert decide_write(state, force) == expected

    def test_denied_raises(self):
        with pytest.raises(PermissionDenied):
            decide_write(PathState.DENIED, force=True)


class TestAtomicWrite:
    def test_creates_parents(self, ctx: RunContext, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c.txt"
        atomic_write_text(ctx, target, "hello")
        assert target.read_text() == "hello"

    def test_no_temp_files_left(self, ctx: RunContext, tmp_path: Path):
        atomic_write_bytes(ctx, tmp_path / "out.bin", b"data")
        assert [p.name for p in tmp_path.iterdir()] == ["out.bin"]

    def test_explicit_mode(self, ctx: RunContext, tmp_path: Path):
        target = tmp_path / "run.sh"
        atomic_write_bytes(ctx, target, b"#!/bin/sh\n", mode=0o755)
        assert target.stat().st_mode & 0o777 == 0o755

    def test_overwrite_keeps_mode(self, ctx: RunContext, tmp_path: Path):
        target = tmp_path / "conf"
        target.write_text("old")
        target.chmod(0o600)
        atomic_write_text(ctx, target, "new")
        assert target.read_text() == "new"
        assert target.stat().st_mode & 0o777 == 0o600

    def test_preview_blocks(self, preview_ctx: RunContext, tmp_path: Path):
        target = tmp_path / "x" / "out.txt"
        with pytest.raises(SideEffectBlocked):
            atomic_write_text(preview_ctx, target, "nope")
        assert not (tmp_path / "x").exists()
