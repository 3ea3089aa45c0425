"""Tests for context construction."""

from pathlib import Path

import pytest

from nixbrew.core.config_store import NixbrewConfig
from nixbrew.core.context import NixbrewContext, create_context
from nixbrew.core.nix.dry_run import DryRunNix
from nixbrew.core.nix.real import RealNix
from nixbrew.core.registry_store import FilesystemRegistryStore
from nixbrew.core.user_feedback import InteractiveFeedback, SuppressedFeedback


def test_create_context_uses_real_implementations(tmp_path: Path) -> None:
    ctx = create_context(dry_run=False, home=tmp_path)

    assert isinstance(ctx.nix, RealNix)
    assert isinstance(ctx.registry_store, FilesystemRegistryStore)
    assert ctx.registry_store.path() == tmp_path / "registry.json"
    assert isinstance(ctx.feedback, InteractiveFeedback)
    assert ctx.config == NixbrewConfig(home=tmp_path)


def test_create_context_dry_run_wraps_nix(tmp_path: Path) -> None:
    ctx = create_context(dry_run=True, home=tmp_path)

    assert isinstance(ctx.nix, DryRunNix)
    assert ctx.dry_run is True


def test_create_context_quiet_suppresses_feedback(tmp_path: Path) -> None:
    ctx = create_context(dry_run=False, quiet=True, home=tmp_path)

    assert isinstance(ctx.feedback, SuppressedFeedback)


def test_create_context_reads_config_file(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text(
        'channels = ["nixpkgs/nixos-24.05"]\ncommit_hash_length_mode = "exact"\n',
        encoding="utf-8",
    )

    ctx = create_context(dry_run=False, home=tmp_path)

    assert ctx.config.channels == ("nixpkgs/nixos-24.05",)
    assert ctx.resolver.channels == ("nixpkgs/nixos-24.05",)


def test_create_context_rejects_bad_config(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text("channels = []\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must not be empty"):
        create_context(dry_run=False, home=tmp_path)


def test_for_test_wraps_nix_in_dry_run() -> None:
    ctx = NixbrewContext.for_test(dry_run=True)

    assert isinstance(ctx.nix, DryRunNix)
