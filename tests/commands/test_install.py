"""CLI tests for install, pin and rollback.

These commands share install_resolved; the tests here focus on exit codes,
messages and what ends up in the persisted registry.
"""

import json
from datetime import timedelta

from click.testing import CliRunner

from nixbrew.cli.cli import cli
from nixbrew.core.context import NixbrewContext
from nixbrew.core.nix.fake import FakeNix
from nixbrew.core.nix.types import ProfileEntry
from nixbrew.core.registry_store import InMemoryRegistryStore
from tests.fakes.time import DEFAULT_NOW, FakeTime

STABLE = "nixpkgs/nixos-23.11"


def test_install_without_version_uses_default_reference() -> None:
    nix = FakeNix()
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["install", "ripgrep"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Installing ripgrep..." in result.output
    assert "✓ Installed ripgrep from nixpkgs#ripgrep" in result.output
    assert nix.added == ["nixpkgs#ripgrep"]
    assert nix.version_queries == []


def test_install_channel_version() -> None:
    nix = FakeNix()
    ctx = NixbrewContext.for_test(nix=nix)

    result = CliRunner().invoke(cli, ["install", "ripgrep", "23.11"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert nix.added == ["nixpkgs/23.11#ripgrep"]


def test_install_semantic_version_probes_and_caches() -> None:
    nix = FakeNix(channel_versions={(STABLE, "hello"): "2.12.1"})
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["install", "hello", "2.12.1"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert f"Resolved hello to {STABLE}#hello (found in {STABLE})" in result.output
    assert nix.added == [f"{STABLE}#hello"]

    saved = json.loads(store.content or "")
    assert saved["resolved_cache"] == {"hello": {"2.12.1": f"{STABLE}#hello"}}
    assert [e["reference"] for e in saved["history"]["hello"]] == [f"{STABLE}#hello"]


def test_install_refresh_reprobes_cached_fallback() -> None:
    nix = FakeNix(channel_versions={(STABLE, "hello"): "2.13.0"})
    store = InMemoryRegistryStore(
        '{"history": {}, "resolved_cache": {"hello": {"2.13.0": "nixpkgs#hello"}}}'
    )
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    cached = CliRunner().invoke(cli, ["install", "hello", "2.13.0"], obj=ctx)
    assert cached.exit_code == 0, cached.output
    assert "cached resolution" in cached.output
    assert nix.version_queries == []

    refreshed = CliRunner().invoke(cli, ["install", "hello", "2.13.0", "--refresh"], obj=ctx)

    assert refreshed.exit_code == 0, refreshed.output
    assert nix.added == ["nixpkgs#hello", f"{STABLE}#hello"]
    assert store.load().cache_get("hello", "2.13.0") == f"{STABLE}#hello"


def test_failed_add_reports_error_and_saves_nothing() -> None:
    nix = FakeNix(
        channel_versions={(STABLE, "hello"): "2.12.1"},
        failing_adds={f"{STABLE}#hello"},
    )
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["install", "hello", "2.12.1"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Failed to add" in result.output
    assert store.save_count == 0


def test_corrupt_registry_is_reported_not_overwritten() -> None:
    nix = FakeNix()
    store = InMemoryRegistryStore("{not json")
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["install", "hello"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Registry at memory is not valid JSON" in result.output
    assert nix.added == []
    assert store.content == "{not json"


def test_pin_twice_records_two_entries_in_order() -> None:
    nix = FakeNix(
        channel_versions={
            ("nixpkgs/nixos-unstable", "hello"): "2.12.1",
            (STABLE, "hello"): "2.10.0",
        }
    )
    store = InMemoryRegistryStore()
    time = FakeTime(DEFAULT_NOW, DEFAULT_NOW + timedelta(hours=1))
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store, time=time)
    runner = CliRunner()

    first = runner.invoke(cli, ["pin", "hello", "2.10.0"], obj=ctx)
    second = runner.invoke(cli, ["pin", "hello", "2.12.1"], obj=ctx)

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert f"✓ Pinned hello to {STABLE}#hello" in first.output

    history = store.load().history_of("hello")
    assert history is not None
    assert [(e.version, e.reference) for e in history] == [
        ("2.10.0", f"{STABLE}#hello"),
        ("2.12.1", "nixpkgs/nixos-unstable#hello"),
    ]
    assert history[0].installed_at < history[1].installed_at


def test_pin_requires_version() -> None:
    ctx = NixbrewContext.for_test()

    result = CliRunner().invoke(cli, ["pin", "hello"], obj=ctx)

    assert result.exit_code == 2


def test_rollback_replaces_installed_entry() -> None:
    nix = FakeNix(profile=[ProfileEntry("0", "nixpkgs#git"), ProfileEntry("1", "nixpkgs#hello")])
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["rollback", "hello", "23.05"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert nix.removed == ["1"]
    assert nix.added == ["nixpkgs/23.05#hello"]
    assert "✓ Rolled back hello to version 23.05 (nixpkgs/23.05#hello)" in result.output
    history = store.load().history_of("hello")
    assert history is not None
    assert [e.reference for e in history] == ["nixpkgs/23.05#hello"]


def test_rollback_when_not_installed_still_installs() -> None:
    nix = FakeNix()
    ctx = NixbrewContext.for_test(nix=nix)

    result = CliRunner().invoke(cli, ["rollback", "hello", "cb82756"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "hello is not currently installed, installing cb82756" in result.output
    assert nix.removed == []
    assert nix.added == ["github:NixOS/nixpkgs/cb82756#hello"]


def test_rollback_resolution_failure_leaves_profile_untouched() -> None:
    nix = FakeNix(
        profile=[ProfileEntry("0", "nixpkgs#hello")],
        erroring_channels={"nixpkgs/nixos-unstable"},
    )
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store)

    result = CliRunner().invoke(cli, ["rollback", "hello", "2.10.0"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Unexpected non-text output" in result.output
    assert nix.removed == []
    assert nix.added == []
    assert nix.profile == [ProfileEntry("0", "nixpkgs#hello")]
    assert store.save_count == 0


def test_dry_run_changes_nothing() -> None:
    nix = FakeNix(
        channel_versions={(STABLE, "hello"): "2.12.1"},
        profile=[ProfileEntry("0", "nixpkgs#hello")],
    )
    store = InMemoryRegistryStore()
    ctx = NixbrewContext.for_test(nix=nix, registry_store=store, dry_run=True)

    result = CliRunner().invoke(cli, ["rollback", "hello", "2.12.1"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[DRY RUN] Would run: nix profile remove 0" in result.output
    assert f"[DRY RUN] Would run: nix profile add {STABLE}#hello" in result.output
    assert nix.added == []
    assert nix.removed == []
    assert store.save_count == 0
