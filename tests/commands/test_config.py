"""CLI tests for the config command group."""

import tomllib
from pathlib import Path

from click.testing import CliRunner

from nixbrew.cli.cli import cli
from nixbrew.core.config_store import InMemoryConfigStore, NixbrewConfig
from nixbrew.core.context import NixbrewContext


def test_config_show_prints_effective_config() -> None:
    config = NixbrewConfig(home=Path("/test/nixbrew"), channels=("nixpkgs/nixos-24.05",))
    ctx = NixbrewContext.for_test(config=config)

    result = CliRunner().invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "# Source: /test/nixbrew/config.toml" in result.output
    assert tomllib.loads(result.output)["channels"] == ["nixpkgs/nixos-24.05"]


def test_config_show_defaults_when_no_file() -> None:
    config = NixbrewConfig(home=Path("/test/nixbrew"))
    store = InMemoryConfigStore(home=config.home)
    ctx = NixbrewContext.for_test(config=config, config_store=store)

    result = CliRunner().invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "# Source: defaults" in result.output


def test_config_init_writes_config() -> None:
    config = NixbrewConfig(home=Path("/test/nixbrew"))
    store = InMemoryConfigStore(home=config.home)
    ctx = NixbrewContext.for_test(config=config, config_store=store)

    result = CliRunner().invoke(cli, ["config", "init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert store.saved_configs == [config]


def test_config_init_refuses_to_overwrite() -> None:
    ctx = NixbrewContext.for_test()

    result = CliRunner().invoke(cli, ["config", "init"], obj=ctx)

    assert result.exit_code == 1
    assert "use --force to overwrite" in result.output


def test_config_init_force_overwrites() -> None:
    config = NixbrewConfig(home=Path("/test/nixbrew"))
    store = InMemoryConfigStore(config)
    ctx = NixbrewContext.for_test(config=config, config_store=store)

    result = CliRunner().invoke(cli, ["config", "init", "--force"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert store.saved_configs == [config]


def test_config_init_dry_run_writes_nothing() -> None:
    config = NixbrewConfig(home=Path("/test/nixbrew"))
    store = InMemoryConfigStore(home=config.home)
    ctx = NixbrewContext.for_test(config=config, config_store=store, dry_run=True)

    result = CliRunner().invoke(cli, ["config", "init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[DRY RUN] Would write /test/nixbrew/config.toml" in result.output
    assert store.saved_configs == []
    assert store.exists() is False
