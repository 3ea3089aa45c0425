"""Tests for the in-memory registry value and its JSON schema."""

from datetime import UTC, datetime

import pytest

from nixbrew.core.registry import PackageInfo, PackageRegistry, RegistryCorruptError

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def test_create_stamps_iso_timestamp() -> None:
    info = PackageInfo.create("hello", "2.12.1", "nixpkgs/nixos-23.11#hello", at=NOW)

    assert info.installed_at == "2024-01-15T12:00:00+00:00"
    assert info.lock is None


def test_create_rejects_empty_name() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        PackageInfo.create("", None, "nixpkgs#", at=NOW)


def test_record_appends_in_order() -> None:
    registry = PackageRegistry()
    first = PackageInfo.create("hello", "2.10", "nixpkgs/2.10#hello", at=NOW)
    second = PackageInfo.create("hello", "2.12", "nixpkgs/2.12#hello", at=NOW)

    registry.record(first)
    registry.record(second)

    assert registry.history_of("hello") == [first, second]
    assert registry.dirty is True


def test_history_of_unknown_package_is_none() -> None:
    assert PackageRegistry().history_of("hello") is None


def test_history_of_returns_a_copy() -> None:
    registry = PackageRegistry()
    registry.record(PackageInfo.create("hello", None, "nixpkgs#hello", at=NOW))

    entries = registry.history_of("hello")
    assert entries is not None
    entries.clear()

    assert len(registry.history["hello"]) == 1


def test_cache_put_is_write_once() -> None:
    registry = PackageRegistry()

    assert registry.cache_put("hello", "2.12", "nixpkgs/a#hello") == "nixpkgs/a#hello"
    registry.dirty = False
    assert registry.cache_put("hello", "2.12", "nixpkgs/b#hello") == "nixpkgs/a#hello"

    assert registry.cache_get("hello", "2.12") == "nixpkgs/a#hello"
    assert registry.dirty is False


def test_cache_put_replace_overwrites() -> None:
    registry = PackageRegistry()
    registry.cache_put("hello", "2.12", "nixpkgs#hello")

    registry.cache_put("hello", "2.12", "nixpkgs/b#hello", replace=True)

    assert registry.cache_get("hello", "2.12") == "nixpkgs/b#hello"


def test_cache_forget_single_version() -> None:
    registry = PackageRegistry()
    registry.cache_put("hello", "2.12", "a#hello")
    registry.cache_put("hello", "2.10", "b#hello")

    assert registry.cache_forget("hello", "2.12") == 1
    assert registry.resolved_cache == {"hello": {"2.10": "b#hello"}}
    assert registry.cache_forget("hello", "9.9") == 0


def test_cache_forget_whole_package() -> None:
    registry = PackageRegistry()
    registry.cache_put("hello", "2.12", "a#hello")
    registry.cache_put("hello", "2.10", "b#hello")
    registry.dirty = False

    assert registry.cache_forget("hello") == 2
    assert registry.resolved_cache == {}
    assert registry.dirty is True
    assert registry.cache_forget("hello") == 0


def test_dict_round_trip() -> None:
    registry = PackageRegistry()
    registry.record(PackageInfo.create("hello", None, "nixpkgs#hello", at=NOW))
    registry.cache_put("hello", "2.12", "nixpkgs/nixos-23.11#hello")

    restored = PackageRegistry.from_dict(registry.to_dict())

    assert restored == registry


def test_missing_sections_default_to_empty() -> None:
    assert PackageRegistry.from_dict({}) == PackageRegistry()


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"history": []},
        {"resolved_cache": "nope"},
        {"history": {"hello": {}}},
        {"history": {"hello": ["entry"]}},
        {"history": {"hello": [{"name": "hello", "reference": "x"}]}},
        {
            "history": {
                "hello": [
                    {"name": "hello", "reference": "x", "installed_at": "t", "version": 3}
                ]
            }
        },
        {"resolved_cache": {"hello": {"2.12": 1}}},
    ],
)
def test_from_dict_rejects_malformed_documents(data: object) -> None:
    with pytest.raises(RegistryCorruptError):
        PackageRegistry.from_dict(data)
