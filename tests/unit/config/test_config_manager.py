from __future__ import annotations

from pathlib import Path

import pytest

from utilkit.core.config import ConfigManager, clear_all_caches, get_cached_config, is_cached, register_cache_clearer
from utilkit.core.exceptions import ConfigError
from utilkit.data import get_data_path


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_bundled_defaults_load_and_validate(tmp_path: Path) -> None:
    cfg = ConfigManager(tmp_path).load_config(validate=True)
    assert cfg["compare"] == {
        "traverse": True,
        "array_strategy": "exact",
        "function_strategy": "strict",
        "max_depth": 128,
    }
    assert cfg["merge"]["array_strategy"] == "overwrite"
    assert cfg["ids"] == {"characters": 10, "crypto": "with_fallback"}
    assert cfg["time"]["iso8601"]["use_z_suffix"] is True
    assert cfg["logging"]["level"] == "WARNING"


def test_core_config_dir_is_bundled_data() -> None:
    assert ConfigManager().core_config_dir == get_data_path("config")


def test_project_layer_overrides_user_layer(tmp_path: Path) -> None:
    user_home = tmp_path / "user"
    project = tmp_path / "proj"
    _write(user_home / "config" / "compare.yaml", "compare:\n  array_strategy: elements\n  max_depth: 10\n")
    _write(project / ".utilkit" / "config" / "compare.yml", "compare:\n  max_depth: 20\n")

    cfg = ConfigManager(project, user_dir=user_home)._load_config_uncached()
    assert cfg["compare"]["array_strategy"] == "elements"
    assert cfg["compare"]["max_depth"] == 20
    assert cfg["compare"]["traverse"] is True


def test_user_layer_defaults_to_home_directory(isolated_config: Path) -> None:
    _write(Path.home() / ".utilkit" / "config" / "ids.yaml", "ids:\n  characters: 30\n")
    cfg = get_cached_config()
    assert cfg["ids"]["characters"] == 30


def test_yaml_preferred_over_yml(tmp_path: Path) -> None:
    config_dir = tmp_path / ".utilkit" / "config"
    _write(config_dir / "ids.yaml", "ids:\n  characters: 20\n")
    _write(config_dir / "ids.yml", "ids:\n  characters: 6\n")
    cfg = ConfigManager(tmp_path)._load_config_uncached()
    assert cfg["ids"]["characters"] == 20


def test_env_overrides_are_coerced(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("UTILKIT_compare__traverse", "false")
    monkeypatch.setenv("UTILKIT_compare__max_depth", "64")
    monkeypatch.setenv("UTILKIT_COMPARE__ARRAY_STRATEGY", "elements")
    monkeypatch.setenv("UTILKIT_extra__ratio", "0.5")
    monkeypatch.setenv("UTILKIT_extra__items", '["a", "b"]')
    monkeypatch.setenv("UTILKIT_extra__name", " plain ")

    cfg = ConfigManager(tmp_path)._load_config_uncached()
    assert cfg["compare"]["traverse"] is False
    assert cfg["compare"]["max_depth"] == 64
    assert cfg["compare"]["array_strategy"] == "elements"
    assert cfg["extra"] == {"ratio": 0.5, "items": ["a", "b"], "name": "plain"}


def test_malformed_env_key_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("UTILKIT_compare____max_depth", "1")
    with pytest.raises(ConfigError):
        ConfigManager(tmp_path)._load_config_uncached()


def test_env_override_through_scalar_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("UTILKIT_compare__max_depth__inner", "1")
    with pytest.raises(ConfigError):
        ConfigManager(tmp_path)._load_config_uncached()


def test_schema_violation_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("UTILKIT_compare__array_strategy", "sorted")
    with pytest.raises(ConfigError) as exc:
        ConfigManager(tmp_path)._load_config_uncached()
    assert exc.value.context["path"] == "compare.array_strategy"

    cfg = ConfigManager(tmp_path)._load_config_uncached(validate=False)
    assert cfg["compare"]["array_strategy"] == "sorted"


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    _write(tmp_path / ".utilkit" / "config" / "broken.yaml", "compare: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager(tmp_path)._load_config_uncached()


def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    _write(tmp_path / ".utilkit" / "config" / "list.yaml", "- a\n- b\n")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        ConfigManager(tmp_path)._load_config_uncached()


def test_deep_merge_delegates_to_shared_merge(tmp_path: Path) -> None:
    mgr = ConfigManager(tmp_path)
    merged = mgr.deep_merge({"a": {"x": 1, "y": [1, 2]}, "c": 1}, {"a": {"y": [3]}, "c": 2})
    assert merged == {"a": {"x": 1, "y": [3]}, "c": 2}


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


def test_cached_config_is_reused(tmp_path: Path) -> None:
    assert not is_cached(tmp_path)
    first = get_cached_config(tmp_path)
    assert is_cached(tmp_path)
    assert get_cached_config(tmp_path) is first


def test_cache_tracks_env_and_file_changes(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    first = get_cached_config(tmp_path)
    monkeypatch.setenv("UTILKIT_compare__max_depth", "5")
    second = get_cached_config(tmp_path)
    assert second is not first
    assert second["compare"]["max_depth"] == 5

    _write(tmp_path / ".utilkit" / "config" / "ids.yaml", "ids:\n  characters: 6\n")
    third = get_cached_config(tmp_path)
    assert third["ids"]["characters"] == 6


def test_clear_all_caches_runs_registered_clearers(tmp_path: Path) -> None:
    calls: list = []
    register_cache_clearer("test-clearer", lambda: calls.append("cleared"))
    first = get_cached_config(tmp_path)

    clear_all_caches()
    assert calls == ["cleared"]
    assert get_cached_config(tmp_path) is not first


def test_register_cache_clearer_rejects_non_callables() -> None:
    with pytest.raises(ConfigError):
        register_cache_clearer("bad", "not callable")  # type: ignore[arg-type]
