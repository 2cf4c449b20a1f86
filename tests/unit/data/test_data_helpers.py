from __future__ import annotations

from utilkit.data import clear_caches, get_data_path, list_files, read_yaml


def test_get_data_path_points_into_package() -> None:
    path = get_data_path("tables", "countries.yaml")
    assert path.is_file()
    assert path.parent == get_data_path("tables")


def test_list_files_is_sorted() -> None:
    names = [p.name for p in list_files("config", "*.yaml")]
    assert names == ["compare.yaml", "ids.yaml", "logging.yaml", "merge.yaml", "time.yaml"]


def test_read_yaml_is_cached_until_cleared() -> None:
    first = read_yaml("config", "ids.yaml")
    assert first == {"ids": {"characters": 10, "crypto": "with_fallback"}}
    assert read_yaml("config", "ids.yaml") is first

    clear_caches()
    assert read_yaml("config", "ids.yaml") is not first
