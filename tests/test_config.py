from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from spherical_mercator.config import (
    DEFAULT_CONFIG_DIR_ENV,
    DEFAULT_PROJECTION_CONFIG_ENV,
    ProjectionConfig,
    get_projection_config,
    load_projection_config,
    _resolve_config_dir,
)
from spherical_mercator.errors import ConfigError
from spherical_mercator.projection import Projection

REPO_CONFIG = Path(__file__).resolve().parents[1] / "config" / "projection.yaml"


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEFAULT_PROJECTION_CONFIG_ENV, raising=False)
    monkeypatch.delenv(DEFAULT_CONFIG_DIR_ENV, raising=False)
    get_projection_config.cache_clear()


def test_loads_repo_default_projection_config() -> None:
    config = load_projection_config(REPO_CONFIG)

    assert config.projection.tile_size == 256
    assert config.projection.tms_style is False
    assert config.projection.srs is Projection.WGS84
    assert config.logging.level == "INFO"


def test_finds_config_dir_by_walking_up_from_cwd(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    _write_yaml(config_dir / "projection.yaml", {"projection": {"tile_size": 512}})
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    config = load_projection_config()

    assert config.projection.tile_size == 512


def test_env_var_points_at_config_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    path = tmp_path / "custom.yaml"
    _write_yaml(path, {"projection": {"srs": "900913", "tms_style": True}})
    monkeypatch.setenv(DEFAULT_PROJECTION_CONFIG_ENV, str(path))

    config = load_projection_config()

    assert config.projection.srs is Projection.WEB_MERCATOR
    assert config.projection.tms_style is True


def test_config_dir_env_var(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _write_yaml(tmp_path / "projection.yaml", {"logging": {"level": "debug"}})
    monkeypatch.setenv(DEFAULT_CONFIG_DIR_ENV, str(tmp_path))

    config = load_projection_config()

    assert config.logging.level == "DEBUG"
    assert config.projection.tile_size == 256


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("", encoding="utf-8")

    assert load_projection_config(path) == ProjectionConfig()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="projection config file not found"):
        load_projection_config(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError, match="projection config file not found"):
        get_projection_config(tmp_path / "missing.yaml")


def test_rejects_non_mapping_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("[]\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="projection config must be a mapping"):
        load_projection_config(path)


def test_rejects_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("projection: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to load projection YAML"):
        load_projection_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {"projection": {"tile_size": 0}},
        {"projection": {"srs": "EPSG:27700"}},
        {"projection": {"unknown": 1}},
        {"logging": {"level": "LOUD"}},
        {"extra_section": {}},
    ],
)
def test_rejects_invalid_config(tmp_path: Path, data: dict) -> None:
    path = tmp_path / "cfg.yaml"
    _write_yaml(path, data)

    with pytest.raises(ConfigError, match="Invalid projection config"):
        load_projection_config(path)


def test_config_error_is_a_value_error(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    _write_yaml(path, {"projection": {"tile_size": -1}})

    with pytest.raises(ValueError):
        load_projection_config(path)


def test_getter_caches_by_mtime_and_size(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    _write_yaml(path, {"projection": {"tile_size": 256}})

    first = get_projection_config(path)
    second = get_projection_config(path)
    assert first is second

    _write_yaml(path, {"projection": {"tile_size": 1024, "tms_style": True}})
    third = get_projection_config(path)
    assert third.projection.tile_size == 1024


def test_explicit_empty_environ_is_not_replaced_by_process_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv(DEFAULT_CONFIG_DIR_ENV, str(tmp_path / "from-env"))
    monkeypatch.chdir(tmp_path)

    assert _resolve_config_dir({}) == tmp_path / "config"
    assert _resolve_config_dir() == tmp_path / "from-env"
