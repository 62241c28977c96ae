from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError, UnsupportedProjectionError
from .projection import Projection
from .scale import DEFAULT_TILE_SIZE

DEFAULT_PROJECTION_CONFIG_NAME: Final[str] = "projection.yaml"
DEFAULT_PROJECTION_CONFIG_ENV: Final[str] = "SPHERICAL_MERCATOR_CONFIG"
DEFAULT_CONFIG_DIR_ENV: Final[str] = "SPHERICAL_MERCATOR_CONFIG_DIR"


class ProjectionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tile_size: int = Field(default=DEFAULT_TILE_SIZE, gt=0)
    tms_style: bool = False
    srs: Projection = Projection.WGS84

    @field_validator("srs", mode="before")
    @classmethod
    def _parse_srs(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return Projection.parse(value)
            except UnsupportedProjectionError as exc:
                raise ValueError(str(exc)) from exc
        return value


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class ProjectionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _absolute(path: Union[str, Path]) -> Path:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = (Path.cwd() / candidate).resolve()
    return candidate


def _resolve_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    if environ is None:
        environ = os.environ
    explicit = environ.get(DEFAULT_CONFIG_DIR_ENV)
    if explicit:
        return _absolute(explicit)

    cwd = Path.cwd()
    for candidate_root in (cwd, *cwd.parents):
        config_dir = candidate_root / "config"
        if (config_dir / DEFAULT_PROJECTION_CONFIG_NAME).is_file():
            return config_dir

    return cwd / "config"


def _resolve_config_path(path: Optional[Union[str, Path]]) -> Path:
    if path is not None:
        return _absolute(path)

    explicit = os.environ.get(DEFAULT_PROJECTION_CONFIG_ENV)
    if explicit:
        return _absolute(explicit)

    return _resolve_config_dir(os.environ) / DEFAULT_PROJECTION_CONFIG_NAME


def _parse_yaml(text: str, *, source: Path) -> Mapping[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to load projection YAML: {source}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"projection config must be a mapping: {source}")
    return data


def load_projection_config(
    path: Optional[Union[str, Path]] = None,
) -> ProjectionConfig:
    config_path = _resolve_config_path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"projection config file not found: {config_path}")

    raw = config_path.read_text(encoding="utf-8")
    data = dict(_parse_yaml(raw, source=config_path))

    try:
        return ProjectionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid projection config ({config_path}): {exc}") from exc


@lru_cache(maxsize=8)
def _get_projection_config_cached(
    config_path: str, mtime_ns: int, size: int
) -> ProjectionConfig:
    _ = (mtime_ns, size)
    return load_projection_config(config_path)


def get_projection_config(
    path: Optional[Union[str, Path]] = None,
) -> ProjectionConfig:
    resolved = _resolve_config_path(path)
    try:
        stat = resolved.stat()
    except FileNotFoundError as exc:
        raise FileNotFoundError(
            f"projection config file not found: {resolved}"
        ) from exc

    return _get_projection_config_cached(str(resolved), stat.st_mtime_ns, stat.st_size)


get_projection_config.cache_clear = _get_projection_config_cached.cache_clear  # type: ignore[attr-defined]
