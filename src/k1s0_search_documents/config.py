"""クライアント設定と設定ファイル読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .models import ServiceVersion


class SearchClientConfig(BaseModel):
    """検索クライアント設定。"""

    endpoint: str
    index_name: str
    api_key: str = ""
    service_version: ServiceVersion = Field(default_factory=ServiceVersion.latest)
    timeout_seconds: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """base と override をディープマージして新しい辞書を返す。override が優先。"""
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {path}", cause=e) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {path}", cause=e) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def load_config(base_path: Path, env_path: Path | None = None) -> SearchClientConfig:
    """設定ファイルを読み込んで SearchClientConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    try:
        return SearchClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed: {e}", cause=e) from e
