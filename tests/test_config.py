"""設定読み込みのユニットテスト"""

from pathlib import Path

import pytest

from k1s0_search_documents import (
    ConfigError,
    SearchClientConfig,
    SearchDocumentsErrorCodes,
    ServiceVersion,
    load_config,
)


def test_config_defaults() -> None:
    """デフォルト値が設定されること。"""
    config = SearchClientConfig(endpoint="https://search.example.com", index_name="hotels")
    assert config.service_version == ServiceVersion.latest()
    assert config.timeout_seconds == 10.0
    assert config.api_key == ""
    assert config.log_format == "json"


def test_load_config_with_env_override(tmp_path: Path) -> None:
    """環境別ファイルがベースに上書きマージされること。"""
    base = tmp_path / "config.yaml"
    base.write_text(
        "endpoint: https://search.example.com\n"
        "index_name: hotels\n"
        "service_version: 2019-05-06-Preview\n"
    )
    env = tmp_path / "config.prod.yaml"
    env.write_text("index_name: hotels-prod\ntimeout_seconds: 3\n")

    config = load_config(base, env)
    assert config.index_name == "hotels-prod"
    assert config.timeout_seconds == 3.0
    assert config.service_version == ServiceVersion.V2019_05_06_PREVIEW


def test_load_config_missing_env_file_is_ignored(tmp_path: Path) -> None:
    """存在しない環境別ファイルは無視されること。"""
    base = tmp_path / "config.yaml"
    base.write_text("endpoint: https://search.example.com\nindex_name: hotels\n")
    config = load_config(base, tmp_path / "missing.yaml")
    assert config.index_name == "hotels"


def test_load_config_missing_file(tmp_path: Path) -> None:
    """ファイルが読めなければ ConfigError になること。"""
    with pytest.raises(ConfigError) as exc_info:
        load_config(tmp_path / "nope.yaml")
    assert exc_info.value.code == SearchDocumentsErrorCodes.CONFIG_ERROR


def test_load_config_invalid_yaml(tmp_path: Path) -> None:
    """YAML として不正なら ConfigError になること。"""
    base = tmp_path / "config.yaml"
    base.write_text("endpoint: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(base)


@pytest.mark.parametrize(
    "content",
    [
        "index_name: hotels\n",
        "endpoint: x\nindex_name: hotels\ntimeout_seconds: 0\n",
        "endpoint: x\nindex_name: hotels\nservice_version: 1999-01-01\n",
        "- a\n- b\n",
    ],
)
def test_load_config_validation_error(tmp_path: Path, content: str) -> None:
    """検証に失敗すると ConfigError になること。"""
    base = tmp_path / "config.yaml"
    base.write_text(content)
    with pytest.raises(ConfigError):
        load_config(base)
