"""テスト共通フィクスチャ"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from k1s0_search_documents import SearchClientConfig, TransportResponse

ENDPOINT = "https://search.example.com"
INDEX = "hotels"

# (method, path, json_body, params, headers)
Call = tuple[str, str, Any, Mapping[str, str] | None, Mapping[str, str] | None]


class FakeTransport:
    """パスごとに登録したレスポンスを順に返すインメモリトランスポート。"""

    def __init__(self) -> None:
        self._responses: dict[str, list[TransportResponse | BaseException]] = {}
        self.calls: list[Call] = []

    def add(self, path_suffix: str, status_code: int = 200, body: Any = None) -> None:
        self._responses.setdefault(path_suffix, []).append(
            TransportResponse(status_code=status_code, body=body, text=str(body))
        )

    def add_error(self, path_suffix: str, error: BaseException) -> None:
        self._responses.setdefault(path_suffix, []).append(error)

    def calls_to(self, path_suffix: str) -> list[Call]:
        return [c for c in self.calls if c[1].endswith(path_suffix)]

    async def send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        self.calls.append((method, path, json_body, params, headers))
        for suffix, queue in self._responses.items():
            if path.endswith(suffix) and queue:
                item = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(item, BaseException):
                    raise item
                return item
        raise AssertionError(f"unexpected request: {method} {path}")


@pytest.fixture
def config() -> SearchClientConfig:
    return SearchClientConfig(endpoint=ENDPOINT, index_name=INDEX, api_key="secret")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
