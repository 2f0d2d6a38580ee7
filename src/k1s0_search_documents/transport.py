"""HTTP トランスポート"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .config import SearchClientConfig
from .exceptions import DeserializationError, RequestTimeoutError, TransportError


@dataclass(frozen=True)
class TransportResponse:
    """HTTP ステータスコードとデコード済み JSON ボディ。"""

    status_code: int
    body: Any = None
    text: str = ""


class Transport(Protocol):
    """JSON ボディを送受信するトランスポート。

    リトライ・タイムアウト・キャンセルはトランスポート側の責務。
    """

    async def send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse: ...


class HttpxTransport:
    """httpx を使ったトランスポート。"""

    def __init__(self, config: SearchClientConfig) -> None:
        self._config = config
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if config.api_key:
            headers["api-key"] = config.api_key
        self._headers = headers

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.endpoint,
            headers=self._headers,
            params={"api-version": str(self._config.service_version)},
            timeout=self._config.timeout_seconds,
        )

    async def send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        try:
            async with self._make_client() as client:
                resp = await client.request(
                    method,
                    path,
                    json=json_body,
                    headers=dict(headers) if headers else None,
                    params=dict(params) if params else None,
                )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"{method} {path}: timed out: {e}", cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path}: {e}", cause=e) from e

        body: Any = None
        if resp.content and resp.is_success:
            try:
                body = resp.json()
            except ValueError as e:
                # JSONDecodeError と UnicodeDecodeError の両方
                raise DeserializationError(
                    f"{method} {path}: response is not valid JSON", cause=e
                ) from e
        return TransportResponse(status_code=resp.status_code, body=body, text=resp.text)
