"""継続トークンのエンコード・デコード

トークンは次の JSON オブジェクトを URL セーフ base64 でエンコードしたもの::

    {"apiVersion": "2020-06-30",
     "nextLink": "https://.../docs/search.post.search?api-version=2020-06-30",
     "nextPageParameters": {"search": "hotel", "skip": 50, ...}}

トークンは生成したサービスバージョンでのみ有効。
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import InvalidContinuationTokenError
from .models import SearchRequest

_API_VERSION = "apiVersion"
_NEXT_LINK = "nextLink"
_NEXT_PAGE_PARAMETERS = "nextPageParameters"


@dataclass(frozen=True)
class ContinuationToken:
    """デコード済みの継続トークン。"""

    api_version: str
    next_link: str | None
    next_page_parameters: dict[str, Any]

    def to_search_request(self) -> SearchRequest:
        """次のページを取得する検索リクエストを組み立てる。"""
        return SearchRequest.from_dict(self.next_page_parameters)


def encode_continuation_token(
    api_version: str,
    next_link: str | None,
    next_page_parameters: Mapping[str, Any],
) -> str:
    """次ページの状態を不透明なトークン文字列にエンコードする。"""
    payload = {
        _API_VERSION: str(api_version),
        _NEXT_LINK: next_link,
        _NEXT_PAGE_PARAMETERS: dict(next_page_parameters),
    }
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True)
    return base64.urlsafe_b64encode(raw.encode()).decode()


def create_continuation_token(
    api_version: str,
    next_link: str | None,
    next_page_parameters: Mapping[str, Any] | None,
) -> str | None:
    """トークンを返す。次のページがない場合は None。"""
    if next_page_parameters is None:
        return None
    return encode_continuation_token(api_version, next_link, next_page_parameters)


def decode_continuation_token(api_version: str, token: str) -> ContinuationToken:
    """encode_continuation_token で生成したトークンをデコードする。

    Raises:
        InvalidContinuationTokenError: 形式が不正、または別のサービスバージョンのトークンの場合
    """
    try:
        raw = base64.urlsafe_b64decode(token.encode())
        payload = json.loads(raw)
    except (binascii.Error, ValueError, AttributeError) as e:
        raise InvalidContinuationTokenError("malformed continuation token", cause=e) from e

    if not isinstance(payload, dict):
        raise InvalidContinuationTokenError("malformed continuation token: not an object")
    missing = [k for k in (_API_VERSION, _NEXT_PAGE_PARAMETERS) if k not in payload]
    if missing:
        raise InvalidContinuationTokenError(
            f"malformed continuation token: missing {', '.join(missing)}"
        )

    token_version = payload[_API_VERSION]
    if token_version != str(api_version):
        raise InvalidContinuationTokenError(
            f"continuation token was created for api version {token_version!r}, "
            f"client uses {str(api_version)!r}"
        )

    next_link = payload.get(_NEXT_LINK)
    parameters = payload[_NEXT_PAGE_PARAMETERS]
    if not isinstance(parameters, dict) or not (
        next_link is None or isinstance(next_link, str)
    ):
        raise InvalidContinuationTokenError("malformed continuation token: bad field types")

    return ContinuationToken(
        api_version=token_version,
        next_link=next_link,
        next_page_parameters=parameters,
    )
