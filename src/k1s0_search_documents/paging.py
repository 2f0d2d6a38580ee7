"""検索・サジェスト・オートコンプリートの遅延ページシーケンス"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import InvalidContinuationTokenError
from .models import FacetResult

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Page(Generic[T]):
    """結果 1 ページ分。"""

    results: list[T]
    continuation_token: str | None = None
    count: int | None = None
    coverage: float | None = None
    facets: dict[str, list[FacetResult]] | None = None


class PagedResults(Generic[T]):
    """継続トークンで辿るページシーケンス。

    最初のページはキャッシュされ、トークンなしの next_page() を再度呼んでも
    リクエストは発行しない。2 ページ目以降はキャッシュしない。
    最初のページを同時に取得した場合は両方がキャッシュに書き込み、
    後勝ちになる (内容は同等)。
    """

    def __init__(
        self,
        request: R,
        fetch: Callable[[R], Awaitable[Page[T]]],
        request_from_token: Callable[[str], R] | None = None,
    ) -> None:
        self._request = request
        self._fetch = fetch
        self._request_from_token = request_from_token
        self._first_page: Page[T] | None = None

    @property
    def request(self) -> Any:
        return self._request

    async def next_page(self, continuation_token: str | None = None) -> Page[T]:
        """continuation_token が示すページを取得する。None は最初のページ。"""
        if continuation_token is None:
            if self._first_page is not None:
                return self._first_page
            page = await self._fetch(self._request)
            self._first_page = page
            return page

        if self._request_from_token is None:
            raise InvalidContinuationTokenError(
                "this operation does not support continuation tokens"
            )
        # トークンのエラーはリクエスト送信前に送出する
        request = self._request_from_token(continuation_token)
        return await self._fetch(request)

    async def by_page(
        self, continuation_token: str | None = None
    ) -> AsyncIterator[Page[T]]:
        """continuation_token から始め、トークンが返らなくなるまでページを列挙する。"""
        token = continuation_token
        while True:
            page = await self.next_page(token)
            yield page
            token = page.continuation_token
            if token is None:
                return

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.by_page():
            for item in page.results:
                yield item

    async def to_list(self) -> list[T]:
        return [item async for item in self]


class SearchPagedResults(PagedResults[T]):
    """検索結果のページ。メタデータは最初のページから読む。"""

    async def get_count(self) -> int | None:
        """総件数。include_total_count を指定しなかった場合は None。"""
        return (await self.next_page()).count

    async def get_coverage(self) -> float | None:
        return (await self.next_page()).coverage

    async def get_facets(self) -> dict[str, list[FacetResult]] | None:
        return (await self.next_page()).facets
