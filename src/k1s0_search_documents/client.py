"""SearchClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, TypeVar

from .batch import IndexDocumentsBatch
from .models import (
    AutocompleteItem,
    IndexDocumentsResult,
    SearchDocument,
    SearchResult,
    SuggestResult,
)
from .options import (
    AutocompleteOptions,
    IndexDocumentsOptions,
    RequestOptions,
    SearchOptions,
    SuggestOptions,
)
from .paging import PagedResults, SearchPagedResults

T = TypeVar("T")


class SearchClient(ABC):
    """1 つのインデックスに対する検索クライアント抽象基底クラス。

    各操作は request_options でリクエスト単位のトラッキング ID を受け取る。
    """

    @abstractmethod
    def search(
        self,
        search_text: str | None,
        options: SearchOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> SearchPagedResults[SearchResult]:
        """検索する。ページは遅延取得される。"""
        ...

    @abstractmethod
    def suggest(
        self,
        search_text: str,
        suggester_name: str,
        options: SuggestOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> PagedResults[SuggestResult]:
        """サジェストを取得する。"""
        ...

    @abstractmethod
    def autocomplete(
        self,
        search_text: str,
        suggester_name: str,
        options: AutocompleteOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> PagedResults[AutocompleteItem]:
        """オートコンプリート候補を取得する。"""
        ...

    @abstractmethod
    async def index_documents(
        self,
        batch: IndexDocumentsBatch[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        """アクションのバッチを送信する。"""
        ...

    @abstractmethod
    async def upload_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult: ...

    @abstractmethod
    async def merge_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult: ...

    @abstractmethod
    async def merge_or_upload_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult: ...

    @abstractmethod
    async def delete_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult: ...

    @abstractmethod
    async def get_document(
        self,
        key: str,
        model: type[T] = SearchDocument,  # type: ignore[assignment]
        selected_fields: list[str] | None = None,
        request_options: RequestOptions | None = None,
    ) -> T:
        """キーでドキュメントを 1 件取得する。"""
        ...

    @abstractmethod
    async def get_document_count(
        self, request_options: RequestOptions | None = None
    ) -> int:
        """インデックス内のドキュメント数を取得する。"""
        ...
