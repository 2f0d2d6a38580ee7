"""検索ドキュメント HTTP クライアント実装"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import partial
from typing import Any, TypeVar
from urllib.parse import quote

from .batch import IndexDocumentsBatch, build_index_batch, classify_index_response
from .client import SearchClient
from .config import SearchClientConfig
from .continuation import decode_continuation_token
from .exceptions import (
    DeserializationError,
    DocumentNotFoundError,
    IndexBatchError,
    RequestTimeoutError,
    SearchDocumentsError,
    TransportError,
)
from .logger import get_logger
from .mapping import map_autocomplete_page, map_search_page, map_suggest_page
from .models import (
    AutocompleteItem,
    AutocompleteRequest,
    IndexActionType,
    IndexDocumentsResult,
    SearchDocument,
    SearchRequest,
    SearchResult,
    SuggestRequest,
    SuggestResult,
)
from .options import (
    AutocompleteOptions,
    IndexDocumentsOptions,
    RequestOptions,
    SearchOptions,
    SuggestOptions,
)
from .paging import Page, PagedResults, SearchPagedResults
from .request_builder import (
    build_autocomplete_request,
    build_search_request,
    build_suggest_request,
)
from .serializer import JsonSerializer
from .transport import HttpxTransport, Transport, TransportResponse

T = TypeVar("T")

logger = get_logger(__name__)


def _headers(request_options: RequestOptions | None) -> dict[str, str] | None:
    if request_options is None:
        return None
    return request_options.to_headers() or None


class HttpSearchClient(SearchClient):
    """トランスポート経由で検索サービスを呼び出すクライアント。

    transport を省略すると httpx ベースの HttpxTransport を使う。
    """

    def __init__(
        self, config: SearchClientConfig, transport: Transport | None = None
    ) -> None:
        self._config = config
        self._transport: Transport = transport or HttpxTransport(config)
        self._serializer = JsonSerializer(include_nulls=True)
        self._api_version = str(config.service_version)
        self._docs_path = f"/indexes/{quote(config.index_name, safe='')}/docs"
        self._log = logger.bind(index=config.index_name)

    @property
    def index_name(self) -> str:
        return self._config.index_name

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def _send(
        self,
        method: str,
        path: str,
        context: str,
        json_body: Any = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        try:
            resp = await self._transport.send(
                method, path, json_body=json_body, headers=headers, params=params
            )
        except SearchDocumentsError:
            raise
        except TimeoutError as e:
            raise RequestTimeoutError(f"{context}: timed out", cause=e) from e
        except Exception as e:
            raise TransportError(f"{context}: {e}", cause=e) from e
        self._handle_error(resp, context)
        return resp

    def _handle_error(self, resp: TransportResponse, context: str) -> None:
        if not 200 <= resp.status_code < 300:
            self._log.warning(
                "request_failed", operation=context, status_code=resp.status_code
            )
            raise TransportError(
                f"{context}: HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

    # -- search / suggest / autocomplete ---------------------------------

    def search(
        self,
        search_text: str | None,
        options: SearchOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> SearchPagedResults[SearchResult]:
        request = build_search_request(search_text, options)
        return SearchPagedResults(
            request,
            partial(self._search_page, headers=_headers(request_options)),
            self._search_request_from_token,
        )

    def _search_request_from_token(self, token: str) -> SearchRequest:
        return decode_continuation_token(self._api_version, token).to_search_request()

    async def _search_page(
        self, request: SearchRequest, headers: Mapping[str, str] | None = None
    ) -> Page[SearchResult]:
        resp = await self._send(
            "POST",
            f"{self._docs_path}/search.post.search",
            "search",
            request.to_dict(),
            headers=headers,
        )
        page = map_search_page(resp.body, self._api_version)
        self._log.debug(
            "search_page_fetched",
            results=len(page.results),
            skip=request.skip,
            has_next=page.continuation_token is not None,
        )
        return page

    def suggest(
        self,
        search_text: str,
        suggester_name: str,
        options: SuggestOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> PagedResults[SuggestResult]:
        request = build_suggest_request(search_text, suggester_name, options)
        return PagedResults(
            request, partial(self._suggest_page, headers=_headers(request_options))
        )

    async def _suggest_page(
        self, request: SuggestRequest, headers: Mapping[str, str] | None = None
    ) -> Page[SuggestResult]:
        resp = await self._send(
            "POST",
            f"{self._docs_path}/search.post.suggest",
            "suggest",
            request.to_dict(),
            headers=headers,
        )
        return map_suggest_page(resp.body)

    def autocomplete(
        self,
        search_text: str,
        suggester_name: str,
        options: AutocompleteOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> PagedResults[AutocompleteItem]:
        request = build_autocomplete_request(search_text, suggester_name, options)
        return PagedResults(
            request, partial(self._autocomplete_page, headers=_headers(request_options))
        )

    async def _autocomplete_page(
        self, request: AutocompleteRequest, headers: Mapping[str, str] | None = None
    ) -> Page[AutocompleteItem]:
        resp = await self._send(
            "POST",
            f"{self._docs_path}/search.post.autocomplete",
            "autocomplete",
            request.to_dict(),
            headers=headers,
        )
        return map_autocomplete_page(resp.body)

    # -- indexing -------------------------------------------------------

    async def index_documents(
        self,
        batch: IndexDocumentsBatch[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        resp = await self._send(
            "POST",
            f"{self._docs_path}/search.index",
            "index_documents",
            batch.to_dict(self._serializer),
            headers=_headers(request_options),
        )
        try:
            result = classify_index_response(resp.status_code, resp.body, len(batch), options)
        except IndexBatchError as e:
            self._log.warning(
                "index_batch_partial_failure",
                status_code=resp.status_code,
                actions=len(batch),
                failed_keys=[r.key for r in e.failed_results()],
            )
            raise
        self._log.info(
            "index_batch_completed",
            status_code=resp.status_code,
            actions=len(batch),
            failed=sum(1 for r in result.results if not r.succeeded),
        )
        return result

    async def upload_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        return await self.index_documents(
            build_index_batch(documents, IndexActionType.UPLOAD), options, request_options
        )

    async def merge_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        return await self.index_documents(
            build_index_batch(documents, IndexActionType.MERGE), options, request_options
        )

    async def merge_or_upload_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        return await self.index_documents(
            build_index_batch(documents, IndexActionType.MERGE_OR_UPLOAD),
            options,
            request_options,
        )

    async def delete_documents(
        self,
        documents: Iterable[Any],
        options: IndexDocumentsOptions | None = None,
        request_options: RequestOptions | None = None,
    ) -> IndexDocumentsResult:
        return await self.index_documents(
            build_index_batch(documents, IndexActionType.DELETE), options, request_options
        )

    # -- lookup ---------------------------------------------------------

    async def get_document(
        self,
        key: str,
        model: type[T] = SearchDocument,  # type: ignore[assignment]
        selected_fields: list[str] | None = None,
        request_options: RequestOptions | None = None,
    ) -> T:
        params = {"$select": ",".join(selected_fields)} if selected_fields is not None else None
        context = f"get_document({key})"
        try:
            resp = await self._send(
                "GET",
                f"{self._docs_path}/{quote(key, safe='')}",
                context,
                params=params,
                headers=_headers(request_options),
            )
        except TransportError as e:
            if e.status_code == 404:
                raise DocumentNotFoundError(key) from e
            raise
        return self._serializer.deserialize(resp.body, model)

    async def get_document_count(
        self, request_options: RequestOptions | None = None
    ) -> int:
        resp = await self._send(
            "GET",
            f"{self._docs_path}/$count",
            "get_document_count",
            headers=_headers(request_options),
        )
        if not isinstance(resp.body, int) or isinstance(resp.body, bool):
            raise DeserializationError(
                f"get_document_count: expected an integer, got {resp.body!r}",
                target="int",
            )
        return resp.body
