"""ワイヤ形式のレスポンスを公開モデルに変換する"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .continuation import create_continuation_token
from .exceptions import DeserializationError
from .models import (
    AutocompleteItem,
    FacetResult,
    IndexingResult,
    SearchDocument,
    SearchResult,
    SuggestResult,
)
from .paging import Page

_SCORE = "@search.score"
_HIGHLIGHTS = "@search.highlights"
_TEXT = "@search.text"
_COUNT = "@odata.count"
_COVERAGE = "@search.coverage"
_FACETS = "@search.facets"
_NEXT_LINK = "@odata.nextLink"
_NEXT_PAGE_PARAMETERS = "@search.nextPageParameters"


def _rows(body: Any, operation: str) -> list[dict[str, Any]]:
    if not isinstance(body, Mapping):
        raise DeserializationError(
            f"{operation}: response body must be an object", target=operation
        )
    rows = body.get("value")
    if not isinstance(rows, list):
        raise DeserializationError(
            f"{operation}: 'value' must be a list", field="value", target=operation
        )
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise DeserializationError(
                f"{operation}: value[{i}] must be an object",
                field=f"value[{i}]",
                target=operation,
            )
    return rows


def _require(row: Mapping[str, Any], key: str, operation: str, index: int) -> Any:
    if key not in row:
        raise DeserializationError(
            f"{operation}: value[{index}] is missing {key!r}",
            field=f"value[{index}].{key}",
            target=operation,
        )
    return row[key]


def _document(row: Mapping[str, Any]) -> SearchDocument:
    return SearchDocument({k: v for k, v in row.items() if not k.startswith("@search.")})


def map_search_result(row: Mapping[str, Any], index: int = 0) -> SearchResult:
    score = _require(row, _SCORE, "search", index)
    return SearchResult(
        score=score,
        document=_document(row),
        highlights=row.get(_HIGHLIGHTS),
    )


def map_facets(raw: Any) -> dict[str, list[FacetResult]] | None:
    """フィールド名 -> ファセットバケット列。順序はレスポンスのまま。"""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise DeserializationError("search: facets must be an object", field=_FACETS)
    facets: dict[str, list[FacetResult]] = {}
    for name, buckets in raw.items():
        if not isinstance(buckets, list) or not all(isinstance(b, Mapping) for b in buckets):
            raise DeserializationError(
                f"search: facet {name!r} must be a list of objects", field=f"{_FACETS}.{name}"
            )
        facets[name] = [
            FacetResult(
                count=b.get("count"),
                value=b.get("value"),
                from_value=b.get("from"),
                to_value=b.get("to"),
            )
            for b in buckets
        ]
    return facets


def map_search_page(body: Any, api_version: str) -> Page[SearchResult]:
    """検索レスポンス 1 ページ分を Page に変換する。"""
    rows = _rows(body, "search")
    next_link = body.get(_NEXT_LINK)
    if next_link is not None and not isinstance(next_link, str):
        raise DeserializationError(
            "search: next link must be a string", field=_NEXT_LINK, target="search"
        )
    next_page_parameters = body.get(_NEXT_PAGE_PARAMETERS)
    if next_page_parameters is not None and not isinstance(next_page_parameters, Mapping):
        raise DeserializationError(
            "search: next page parameters must be an object",
            field=_NEXT_PAGE_PARAMETERS,
            target="search",
        )
    return Page(
        results=[map_search_result(row, i) for i, row in enumerate(rows)],
        continuation_token=create_continuation_token(
            api_version, next_link, next_page_parameters
        ),
        count=body.get(_COUNT),
        coverage=body.get(_COVERAGE),
        facets=map_facets(body.get(_FACETS)),
    )


def map_suggest_page(body: Any) -> Page[SuggestResult]:
    rows = _rows(body, "suggest")
    results = [
        SuggestResult(text=_require(row, _TEXT, "suggest", i), document=_document(row))
        for i, row in enumerate(rows)
    ]
    return Page(results=results, coverage=body.get(_COVERAGE))


def map_autocomplete_page(body: Any) -> Page[AutocompleteItem]:
    rows = _rows(body, "autocomplete")
    results = [
        AutocompleteItem(
            text=_require(row, "text", "autocomplete", i),
            query_plus_text=_require(row, "queryPlusText", "autocomplete", i),
        )
        for i, row in enumerate(rows)
    ]
    return Page(results=results, coverage=body.get(_COVERAGE))


def map_indexing_results(body: Any) -> list[IndexingResult]:
    """インデックスレスポンスの各行を IndexingResult に変換する。"""
    rows = _rows(body, "index")
    return [
        IndexingResult(
            key=_require(row, "key", "index", i),
            succeeded=bool(_require(row, "status", "index", i)),
            status_code=_require(row, "statusCode", "index", i),
            error_message=row.get("errorMessage"),
        )
        for i, row in enumerate(rows)
    ]
