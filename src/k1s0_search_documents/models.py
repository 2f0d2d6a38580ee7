"""検索ドキュメント API のデータモデル"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any, TypeVar

from .serializer import JsonSerializer

T = TypeVar("T")


class ServiceVersion(StrEnum):
    """検索サービスの API バージョン。"""

    V2019_05_06_PREVIEW = "2019-05-06-Preview"
    V2020_06_30 = "2020-06-30"

    @classmethod
    def latest(cls) -> ServiceVersion:
        return cls.V2020_06_30


class SearchMode(StrEnum):
    """検索語のマッチ方法。"""

    ANY = "ANY"
    ALL = "ALL"


class QueryType(StrEnum):
    """クエリ構文。"""

    SIMPLE = "SIMPLE"
    FULL = "FULL"


class AutocompleteMode(StrEnum):
    """オートコンプリートの補完方法。"""

    ONE_TERM = "ONE_TERM"
    TWO_TERMS = "TWO_TERMS"
    ONE_TERM_WITH_CONTEXT = "ONE_TERM_WITH_CONTEXT"


class IndexActionType(StrEnum):
    """インデックスアクション種別 (値はワイヤ表現)。"""

    UPLOAD = "upload"
    MERGE = "merge"
    MERGE_OR_UPLOAD = "mergeOrUpload"
    DELETE = "delete"


@dataclass(frozen=True)
class ScoringParameter:
    """スコアリング関数のパラメータ。"""

    name: str
    values: tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.name}-{','.join(self.values)}"


def _to_wire(request: Any, wire_names: Mapping[str, str]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for f in fields(request):
        value = getattr(request, f.name)
        if value is None:
            continue
        data[wire_names[f.name]] = list(value) if isinstance(value, tuple) else value
    return data


_SEARCH_WIRE_NAMES = {
    "search_text": "search",
    "search_mode": "searchMode",
    "facets": "facets",
    "filter": "filter",
    "highlight_fields": "highlightFields",
    "highlight_post_tag": "highlightPostTag",
    "highlight_pre_tag": "highlightPreTag",
    "include_total_result_count": "includeTotalResultCount",
    "minimum_coverage": "minimumCoverage",
    "order_by": "orderby",
    "query_type": "queryType",
    "scoring_parameters": "scoringParameters",
    "scoring_profile": "scoringProfile",
    "search_fields": "searchFields",
    "select": "select",
    "skip": "skip",
    "top": "top",
}

_SUGGEST_WIRE_NAMES = {
    "search_text": "search",
    "suggester_name": "suggesterName",
    "filter": "filter",
    "use_fuzzy_matching": "fuzzy",
    "highlight_post_tag": "highlightPostTag",
    "highlight_pre_tag": "highlightPreTag",
    "minimum_coverage": "minimumCoverage",
    "order_by": "orderby",
    "search_fields": "searchFields",
    "select": "select",
    "top": "top",
}

_AUTOCOMPLETE_WIRE_NAMES = {
    "search_text": "search",
    "suggester_name": "suggesterName",
    "autocomplete_mode": "autocompleteMode",
    "filter": "filter",
    "use_fuzzy_matching": "fuzzy",
    "highlight_post_tag": "highlightPostTag",
    "highlight_pre_tag": "highlightPreTag",
    "minimum_coverage": "minimumCoverage",
    "search_fields": "searchFields",
    "top": "top",
}


@dataclass(frozen=True)
class SearchRequest:
    """検索リクエスト (ワイヤ形式)。

    リスト値のフィールドはカンマ区切り文字列で保持する。
    None のフィールドはペイロードから省略される。
    """

    search_text: str | None = None
    search_mode: str | None = None
    facets: tuple[str, ...] | None = None
    filter: str | None = None
    highlight_fields: str | None = None
    highlight_post_tag: str | None = None
    highlight_pre_tag: str | None = None
    include_total_result_count: bool | None = None
    minimum_coverage: float | None = None
    order_by: str | None = None
    query_type: str | None = None
    scoring_parameters: tuple[str, ...] | None = None
    scoring_profile: str | None = None
    search_fields: str | None = None
    select: str | None = None
    skip: int | None = None
    top: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _to_wire(self, _SEARCH_WIRE_NAMES)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchRequest:
        """ワイヤ形式の辞書から SearchRequest を復元する。未知のキーは無視する。"""
        kwargs: dict[str, Any] = {}
        for name, wire_name in _SEARCH_WIRE_NAMES.items():
            value = data.get(wire_name)
            if isinstance(value, list):
                value = tuple(value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class SuggestRequest:
    """サジェストリクエスト (ワイヤ形式)。"""

    search_text: str
    suggester_name: str
    filter: str | None = None
    use_fuzzy_matching: bool | None = None
    highlight_post_tag: str | None = None
    highlight_pre_tag: str | None = None
    minimum_coverage: float | None = None
    order_by: str | None = None
    search_fields: str | None = None
    select: str | None = None
    top: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _to_wire(self, _SUGGEST_WIRE_NAMES)


@dataclass(frozen=True)
class AutocompleteRequest:
    """オートコンプリートリクエスト (ワイヤ形式)。"""

    search_text: str
    suggester_name: str
    autocomplete_mode: str | None = None
    filter: str | None = None
    use_fuzzy_matching: bool | None = None
    highlight_post_tag: str | None = None
    highlight_pre_tag: str | None = None
    minimum_coverage: float | None = None
    search_fields: str | None = None
    top: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _to_wire(self, _AUTOCOMPLETE_WIRE_NAMES)


class SearchDocument(dict[str, Any]):
    """型指定なしの全フィールドマップとして扱うドキュメント。"""


_default_serializer = JsonSerializer()


@dataclass
class SearchResult:
    """検索結果の 1 行。"""

    score: float
    document: SearchDocument
    highlights: dict[str, list[str]] | None = None

    def get_document(self, model: type[T] = SearchDocument) -> T:  # type: ignore[assignment]
        """ドキュメントを指定の型に変換して返す。"""
        return _default_serializer.deserialize(self.document, model)


@dataclass
class FacetResult:
    """ファセットの 1 バケット。範囲ファセットは from/to を持つ。"""

    count: int | None = None
    value: Any = None
    from_value: Any = None
    to_value: Any = None


@dataclass
class SuggestResult:
    """サジェスト結果の 1 行。"""

    text: str
    document: SearchDocument

    def get_document(self, model: type[T] = SearchDocument) -> T:  # type: ignore[assignment]
        return _default_serializer.deserialize(self.document, model)


@dataclass
class AutocompleteItem:
    """オートコンプリート結果の 1 行。"""

    text: str
    query_plus_text: str


@dataclass
class IndexingResult:
    """インデックスアクション 1 件の結果。"""

    key: str
    succeeded: bool
    status_code: int
    error_message: str | None = None


@dataclass
class IndexDocumentsResult:
    """バッチ全体の結果。results はアクションと同じ順序。"""

    results: list[IndexingResult] = field(default_factory=list)
    status_code: int = 200
