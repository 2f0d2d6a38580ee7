"""検索・サジェスト・オートコンプリート・インデックスのオプション"""

from __future__ import annotations

from dataclasses import dataclass

from .models import AutocompleteMode, QueryType, ScoringParameter, SearchMode


@dataclass
class SearchOptions:
    """検索オプション。None は未指定 (ペイロードから省略) を表す。

    highlight_pre_tag と highlight_post_tag は両方指定するか両方省略する。
    """

    search_mode: SearchMode | None = None
    query_type: QueryType | None = None
    facets: list[str] | None = None
    filter: str | None = None
    highlight_fields: list[str] | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    include_total_count: bool | None = None
    minimum_coverage: float | None = None
    order_by: list[str] | None = None
    scoring_parameters: list[ScoringParameter | str] | None = None
    scoring_profile: str | None = None
    search_fields: list[str] | None = None
    select: list[str] | None = None
    skip: int | None = None
    top: int | None = None


@dataclass
class SuggestOptions:
    """サジェストオプション。"""

    filter: str | None = None
    use_fuzzy_matching: bool | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    minimum_coverage: float | None = None
    order_by: list[str] | None = None
    search_fields: list[str] | None = None
    select: list[str] | None = None
    top: int | None = None


@dataclass
class AutocompleteOptions:
    """オートコンプリートオプション。"""

    autocomplete_mode: AutocompleteMode | None = None
    filter: str | None = None
    use_fuzzy_matching: bool | None = None
    highlight_pre_tag: str | None = None
    highlight_post_tag: str | None = None
    minimum_coverage: float | None = None
    search_fields: list[str] | None = None
    top: int | None = None


CLIENT_REQUEST_ID_HEADER = "x-ms-client-request-id"


@dataclass
class RequestOptions:
    """リクエスト単位のオプション。

    client_request_id はトラッキング用 ID として x-ms-client-request-id ヘッダーで送信する。
    """

    client_request_id: str | None = None

    def to_headers(self) -> dict[str, str]:
        if self.client_request_id is None:
            return {}
        return {CLIENT_REQUEST_ID_HEADER: self.client_request_id}


@dataclass
class IndexDocumentsOptions:
    """インデックスオプション。

    throw_on_any_error が True の場合、HTTP 207 で IndexBatchError を送出する。
    """

    throw_on_any_error: bool = True
