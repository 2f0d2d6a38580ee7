"""オプションからワイヤ形式のリクエストを組み立てる"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .exceptions import UnsupportedOptionValueError
from .models import (
    AutocompleteMode,
    AutocompleteRequest,
    QueryType,
    ScoringParameter,
    SearchMode,
    SearchRequest,
    SuggestRequest,
)
from .options import AutocompleteOptions, SearchOptions, SuggestOptions

SEARCH_MODE_WIRE: Mapping[Any, str] = {
    SearchMode.ANY: "any",
    SearchMode.ALL: "all",
}

QUERY_TYPE_WIRE: Mapping[Any, str] = {
    QueryType.SIMPLE: "simple",
    QueryType.FULL: "full",
}

AUTOCOMPLETE_MODE_WIRE: Mapping[Any, str] = {
    AutocompleteMode.ONE_TERM: "oneTerm",
    AutocompleteMode.TWO_TERMS: "twoTerms",
    AutocompleteMode.ONE_TERM_WITH_CONTEXT: "oneTermWithContext",
}


def _translate(option: str, value: Any, table: Mapping[Any, str]) -> str | None:
    if value is None:
        return None
    try:
        return table[value]
    except (KeyError, TypeError):
        raise UnsupportedOptionValueError(option, value) from None


def join_fields(values: list[str] | None) -> str | None:
    """リストをカンマ区切りにする。None は None、空リストは空文字列のまま区別する。"""
    if values is None:
        return None
    return ",".join(values)


def _scoring_parameters(
    values: list[ScoringParameter | str] | None,
) -> tuple[str, ...] | None:
    if values is None:
        return None
    return tuple(str(v) for v in values)


def build_search_request(
    search_text: str | None, options: SearchOptions | None = None
) -> SearchRequest:
    """検索テキストとオプションから SearchRequest を組み立てる。"""
    if options is None:
        return SearchRequest(search_text=search_text)
    return SearchRequest(
        search_text=search_text,
        search_mode=_translate("search_mode", options.search_mode, SEARCH_MODE_WIRE),
        facets=tuple(options.facets) if options.facets is not None else None,
        filter=options.filter,
        highlight_fields=join_fields(options.highlight_fields),
        highlight_post_tag=options.highlight_post_tag,
        highlight_pre_tag=options.highlight_pre_tag,
        include_total_result_count=options.include_total_count,
        minimum_coverage=options.minimum_coverage,
        order_by=join_fields(options.order_by),
        query_type=_translate("query_type", options.query_type, QUERY_TYPE_WIRE),
        scoring_parameters=_scoring_parameters(options.scoring_parameters),
        scoring_profile=options.scoring_profile,
        search_fields=join_fields(options.search_fields),
        select=join_fields(options.select),
        skip=options.skip,
        top=options.top,
    )


def build_suggest_request(
    search_text: str, suggester_name: str, options: SuggestOptions | None = None
) -> SuggestRequest:
    """検索テキストとサジェスター名から SuggestRequest を組み立てる。"""
    if options is None:
        return SuggestRequest(search_text=search_text, suggester_name=suggester_name)
    return SuggestRequest(
        search_text=search_text,
        suggester_name=suggester_name,
        filter=options.filter,
        use_fuzzy_matching=options.use_fuzzy_matching,
        highlight_post_tag=options.highlight_post_tag,
        highlight_pre_tag=options.highlight_pre_tag,
        minimum_coverage=options.minimum_coverage,
        order_by=join_fields(options.order_by),
        search_fields=join_fields(options.search_fields),
        select=join_fields(options.select),
        top=options.top,
    )


def build_autocomplete_request(
    search_text: str,
    suggester_name: str,
    options: AutocompleteOptions | None = None,
) -> AutocompleteRequest:
    """検索テキストとサジェスター名から AutocompleteRequest を組み立てる。"""
    if options is None:
        return AutocompleteRequest(search_text=search_text, suggester_name=suggester_name)
    return AutocompleteRequest(
        search_text=search_text,
        suggester_name=suggester_name,
        autocomplete_mode=_translate(
            "autocomplete_mode", options.autocomplete_mode, AUTOCOMPLETE_MODE_WIRE
        ),
        filter=options.filter,
        use_fuzzy_matching=options.use_fuzzy_matching,
        highlight_post_tag=options.highlight_post_tag,
        highlight_pre_tag=options.highlight_pre_tag,
        minimum_coverage=options.minimum_coverage,
        search_fields=join_fields(options.search_fields),
        top=options.top,
    )
