"""k1s0 search documents client library."""

from .batch import (
    MULTI_STATUS_CODE,
    IndexAction,
    IndexDocumentsBatch,
    build_index_batch,
    classify_index_response,
)
from .client import SearchClient
from .config import SearchClientConfig, load_config
from .continuation import (
    ContinuationToken,
    create_continuation_token,
    decode_continuation_token,
    encode_continuation_token,
)
from .exceptions import (
    ConfigError,
    DeserializationError,
    DocumentNotFoundError,
    IndexBatchError,
    InvalidContinuationTokenError,
    RequestTimeoutError,
    SearchDocumentsError,
    SearchDocumentsErrorCodes,
    TransportError,
    UnsupportedOptionValueError,
)
from .http_client import HttpSearchClient
from .logger import configure_logging, get_logger, init_logging
from .models import (
    AutocompleteItem,
    AutocompleteMode,
    AutocompleteRequest,
    FacetResult,
    IndexActionType,
    IndexDocumentsResult,
    IndexingResult,
    QueryType,
    ScoringParameter,
    SearchDocument,
    SearchMode,
    SearchRequest,
    SearchResult,
    ServiceVersion,
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

__all__ = [
    "AutocompleteItem",
    "AutocompleteMode",
    "AutocompleteOptions",
    "AutocompleteRequest",
    "ConfigError",
    "ContinuationToken",
    "DeserializationError",
    "DocumentNotFoundError",
    "FacetResult",
    "HttpSearchClient",
    "HttpxTransport",
    "IndexAction",
    "IndexActionType",
    "IndexBatchError",
    "IndexDocumentsBatch",
    "IndexDocumentsOptions",
    "IndexDocumentsResult",
    "IndexingResult",
    "InvalidContinuationTokenError",
    "JsonSerializer",
    "MULTI_STATUS_CODE",
    "Page",
    "PagedResults",
    "QueryType",
    "RequestOptions",
    "RequestTimeoutError",
    "ScoringParameter",
    "SearchClient",
    "SearchClientConfig",
    "SearchDocument",
    "SearchDocumentsError",
    "SearchDocumentsErrorCodes",
    "SearchMode",
    "SearchOptions",
    "SearchPagedResults",
    "SearchRequest",
    "SearchResult",
    "ServiceVersion",
    "SuggestOptions",
    "SuggestRequest",
    "SuggestResult",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnsupportedOptionValueError",
    "build_autocomplete_request",
    "build_index_batch",
    "build_search_request",
    "build_suggest_request",
    "classify_index_response",
    "configure_logging",
    "create_continuation_token",
    "decode_continuation_token",
    "encode_continuation_token",
    "get_logger",
    "init_logging",
    "load_config",
]
