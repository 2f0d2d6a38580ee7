"""search_documents ライブラリの例外型定義"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import IndexDocumentsResult, IndexingResult


class SearchDocumentsError(Exception):
    """search_documents ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class SearchDocumentsErrorCodes:
    """SearchDocumentsError のエラーコード定数。"""

    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    DOCUMENT_NOT_FOUND: str = "DOCUMENT_NOT_FOUND"
    INDEX_BATCH_PARTIAL_FAILURE: str = "INDEX_BATCH_PARTIAL_FAILURE"
    INVALID_CONTINUATION_TOKEN: str = "INVALID_CONTINUATION_TOKEN"
    UNSUPPORTED_OPTION_VALUE: str = "UNSUPPORTED_OPTION_VALUE"
    DESERIALIZATION_ERROR: str = "DESERIALIZATION_ERROR"
    TIMEOUT: str = "TIMEOUT"
    CONFIG_ERROR: str = "CONFIG_ERROR"


class TransportError(SearchDocumentsError):
    """HTTP 通信の失敗。インデックスへの反映は保証されない。"""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
        code: str = SearchDocumentsErrorCodes.TRANSPORT_ERROR,
    ) -> None:
        super().__init__(code=code, message=message, cause=cause)
        self.status_code = status_code


class DocumentNotFoundError(TransportError):
    """指定キーのドキュメントが存在しない。"""

    def __init__(self, key: str) -> None:
        super().__init__(
            message=f"document not found: {key}",
            status_code=404,
            code=SearchDocumentsErrorCodes.DOCUMENT_NOT_FOUND,
        )
        self.key = key


class IndexBatchError(SearchDocumentsError):
    """バッチの一部アクションが失敗した (HTTP 207)。

    成功したアクションは既にインデックスへ反映済みのため、
    全アクション分の結果を順序どおり保持する。
    """

    def __init__(self, result: IndexDocumentsResult) -> None:
        failed = [r.key for r in result.results if not r.succeeded]
        super().__init__(
            code=SearchDocumentsErrorCodes.INDEX_BATCH_PARTIAL_FAILURE,
            message=(
                f"{len(failed)} of {len(result.results)} index actions failed: "
                f"{', '.join(str(k) for k in failed)}"
            ),
        )
        self.result = result

    @property
    def results(self) -> list[IndexingResult]:
        """全アクションの結果 (成功・失敗の両方を含む)。"""
        return self.result.results

    def failed_results(self) -> list[IndexingResult]:
        return [r for r in self.result.results if not r.succeeded]


class InvalidContinuationTokenError(SearchDocumentsError):
    """継続トークンが不正、またはサービスバージョンが一致しない。

    回復可能なエラー。1 ページ目から検索をやり直すこと。
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            code=SearchDocumentsErrorCodes.INVALID_CONTINUATION_TOKEN,
            message=message,
            cause=cause,
        )


class UnsupportedOptionValueError(SearchDocumentsError):
    """ワイヤ表現に対応しないオプション値。"""

    def __init__(self, option: str, value: Any) -> None:
        super().__init__(
            code=SearchDocumentsErrorCodes.UNSUPPORTED_OPTION_VALUE,
            message=f"unsupported value for {option}: {value!r}",
        )
        self.option = option
        self.value = value


class DeserializationError(SearchDocumentsError):
    """レスポンスの形状が期待する型と一致しない。"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        target: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=SearchDocumentsErrorCodes.DESERIALIZATION_ERROR,
            message=message,
            cause=cause,
        )
        self.field = field
        self.target = target


class RequestTimeoutError(SearchDocumentsError):
    """トランスポート層でのタイムアウト。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            code=SearchDocumentsErrorCodes.TIMEOUT,
            message=message,
            cause=cause,
        )


class ConfigError(SearchDocumentsError):
    """設定ファイルの読み込み・検証エラー。"""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(
            code=SearchDocumentsErrorCodes.CONFIG_ERROR,
            message=message,
            cause=cause,
        )
