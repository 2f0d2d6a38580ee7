"""ドキュメントのバッチインデックス"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .exceptions import DeserializationError, IndexBatchError
from .mapping import map_indexing_results
from .models import IndexActionType, IndexDocumentsResult
from .options import IndexDocumentsOptions
from .serializer import JsonSerializer

T = TypeVar("T")

MULTI_STATUS_CODE = 207

_ACTION_KEY = "@search.action"


@dataclass
class IndexAction(Generic[T]):
    """ドキュメント 1 件に対するアクション。"""

    action_type: IndexActionType
    document: T

    def to_dict(self, serializer: JsonSerializer) -> dict[str, Any]:
        data = serializer.serialize(self.document)
        data.pop(_ACTION_KEY, None)
        return {_ACTION_KEY: str(self.action_type), **data}


@dataclass
class IndexDocumentsBatch(Generic[T]):
    """順序付きのアクション列。結果の i 行目はアクション i に対応する。"""

    actions: list[IndexAction[T]] = field(default_factory=list)

    def _add(self, documents: Iterable[T], action_type: IndexActionType) -> IndexDocumentsBatch[T]:
        self.actions.extend(IndexAction(action_type, d) for d in documents)
        return self

    def add_upload_actions(self, documents: Iterable[T]) -> IndexDocumentsBatch[T]:
        return self._add(documents, IndexActionType.UPLOAD)

    def add_merge_actions(self, documents: Iterable[T]) -> IndexDocumentsBatch[T]:
        return self._add(documents, IndexActionType.MERGE)

    def add_merge_or_upload_actions(self, documents: Iterable[T]) -> IndexDocumentsBatch[T]:
        return self._add(documents, IndexActionType.MERGE_OR_UPLOAD)

    def add_delete_actions(self, documents: Iterable[T]) -> IndexDocumentsBatch[T]:
        return self._add(documents, IndexActionType.DELETE)

    def __len__(self) -> int:
        return len(self.actions)

    def to_dict(self, serializer: JsonSerializer) -> dict[str, Any]:
        return {"value": [a.to_dict(serializer) for a in self.actions]}


def build_index_batch(
    documents: Iterable[T], action_type: IndexActionType
) -> IndexDocumentsBatch[T]:
    """全ドキュメントに同じアクション種別を付けたバッチを作る。入力順を保つ。"""
    return IndexDocumentsBatch(actions=[IndexAction(action_type, d) for d in documents])


def classify_index_response(
    status_code: int,
    body: Any,
    action_count: int,
    options: IndexDocumentsOptions | None = None,
) -> IndexDocumentsResult:
    """2xx のインデックスレスポンスを結果に変換する。

    207 かつ throw_on_any_error の場合は IndexBatchError を送出する。
    例外にも全アクション分の結果が含まれる。
    """
    options = options or IndexDocumentsOptions()
    results = map_indexing_results(body)
    if len(results) != action_count:
        raise DeserializationError(
            f"index: expected {action_count} results, got {len(results)}",
            field="value",
            target="index",
        )
    result = IndexDocumentsResult(results=results, status_code=status_code)
    if status_code == MULTI_STATUS_CODE and options.throw_on_any_error:
        raise IndexBatchError(result)
    return result
