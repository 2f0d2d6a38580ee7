"""ドキュメントの JSON シリアライザ"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar, is_typeddict

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from .exceptions import DeserializationError

T = TypeVar("T")

_adapters: dict[Any, TypeAdapter[Any]] = {}


def _adapter(model: Any) -> TypeAdapter[Any]:
    adapter = _adapters.get(model)
    if adapter is None:
        adapter = TypeAdapter(model)
        _adapters[model] = adapter
    return adapter


def _is_field_map(model: Any) -> bool:
    return isinstance(model, type) and issubclass(model, dict) and not is_typeddict(model)


class JsonSerializer:
    """呼び出し側ドキュメントとワイヤ形式の辞書を相互変換する。

    include_nulls=True の場合、値が None のフィールドもペイロードに含める。
    merge アクションで None を送るとサーバー側のフィールドがクリアされるため、
    クライアントは常に include_nulls=True で使用する。
    """

    def __init__(self, include_nulls: bool = True) -> None:
        self.include_nulls = include_nulls

    def serialize(self, document: Any) -> dict[str, Any]:
        """dict / dataclass / pydantic モデルをワイヤ形式の辞書に変換する。"""
        if isinstance(document, Mapping):
            data = dict(document)
        else:
            try:
                data = _adapter(type(document)).dump_python(
                    document, mode="json", by_alias=True
                )
            except PydanticSchemaGenerationError as e:
                raise TypeError(
                    f"unsupported document type: {type(document).__name__}"
                ) from e
            if not isinstance(data, dict):
                raise TypeError(
                    f"document must serialize to an object: {type(document).__name__}"
                )
        if not self.include_nulls:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def deserialize(self, data: Any, model: type[T]) -> T:
        """ワイヤ形式の辞書を model 型に変換する。

        dict (SearchDocument を含む) はそのまま包み直し、再変換を行わない。
        """
        if _is_field_map(model):
            if not isinstance(data, Mapping):
                raise DeserializationError(
                    f"expected an object for {model.__name__}, got {type(data).__name__}",
                    target=model.__name__,
                )
            return model(data)  # type: ignore[call-arg]
        target = getattr(model, "__name__", repr(model))
        try:
            return _adapter(model).validate_python(data)
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first["loc"]) or None
            raise DeserializationError(
                f"cannot convert document to {target}: {first['msg']}"
                + (f" (field: {loc})" if loc else ""),
                field=loc,
                target=target,
                cause=e,
            ) from e
        except PydanticSchemaGenerationError as e:
            raise DeserializationError(
                f"unsupported target type: {target}",
                target=target,
                cause=e,
            ) from e
