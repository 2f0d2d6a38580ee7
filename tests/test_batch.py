"""バッチインデックスのユニットテスト"""

from dataclasses import dataclass

import pytest

from k1s0_search_documents import (
    DeserializationError,
    HttpSearchClient,
    IndexActionType,
    IndexBatchError,
    IndexDocumentsBatch,
    IndexDocumentsOptions,
    JsonSerializer,
    RequestOptions,
    SearchClientConfig,
    SearchDocumentsErrorCodes,
    TransportError,
    build_index_batch,
    classify_index_response,
)

from conftest import FakeTransport

INDEX_PATH = "/search.index"

MIXED_BODY = {
    "value": [
        {"key": "1", "status": True, "errorMessage": None, "statusCode": 201},
        {"key": "2", "status": False, "errorMessage": "Document is malformed", "statusCode": 400},
        {"key": "3", "status": True, "errorMessage": None, "statusCode": 200},
    ]
}


@dataclass
class Hotel:
    id: str
    name: str | None = None
    rating: float | None = None


def test_build_index_batch_preserves_order() -> None:
    """同じアクション種別で入力順にバッチが作られること。"""
    batch = build_index_batch([{"id": "b"}, {"id": "a"}, {"id": "c"}], IndexActionType.MERGE)
    assert [a.document["id"] for a in batch.actions] == ["b", "a", "c"]
    assert {a.action_type for a in batch.actions} == {IndexActionType.MERGE}


def test_mixed_batch_wire_format() -> None:
    """異なるアクションを含むバッチが順序どおりワイヤ形式になること。"""
    batch: IndexDocumentsBatch[object] = IndexDocumentsBatch()
    batch.add_upload_actions([Hotel(id="1", name="A")])
    batch.add_merge_actions([{"id": "2", "rating": None}])
    batch.add_merge_or_upload_actions([Hotel(id="3")])
    batch.add_delete_actions([{"id": "4"}])

    assert batch.to_dict(JsonSerializer(include_nulls=True)) == {
        "value": [
            {"@search.action": "upload", "id": "1", "name": "A", "rating": None},
            {"@search.action": "merge", "id": "2", "rating": None},
            {"@search.action": "mergeOrUpload", "id": "3", "name": None, "rating": None},
            {"@search.action": "delete", "id": "4"},
        ]
    }


def test_classify_multi_status_raises_with_all_results() -> None:
    """207 では全行を持つ IndexBatchError が送出されること。"""
    with pytest.raises(IndexBatchError) as exc_info:
        classify_index_response(207, MIXED_BODY, 3, IndexDocumentsOptions())

    err = exc_info.value
    assert err.code == SearchDocumentsErrorCodes.INDEX_BATCH_PARTIAL_FAILURE
    assert len(err.results) == 3
    assert [r.key for r in err.results] == ["1", "2", "3"]
    assert err.results[1].succeeded is False
    assert err.results[0].succeeded is True
    assert err.results[2].succeeded is True
    assert err.results[1].error_message == "Document is malformed"
    assert [r.key for r in err.failed_results()] == ["2"]
    assert err.result.status_code == 207


def test_classify_multi_status_without_throw() -> None:
    """throw_on_any_error=False では同じ結果が正常値として返ること。"""
    result = classify_index_response(
        207, MIXED_BODY, 3, IndexDocumentsOptions(throw_on_any_error=False)
    )
    with pytest.raises(IndexBatchError) as exc_info:
        classify_index_response(207, MIXED_BODY, 3)
    assert result.results == exc_info.value.results
    assert result.status_code == 207


def test_classify_ok_never_raises() -> None:
    """200 は行の内容に関わらず例外にならないこと。"""
    result = classify_index_response(200, MIXED_BODY, 3, IndexDocumentsOptions())
    assert result.status_code == 200
    assert result.results[1].succeeded is False


def test_classify_row_count_mismatch() -> None:
    """結果行数がアクション数と違えば DeserializationError になること。"""
    with pytest.raises(DeserializationError):
        classify_index_response(200, MIXED_BODY, 2)


async def test_index_documents_partial_failure(
    config: SearchClientConfig, transport: FakeTransport
) -> None:
    """クライアント経由でも 207 が IndexBatchError になること。"""
    transport.add(INDEX_PATH, status_code=207, body=MIXED_BODY)
    client = HttpSearchClient(config, transport)
    batch = IndexDocumentsBatch[dict[str, str]]().add_upload_actions(
        [{"id": "1"}, {"id": "2"}, {"id": "3"}]
    )

    with pytest.raises(IndexBatchError) as exc_info:
        await client.index_documents(batch)
    assert [r.succeeded for r in exc_info.value.results] == [True, False, True]


async def test_upload_documents_partial_failure_returned(
    config: SearchClientConfig, transport: FakeTransport
) -> None:
    """throw_on_any_error=False なら 207 でも結果が返ること。"""
    transport.add(INDEX_PATH, status_code=207, body=MIXED_BODY)
    client = HttpSearchClient(config, transport)

    result = await client.upload_documents(
        [Hotel(id="1"), Hotel(id="2"), Hotel(id="3")],
        IndexDocumentsOptions(throw_on_any_error=False),
    )

    assert [r.key for r in result.results] == ["1", "2", "3"]
    sent = transport.calls_to(INDEX_PATH)[0][2]
    assert [a["@search.action"] for a in sent["value"]] == ["upload"] * 3


@pytest.mark.parametrize(
    ("method", "action"),
    [
        ("merge_documents", "merge"),
        ("merge_or_upload_documents", "mergeOrUpload"),
        ("delete_documents", "delete"),
    ],
)
async def test_homogeneous_batch_helpers(
    config: SearchClientConfig, transport: FakeTransport, method: str, action: str
) -> None:
    """各ヘルパーが対応するアクション種別で送信すること。"""
    transport.add(
        INDEX_PATH,
        body={"value": [{"key": "1", "status": True, "statusCode": 200}]},
    )
    client = HttpSearchClient(config, transport)
    result = await getattr(client, method)([{"id": "1"}])
    assert result.results[0].succeeded is True
    assert transport.calls_to(INDEX_PATH)[0][2]["value"][0]["@search.action"] == action


async def test_index_documents_server_error(
    config: SearchClientConfig, transport: FakeTransport
) -> None:
    """207 以外の失敗ステータスは TransportError になること。"""
    transport.add(INDEX_PATH, status_code=503, body=None)
    client = HttpSearchClient(config, transport)
    with pytest.raises(TransportError) as exc_info:
        await client.upload_documents([{"id": "1"}])
    assert exc_info.value.status_code == 503
    assert not isinstance(exc_info.value, IndexBatchError)


async def test_upload_documents_sends_client_request_id(
    config: SearchClientConfig, transport: FakeTransport
) -> None:
    """request_options の client_request_id がヘッダーとして渡されること。"""
    transport.add(INDEX_PATH, body={"value": [{"key": "1", "status": True, "statusCode": 201}]})
    client = HttpSearchClient(config, transport)

    await client.upload_documents(
        [{"id": "1"}], request_options=RequestOptions(client_request_id="trace-1")
    )
    await client.upload_documents([{"id": "1"}])

    headers = [c[4] for c in transport.calls_to(INDEX_PATH)]
    assert headers == [{"x-ms-client-request-id": "trace-1"}, None]
