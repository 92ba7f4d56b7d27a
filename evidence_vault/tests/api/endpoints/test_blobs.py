from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from evidence_vault.api.endpoints.blobs import read_blob, store_blob
from evidence_vault.exceptions import EndpointAttemptFailed
from evidence_vault.models.storage import BlobStatus
from evidence_vault.tests.utils.mock_transport import already_certified, newly_created

PUBLISHER = "https://pub-1.test"
AGGREGATOR = "https://agg-1.test"


def _response(status_code: int = 200, *, json_data=None, content: bytes = b"") -> httpx.Response:
    request = httpx.Request("GET", "https://example.test")
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, request=request)
    return httpx.Response(status_code, content=content, request=request)


@pytest.fixture
def mock_http() -> Mock:
    return Mock()


@pytest.mark.asyncio
async def test_store_blob_parses_newly_created(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(json_data=newly_created("blob-1", "0xabc")))

    stored = await store_blob(mock_http, PUBLISHER, b"data", epochs=5)

    assert stored.blob_id == "blob-1"
    assert stored.status == BlobStatus.NEWLY_CREATED
    assert stored.object_id == "0xabc"
    assert stored.endpoint == PUBLISHER


@pytest.mark.asyncio
async def test_store_blob_parses_already_certified(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(json_data=already_certified("blob-2")))

    stored = await store_blob(mock_http, PUBLISHER, b"data", epochs=5)

    assert stored.blob_id == "blob-2"
    assert stored.status == BlobStatus.ALREADY_CERTIFIED


@pytest.mark.asyncio
async def test_store_blob_puts_to_blobs_path_with_epochs(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(json_data=newly_created("blob-1")))

    await store_blob(mock_http, PUBLISHER + "/", b"data", epochs=7)

    mock_http.request.assert_awaited_once_with(
        "PUT", "https://pub-1.test/v1/blobs", content=b"data", params={"epochs": 7}
    )


@pytest.mark.asyncio
async def test_store_blob_raises_on_error_status(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(500))

    with pytest.raises(EndpointAttemptFailed) as exc_info:
        await store_blob(mock_http, PUBLISHER, b"data", epochs=5)

    assert exc_info.value.status_code == 500
    assert exc_info.value.endpoint == PUBLISHER


@pytest.mark.asyncio
async def test_store_blob_raises_on_invalid_json(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(content=b"<html>oops</html>"))

    with pytest.raises(EndpointAttemptFailed, match="Invalid JSON"):
        await store_blob(mock_http, PUBLISHER, b"data", epochs=5)


@pytest.mark.parametrize(
    "body",
    [
        {},
        [],
        {"somethingElse": {}},
        {"newlyCreated": {}},
        {"newlyCreated": {"blobObject": {"blobId": ""}}},
        {"alreadyCertified": {"blobId": 42}},
    ],
)
@pytest.mark.asyncio
async def test_store_blob_raises_on_unknown_shape(mock_http: Mock, body) -> None:
    mock_http.request = AsyncMock(return_value=_response(json_data=body))

    with pytest.raises(EndpointAttemptFailed):
        await store_blob(mock_http, PUBLISHER, b"data", epochs=5)


@pytest.mark.asyncio
async def test_store_blob_translates_transport_error(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(EndpointAttemptFailed, match="ConnectError") as exc_info:
        await store_blob(mock_http, PUBLISHER, b"data", epochs=5)

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_read_blob_returns_content(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(content=b"\x00sealed\xff"))

    data = await read_blob(mock_http, AGGREGATOR, "blob-1")

    assert data == b"\x00sealed\xff"
    mock_http.request.assert_awaited_once_with(
        "GET", "https://agg-1.test/v1/blobs/blob-1", content=None, params=None
    )


@pytest.mark.asyncio
async def test_read_blob_raises_on_not_found(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(return_value=_response(404))

    with pytest.raises(EndpointAttemptFailed) as exc_info:
        await read_blob(mock_http, AGGREGATOR, "missing")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_read_blob_translates_timeout(mock_http: Mock) -> None:
    mock_http.request = AsyncMock(side_effect=TimeoutError())

    with pytest.raises(EndpointAttemptFailed, match="timed out"):
        await read_blob(mock_http, AGGREGATOR, "blob-1")


@pytest.mark.parametrize(
    ("blob_id", "expected_url"),
    [
        ("abc#def", "https://agg-1.test/v1/blobs/abc%23def"),
        ("abc?x=1", "https://agg-1.test/v1/blobs/abc%3Fx%3D1"),
        ("../admin", "https://agg-1.test/v1/blobs/..%2Fadmin"),
        ("Zq-_base64url", "https://agg-1.test/v1/blobs/Zq-_base64url"),
    ],
)
@pytest.mark.asyncio
async def test_read_blob_escapes_handle(mock_http: Mock, blob_id: str, expected_url: str) -> None:
    mock_http.request = AsyncMock(return_value=_response(content=b"data"))

    await read_blob(mock_http, AGGREGATOR, blob_id)

    mock_http.request.assert_awaited_once_with("GET", expected_url, content=None, params=None)
