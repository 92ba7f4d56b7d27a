"""Blob store/read endpoints of Walrus-style publishers and aggregators."""

from typing import Any
from urllib.parse import quote

import httpx

from evidence_vault.api.http_client import AsyncHttpClient
from evidence_vault.exceptions import EndpointAttemptFailed
from evidence_vault.models.storage import BlobStatus, StoredBlob


async def store_blob(
    http: AsyncHttpClient, publisher: str, data: bytes, *, epochs: int
) -> StoredBlob:
    """
    Store a blob on one publisher.

    Both "newly created" and "already certified" responses count as success.

    Raises:
        EndpointAttemptFailed: On transport error, timeout, non-2xx status
            or an unrecognized response body.
    """
    url = f"{publisher.rstrip('/')}/v1/blobs"
    response = await _send(http, "PUT", url, publisher, content=data, params={"epochs": epochs})

    try:
        body = response.json()
    except ValueError as e:
        msg = "Invalid JSON response from publisher"
        raise EndpointAttemptFailed(
            msg, endpoint=publisher, status_code=response.status_code
        ) from e

    return _parse_store_response(body, publisher)


async def read_blob(http: AsyncHttpClient, aggregator: str, blob_id: str) -> bytes:
    """
    Read a blob from one aggregator.

    Raises:
        EndpointAttemptFailed: On transport error, timeout or non-2xx status.
    """
    # Handles are opaque; escape them so they stay one path segment.
    url = f"{aggregator.rstrip('/')}/v1/blobs/{quote(blob_id, safe='')}"
    response = await _send(http, "GET", url, aggregator)
    return response.content


async def _send(
    http: AsyncHttpClient,
    method: str,
    url: str,
    endpoint: str,
    *,
    content: bytes | None = None,
    params: dict[str, Any] | None = None,
) -> httpx.Response:
    try:
        response = await http.request(method, url, content=content, params=params)
    except TimeoutError as e:
        msg = "Request timed out"
        raise EndpointAttemptFailed(msg, endpoint=endpoint) from e
    except httpx.HTTPError as e:
        msg = f"Request failed: {type(e).__name__}: {e}"
        raise EndpointAttemptFailed(msg, endpoint=endpoint) from e

    if not response.is_success:
        msg = f"Status {response.status_code}: {response.reason_phrase}"
        raise EndpointAttemptFailed(msg, endpoint=endpoint, status_code=response.status_code)
    return response


def _parse_store_response(body: Any, publisher: str) -> StoredBlob:
    if not isinstance(body, dict):
        msg = "Invalid response structure from publisher"
        raise EndpointAttemptFailed(msg, endpoint=publisher)

    try:
        if (created := body.get(BlobStatus.NEWLY_CREATED)) is not None:
            blob_object = created["blobObject"]
            return StoredBlob(
                blob_id=_require_blob_id(blob_object["blobId"], publisher),
                status=BlobStatus.NEWLY_CREATED,
                endpoint=publisher,
                object_id=blob_object.get("id"),
            )
        if (certified := body.get(BlobStatus.ALREADY_CERTIFIED)) is not None:
            return StoredBlob(
                blob_id=_require_blob_id(certified["blobId"], publisher),
                status=BlobStatus.ALREADY_CERTIFIED,
                endpoint=publisher,
                object_id=certified.get("object"),
            )
    except (KeyError, TypeError, AttributeError) as e:
        msg = f"Missing field in publisher response: {e}"
        raise EndpointAttemptFailed(msg, endpoint=publisher) from e

    msg = "Invalid response structure from publisher"
    raise EndpointAttemptFailed(msg, endpoint=publisher)


def _require_blob_id(value: Any, publisher: str) -> str:
    if isinstance(value, str) and value:
        return value
    msg = f"Invalid blob ID in publisher response: {value!r}"
    raise EndpointAttemptFailed(msg, endpoint=publisher)
