"""Service layer – multipart upload to the Imgfans API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from imgfans.config import UPLOAD_FIELD, UPLOAD_PATH, ClientConfig
from imgfans.errors import InvalidResponseError, TransportError, response_payload
from imgfans.schemas.upload import UploadResult
from imgfans.services.input_service import InputKind, PreparedFile

logger = logging.getLogger(__name__)


async def _materialize(prepared: PreparedFile):
    """Content in a form the multipart encoder accepts."""
    if prepared.kind is InputKind.BLOB:
        return await prepared.content.read()
    return prepared.content


def parse_upload_result(response: httpx.Response) -> UploadResult:
    """Validate a successful response body against :class:`UploadResult`."""
    payload = response_payload(response)
    try:
        return UploadResult.model_validate(payload)
    except ValidationError as exc:
        raise InvalidResponseError(
            "Invalid response format from server",
            status_code=response.status_code,
            response=payload,
            cause=exc,
        ) from exc


async def send_upload(
    prepared: PreparedFile,
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UploadResult:
    """
    POST *prepared* as the multipart ``file`` field to ``{base_url}/upload``.

    Raises ``TransportError`` for any non-2xx answer or network failure and
    ``InvalidResponseError`` when a 2xx body does not look like an upload
    result.
    """
    logger.debug("Uploading %s (%s) to %s", prepared.filename, prepared.kind.value, config.base_url)
    try:
        files = {UPLOAD_FIELD: (prepared.filename, await _materialize(prepared))}
        async with httpx.AsyncClient(
            base_url=config.base_url,
            headers=config.headers,
            timeout=config.timeout,
            transport=transport,
        ) as client:
            response = await client.post(UPLOAD_PATH, files=files)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        error = TransportError.from_http_error(exc)
        logger.warning("Upload of %s failed: %s", prepared.filename, error)
        raise error from exc

    result = parse_upload_result(response)
    logger.info("Uploaded %s as %s", prepared.filename, result.file.url)
    return result
