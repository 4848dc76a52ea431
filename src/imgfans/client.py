"""Imgfans client – public entry-point."""

from __future__ import annotations

import logging

import httpx

from imgfans.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig, Settings
from imgfans.errors import UNEXPECTED_ERROR, ConfigurationError, ImgfansError, TransportError
from imgfans.schemas.upload import UploadResult
from imgfans.services import reference_service
from imgfans.services.input_service import UploadInput, normalize_input
from imgfans.services.reference_service import UploadResponse
from imgfans.services.transport_service import send_upload

logger = logging.getLogger(__name__)


class ImgfansClient:
    """
    Upload images to Imgfans with automatic input type detection.

    The client holds nothing but immutable configuration, so one instance
    may serve any number of concurrent ``upload`` calls.
    """

    def __init__(
        self,
        token: str | None,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            token: API token sent as ``Authorization: Bearer <token>``.
            base_url: API root, defaults to ``DEFAULT_BASE_URL``.
            timeout: request timeout in seconds for uploads and URL fetches.
            transport: custom httpx transport (proxies, tests, ...).
        """
        if not isinstance(token, str) or not token.strip():
            raise ConfigurationError("API token is required for initialization")

        self.config = ClientConfig(
            token=token,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
        self._transport = transport
        logger.debug("ImgfansClient initialized for %s", self.config.base_url)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ImgfansClient:
        """Build a client from ``IMGFANS_*`` environment settings."""
        if settings is None:
            settings = Settings()
        return cls(
            settings.token,
            settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def upload(self, source: UploadInput, filename: str | None = None) -> UploadResult:
        """
        Upload an image.

        Args:
            source: URL, file path, base64 data URI, bytes, blob-like object
                (async ``read()``) or binary stream.
            filename: optional custom filename.

        Returns:
            The parsed upload result.
        """
        try:
            prepared = await normalize_input(
                source,
                filename,
                timeout=self.config.timeout,
                transport=self._transport,
            )
            try:
                return await send_upload(prepared, self.config, transport=self._transport)
            finally:
                prepared.close()
        except ImgfansError:
            raise
        except httpx.HTTPError as exc:
            raise TransportError.from_http_error(exc) from exc
        except Exception as exc:
            logger.warning("Upload failed unexpectedly: %r", exc)
            raise ImgfansError(str(exc) or UNEXPECTED_ERROR, cause=exc) from exc

    # ── reference accessors ──
    def get_direct_link(self, response: UploadResponse) -> str:
        return reference_service.get_direct_link(response)

    def get_download_link(self, response: UploadResponse) -> str:
        return reference_service.get_download_link(response)

    def get_bbcode(self, response: UploadResponse) -> str:
        return reference_service.get_bbcode(response)

    def get_markdown_code(self, response: UploadResponse) -> str:
        return reference_service.get_markdown_code(response)

    def get_html_code(self, response: UploadResponse) -> str:
        return reference_service.get_html_code(response)

    def get_all_references(self, response: UploadResponse) -> dict[str, str]:
        return reference_service.get_all_references(response)
