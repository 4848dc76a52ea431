"""Service layer – turn whatever the caller hands us into an uploadable file.

Inputs are classified by an ordered chain of predicates; the first match
wins and the order must stay as it is:

    URL prefix → base64 data URI → existing local file → buffer → blob → stream

Strings matching none of the string rules are rejected with
``InvalidInputError``; objects matching none of the object rules with
``UnsupportedInputTypeError``.
"""

from __future__ import annotations

import base64
import binascii
import enum
import inspect
import io
import logging
import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Protocol, Union
from urllib.parse import urlsplit

import httpx

from imgfans.config import DEFAULT_FILENAME, DEFAULT_TIMEOUT
from imgfans.errors import InvalidInputError, TransportError, UnsupportedInputTypeError

logger = logging.getLogger(__name__)

URL_PREFIXES = ("http://", "https://")
DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>.+?);base64,(?P<payload>.+)$", re.DOTALL)


class AsyncReadable(Protocol):
    """Blob-like source, e.g. starlette's ``UploadFile``."""

    async def read(self) -> bytes: ...


UploadInput = Union[str, os.PathLike, bytes, bytearray, memoryview, AsyncReadable, BinaryIO]


class InputKind(enum.Enum):
    URL = "url"
    DATA_URI = "data_uri"
    PATH = "path"
    BUFFER = "buffer"
    BLOB = "blob"
    STREAM = "stream"


@dataclass(frozen=True)
class PreparedFile:
    """A byte source ready to be sent as the multipart ``file`` field."""

    kind: InputKind
    content: Any
    filename: str
    owned: bool = False

    def close(self) -> None:
        """Close the underlying handle if this package opened it."""
        if self.owned:
            self.content.close()


# ──────────────────────────────────────────────
# Classification
# ──────────────────────────────────────────────
def _is_url(source: Any) -> bool:
    return isinstance(source, str) and source.startswith(URL_PREFIXES)


def _is_data_uri(source: Any) -> bool:
    return isinstance(source, str) and DATA_URI_PATTERN.match(source) is not None


def _is_local_file(source: Any) -> bool:
    if not isinstance(source, (str, os.PathLike)):
        return False
    try:
        return Path(source).is_file()
    except (OSError, ValueError, TypeError):
        # e.g. names too long for the filesystem, NUL bytes, bytes from __fspath__
        return False


def _is_buffer(source: Any) -> bool:
    return isinstance(source, (bytes, bytearray, memoryview))


def _is_blob(source: Any) -> bool:
    return inspect.iscoroutinefunction(getattr(source, "read", None))


def _is_stream(source: Any) -> bool:
    if isinstance(source, io.TextIOBase):
        return False
    return callable(getattr(source, "read", None))


_CLASSIFIERS = (
    (InputKind.URL, _is_url),
    (InputKind.DATA_URI, _is_data_uri),
    (InputKind.PATH, _is_local_file),
    (InputKind.BUFFER, _is_buffer),
    (InputKind.BLOB, _is_blob),
    (InputKind.STREAM, _is_stream),
)


def classify_input(source: Any) -> InputKind:
    """Return the kind of *source*, or raise if it is not uploadable."""
    for kind, matches in _CLASSIFIERS:
        if matches(source):
            return kind

    if isinstance(source, (str, os.PathLike)):
        raise InvalidInputError(
            "Invalid input: must be a valid URL, file path, or base64 string",
        )
    raise UnsupportedInputTypeError(
        f"Unsupported input type: {type(source).__name__}",
    )


# ──────────────────────────────────────────────
# Filename helpers
# ──────────────────────────────────────────────
def filename_from_url(url: str) -> str:
    """Base name of the URL path, or the default name when the path has none."""
    return posixpath.basename(urlsplit(url).path) or DEFAULT_FILENAME


def decode_data_uri(data_uri: str) -> bytes:
    """Decode the base64 payload of a ``data:<mime>;base64,<payload>`` URI."""
    match = DATA_URI_PATTERN.match(data_uri)
    if match is None:
        raise InvalidInputError("Invalid input: not a base64 data URI")
    try:
        return base64.b64decode(match.group("payload"))
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(
            "Invalid input: data URI payload is not valid base64",
            cause=exc,
        ) from exc


async def fetch_remote_file(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Download *url* and return the full response body."""
    logger.debug("Fetching remote image %s", url)
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Could not fetch %s: %s", url, exc)
        raise TransportError.from_http_error(exc) from exc
    return response.content


# ──────────────────────────────────────────────
# Normalisation
# ──────────────────────────────────────────────
async def normalize_input(
    source: UploadInput,
    filename: str | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PreparedFile:
    """
    Resolve *source* into a :class:`PreparedFile`.

    Parameters
    ----------
    source : URL, base64 data URI, local path, buffer, blob-like or stream.
    filename : str | None – overrides the detected filename.
    timeout, transport : used for the HTTP fetch of URL inputs only.
    """
    kind = classify_input(source)

    if kind is InputKind.URL:
        content = await fetch_remote_file(source, timeout=timeout, transport=transport)
        return PreparedFile(kind, content, filename or filename_from_url(source))

    if kind is InputKind.DATA_URI:
        return PreparedFile(kind, decode_data_uri(source), filename or DEFAULT_FILENAME)

    if kind is InputKind.PATH:
        path = Path(source)
        logger.debug("Opening local file %s", path)
        try:
            handle = path.open("rb")
        except OSError as exc:
            raise InvalidInputError(f"Cannot open file: {path}", cause=exc) from exc
        return PreparedFile(kind, handle, filename or path.name, owned=True)

    if kind is InputKind.BUFFER:
        return PreparedFile(kind, bytes(source), filename or DEFAULT_FILENAME)

    # blob-like and stream objects are handed to the transport untouched
    return PreparedFile(kind, source, filename or DEFAULT_FILENAME)
