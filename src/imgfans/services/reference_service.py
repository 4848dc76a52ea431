"""Service layer – reference codes of an upload result."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import ValidationError

from imgfans.errors import InvalidResponseError
from imgfans.schemas.upload import ReferenceSet, UploadResult

UploadResponse = Union[UploadResult, Mapping[str, Any]]

# wire key → key of the mapping returned by get_all_references
REFERENCE_KEYS: dict[str, str] = {
    "direct_link": "directLink",
    "download_link": "downloadLink",
    "bbcode": "bbcode",
    "html": "html",
    "markdown": "markdown",
}


def get_references(response: UploadResponse) -> ReferenceSet:
    """Return the reference set of *response*, which may be a model or raw JSON."""
    if isinstance(response, UploadResult):
        references = response.file.references
    elif isinstance(response, Mapping) and isinstance(response.get("file"), Mapping):
        references = response["file"].get("references")
    else:
        references = None

    if references is None:
        raise InvalidResponseError("Invalid response format from server", response=response)
    if isinstance(references, ReferenceSet):
        return references

    try:
        return ReferenceSet.model_validate(references)
    except ValidationError as exc:
        raise InvalidResponseError(
            "Invalid response format from server",
            response=response,
            cause=exc,
        ) from exc


def get_direct_link(response: UploadResponse) -> str:
    return get_references(response).direct_link.code


def get_download_link(response: UploadResponse) -> str:
    return get_references(response).download_link.code


def get_bbcode(response: UploadResponse) -> str:
    return get_references(response).bbcode.code


def get_markdown_code(response: UploadResponse) -> str:
    return get_references(response).markdown.code


def get_html_code(response: UploadResponse) -> str:
    return get_references(response).html.code


def get_all_references(response: UploadResponse) -> dict[str, str]:
    """Every reference code, keyed directLink/downloadLink/bbcode/html/markdown."""
    references = get_references(response)
    return {
        name: getattr(references, wire_key).code
        for wire_key, name in REFERENCE_KEYS.items()
    }
