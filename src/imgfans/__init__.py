"""Python client for the Imgfans image hosting API."""

import logging

from imgfans.client import ImgfansClient
from imgfans.config import DEFAULT_BASE_URL, VERSION as __version__, ClientConfig, Settings
from imgfans.errors import (
    ConfigurationError,
    ImgfansError,
    InvalidInputError,
    InvalidResponseError,
    TransportError,
    UnsupportedInputTypeError,
)
from imgfans.schemas.upload import FileRecord, Reference, ReferenceSet, UploadResult
from imgfans.services.input_service import InputKind, PreparedFile

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "DEFAULT_BASE_URL",
    "FileRecord",
    "ImgfansClient",
    "ImgfansError",
    "InputKind",
    "InvalidInputError",
    "InvalidResponseError",
    "PreparedFile",
    "Reference",
    "ReferenceSet",
    "Settings",
    "TransportError",
    "UnsupportedInputTypeError",
    "UploadResult",
    "__version__",
]
