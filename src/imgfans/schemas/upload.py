from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Reference(_WireModel):
    """One pre-formatted reference to the uploaded asset."""
    label: str
    code: str


class ReferenceSet(_WireModel):
    """All reference codes returned for an upload."""
    direct_link: Reference
    download_link: Reference
    bbcode: Reference
    html: Reference
    markdown: Reference


class FileRecord(_WireModel):
    """Metadata of the stored file as reported by the server."""
    id: str | int
    name: str
    size: int
    mime_type: str
    url: str
    download_url: str = Field(alias="downloadUrl")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    references: ReferenceSet | None = None
    expires_at: datetime | None = None


class UploadResult(_WireModel):
    """Response schema for POST /upload."""
    success: bool
    file: FileRecord
