"""Shared fixtures – an in-process fake of the Imgfans upload API."""

import httpx
import pytest
from fastapi import FastAPI, File, Header, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response

from imgfans import ImgfansClient

TEST_TOKEN = "test-token"
BASE_URL = "https://imgfans.test/api/v1"
MAX_UPLOAD_SIZE = 1024
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def wire_result(name: str = "cat.png", size: int = 3) -> dict:
    """A successful upload body exactly as the server sends it."""
    url = f"https://imgfans.test/i/{name}"
    return {
        "success": True,
        "file": {
            "id": "abc123",
            "name": name,
            "size": size,
            "mime_type": "image/png",
            "url": url,
            "downloadUrl": f"https://imgfans.test/d/{name}",
            "thumbnailUrl": f"https://imgfans.test/t/{name}",
            "references": {
                "direct_link": {"label": "Direct link", "code": url},
                "download_link": {"label": "Download link", "code": f"https://imgfans.test/d/{name}"},
                "bbcode": {"label": "BBCode", "code": f"[img]{url}[/img]"},
                "html": {"label": "HTML", "code": f'<img src="{url}" alt="{name}">'},
                "markdown": {"label": "Markdown", "code": f"![{name}]({url})"},
            },
            "expires_at": None,
        },
    }


def create_fake_server() -> FastAPI:
    app = FastAPI()
    app.state.uploads = []
    app.state.headers = []

    @app.post("/api/v1/upload")
    async def upload(
        file: UploadFile = File(...),
        authorization: str | None = Header(default=None),
        accept: str | None = Header(default=None),
    ):
        if authorization != f"Bearer {TEST_TOKEN}":
            raise HTTPException(status_code=401, detail="Unauthenticated.")

        content = await file.read()
        app.state.uploads.append((file.filename, content, file.content_type))
        app.state.headers.append({"authorization": authorization, "accept": accept})

        if file.filename.endswith(".txt"):
            raise HTTPException(status_code=415, detail="Unsupported Media Type")
        if len(content) > MAX_UPLOAD_SIZE:
            raise HTTPException(status_code=413, detail="Payload Too Large")
        if file.filename == "quota.png":
            return JSONResponse(status_code=429, content={"message": "Daily quota exceeded."})
        if file.filename == "broken.png":
            return Response(content="<html>oops</html>", media_type="text/html")
        if file.filename == "noref.png":
            body = wire_result(file.filename, len(content))
            del body["file"]["references"]
            return body

        return wire_result(file.filename, len(content))

    @app.get("/images/{name}")
    async def image(name: str):
        if name == "missing.png":
            raise HTTPException(status_code=404, detail="Not Found")
        return Response(content=PNG_BYTES, media_type="image/png")

    return app


@pytest.fixture
def fake_server() -> FastAPI:
    return create_fake_server()


@pytest.fixture
def transport(fake_server: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=fake_server)


@pytest.fixture
def client(transport: httpx.ASGITransport) -> ImgfansClient:
    return ImgfansClient(TEST_TOKEN, BASE_URL, transport=transport)


@pytest.fixture
def upload_result_json() -> dict:
    return wire_result()
