"""API tests for image upload."""

import pytest

from storefront.application.interfaces import HostedImage, ImageHost
from storefront.domain.exceptions import ImageHostError
from storefront.infrastructure.dependencies import get_image_host
from storefront.main import app


class RecordingImageHost(ImageHost):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: list[tuple[str, int]] = []

    @property
    def provider_name(self) -> str:
        return "recording"

    async def upload(self, content: bytes, filename: str, content_type: str) -> HostedImage:
        if self.fail:
            raise ImageHostError(self.provider_name, 500, "host down")
        self.uploads.append((filename, len(content)))
        return HostedImage(url=f"https://img.test/{filename}", public_id=f"storefront-products/{filename}")

    async def destroy(self, public_id: str) -> None:
        return None


@pytest.fixture
def image_host():
    host = RecordingImageHost()
    app.dependency_overrides[get_image_host] = lambda: host
    yield host
    app.dependency_overrides.pop(get_image_host, None)


@pytest.mark.asyncio
async def test_upload_returns_url_and_public_id(client, image_host):
    response = await client.post(
        "/api/v1/upload", files={"file": ("cam.png", b"\x89PNG data", "image/png")}
    )

    assert response.status_code == 200
    assert response.json() == {
        "url": "https://img.test/cam.png",
        "public_id": "storefront-products/cam.png",
    }
    assert image_host.uploads == [("cam.png", 9)]


@pytest.mark.asyncio
async def test_upload_without_file_is_400(client, image_host):
    response = await client.post("/api/v1/upload", data={"other": "x"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_host_failure_is_502(client, image_host):
    image_host.fail = True
    response = await client.post(
        "/api/v1/upload", files={"file": ("cam.png", b"data", "image/png")}
    )
    assert response.status_code == 502


@pytest.mark.asyncio
async def test_upload_unconfigured_host_is_503(client):
    response = await client.post(
        "/api/v1/upload", files={"file": ("cam.png", b"data", "image/png")}
    )
    assert response.status_code == 503
