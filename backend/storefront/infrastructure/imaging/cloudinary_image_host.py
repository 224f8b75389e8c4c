"""Cloudinary image host — implements the ImageHost interface.

Talks to the Cloudinary Upload API (https://api.cloudinary.com/v1_1)
with httpx. Requests are signed: the signed parameters are sorted,
joined as ``key=value&...``, suffixed with the API secret and hashed
with SHA-1.
"""

import hashlib
import logging
import time

import httpx

from storefront.application.interfaces import HostedImage, ImageHost
from storefront.domain.exceptions import ImageHostError

logger = logging.getLogger(__name__)


class CloudinaryImageHost(ImageHost):
    """Infrastructure adapter that uploads and destroys images on Cloudinary."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "storefront-products",
        base_url: str = "https://api.cloudinary.com/v1_1",
        http_client: httpx.AsyncClient | None = None,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    def _sign(self, params: dict[str, str]) -> str:
        """Cloudinary request signature for *params*."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1((to_sign + self._api_secret).encode("utf-8")).hexdigest()

    def _signed_form(self, params: dict[str, str]) -> dict[str, str]:
        params = {**params, "timestamp": str(int(time.time()))}
        return {**params, "api_key": self._api_key, "signature": self._sign(params)}

    def _endpoint(self, action: str) -> str:
        return f"{self._base_url}/{self._cloud_name}/image/{action}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=60.0)

    async def _post(self, action: str, data: dict[str, str], files: dict | None = None) -> dict:
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.post(self._endpoint(action), data=data, files=files)
        except httpx.HTTPError as exc:
            raise ImageHostError(self.provider_name, 503, str(exc)) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            self._raise_host_error(response)
        return response.json()

    async def upload(self, content: bytes, filename: str, content_type: str) -> HostedImage:
        form = self._signed_form({"folder": self._folder})
        data = await self._post(
            "upload",
            data=form,
            files={"file": (filename, content, content_type)},
        )
        logger.debug("Cloudinary stored %s as %s", filename, data.get("public_id"))
        return HostedImage(url=data["secure_url"], public_id=data["public_id"])

    async def destroy(self, public_id: str) -> None:
        data = await self._post("destroy", data=self._signed_form({"public_id": public_id}))
        result = data.get("result")
        if result == "not found":
            logger.warning("Cloudinary asset %s was already gone", public_id)
        elif result != "ok":
            raise ImageHostError(self.provider_name, 502, f"Unexpected destroy result: {result}")

    def _raise_host_error(self, response: httpx.Response) -> None:
        """Raise ImageHostError from a non-200 Cloudinary response."""
        try:
            message = response.json().get("error", {}).get("message", response.text)
        except ValueError:
            message = response.text

        raise ImageHostError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message,
        )
