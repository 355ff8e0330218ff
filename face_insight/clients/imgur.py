"""Image hosting through the Imgur upload API."""

from __future__ import annotations

import logging

from requests import Response

from ..config import AppConfig
from ..errors import UploadError
from .base import RemoteServiceClient

logger = logging.getLogger(__name__)


class ImgurClient(RemoteServiceClient):
    """Uploads base64 photos to Imgur in exchange for a public link."""

    error_class = UploadError

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__(service="Imgur", config=config)

    def _headers(self, client_id: str | None) -> dict[str, str]:
        return {"Authorization": f"Client-ID {client_id or self._config.imgur_client_id}"}

    async def upload(self, payload: str, client_id: str | None = None) -> str | None:
        """Upload a base64 payload without transport prefix and return its link.

        Returns ``None`` when Imgur answers without a link; raises
        :class:`UploadError` on HTTP errors and transport failures.
        """
        response = await self._post(
            self._config.imgur_endpoint,
            headers=self._headers(client_id),
            # A (None, value) tuple makes requests send a plain multipart field.
            files={"image": (None, payload)},
        )
        return self._extract_link(response)

    def _extract_link(self, response: Response) -> str | None:
        status = response.status_code
        if status >= 400:
            raise UploadError(f"Imgur returned HTTP {status}: {response.text}", status_code=status)
        if status != 200:
            logger.warning("Imgur returned unexpected HTTP %s; no link available.", status)
            return None
        try:
            body = response.json()
        except ValueError as exc:
            raise UploadError("Imgur returned a non-JSON response.", status_code=status) from exc

        data = body.get("data") if isinstance(body, dict) else None
        link = data.get("link") if isinstance(data, dict) else None
        if not link:
            logger.warning("Imgur response carried no data.link; upload produced no result.")
            return None
        return str(link)
