"""Shared plumbing for the remote HTTP services used by the pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import requests
from requests import Response, Session

from ..config import AppConfig
from ..errors import FaceInsightError

logger = logging.getLogger(__name__)


class RemoteServiceClient:
    """Common session handling for a single remote HTTP service.

    Requests are issued with a blocking :mod:`requests` session; the public
    coroutines of subclasses hand them to a worker thread so that every network
    call is an awaitable suspension point.
    """

    error_class: type[FaceInsightError] = FaceInsightError

    def __init__(self, *, service: str, config: AppConfig | None = None) -> None:
        self._service = service
        self._config = config or AppConfig()
        self._session: Session | None = None

    @property
    def service(self) -> str:
        return self._service

    def load(self) -> None:
        self._session = requests.Session()

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    # ----- HTTP helpers ----------------------------------------------------

    def _session_post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Any = None,
        files: Mapping[str, Any] | None = None,
    ) -> Response:
        if self._session is None:
            raise self.error_class(f"{self._service} HTTP session not initialised.")
        timeout = self._config.request_timeout
        try:
            response = self._session.post(
                url,
                json=json,
                files=files,
                headers=dict(headers),
                timeout=timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise self.error_class(
                f"{self._service} request timed out after {timeout}s."
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise self.error_class(f"Failed to contact {self._service}: {exc}") from exc
        logger.debug("%s answered HTTP %s", self._service, response.status_code)
        return response

    async def _post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Any = None,
        files: Mapping[str, Any] | None = None,
    ) -> Response:
        return await asyncio.to_thread(
            self._session_post,
            url,
            headers=headers,
            json=json,
            files=files,
        )
