"""Face attribute detection through the Azure Face API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from requests import Response

from ..config import AppConfig
from ..errors import AnalysisError
from .base import RemoteServiceClient

logger = logging.getLogger(__name__)

FACE_PARAMETERS: dict[str, str] = {
    "returnFaceId": "true",
    "returnFaceLandmarks": "false",
    "returnFaceAttributes": (
        "age,gender,headPose,smile,facialHair,glasses,emotion,"
        "hair,makeup,occlusion,accessories,blur,exposure,noise"
    ),
}


def serialize_query(parameters: Mapping[str, str]) -> str:
    """Join parameters as ``key=value`` pairs separated by ``&``, without escaping."""
    return "&".join(f"{key}={value}" for key, value in parameters.items())


class AzureFaceClient(RemoteServiceClient):
    """Submits hosted image URLs to the Azure Face ``detect`` endpoint."""

    error_class = AnalysisError

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__(service="Azure Face API", config=config)

    @property
    def detect_url(self) -> str:
        return f"{self._config.azure_endpoint}/detect?{serialize_query(FACE_PARAMETERS)}"

    def _headers(self, subscription_key: str | None) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Ocp-Apim-Subscription-Key": subscription_key or self._config.azure_api_key,
        }

    async def analyze(
        self, image_url: str, subscription_key: str | None = None
    ) -> list[dict[str, Any]]:
        """Return the per-face records Azure detects in the image at ``image_url``."""
        response = await self._post(
            self.detect_url,
            headers=self._headers(subscription_key),
            json={"url": image_url},
        )
        return self._parse_faces(response)

    def _parse_faces(self, response: Response) -> list[dict[str, Any]]:
        status = response.status_code
        if status >= 400:
            self._report_error_body(response)
            raise AnalysisError(f"Azure Face API returned HTTP {status}.", status_code=status)
        if status != 200:
            raise AnalysisError(
                f"Azure Face API returned unexpected HTTP {status}.", status_code=status
            )
        try:
            faces = response.json()
        except ValueError as exc:
            raise AnalysisError("Azure Face API returned a non-JSON response.") from exc
        if not isinstance(faces, list):
            raise AnalysisError("Azure Face API returned an unexpected payload.")
        logger.info("Azure Face API detected %d face(s).", len(faces))
        return faces

    @staticmethod
    def _report_error_body(response: Response) -> None:
        try:
            body = json.dumps(response.json(), indent=2)
        except ValueError:
            body = response.text
        logger.error("Azure Face API error response:\n%s", body)
