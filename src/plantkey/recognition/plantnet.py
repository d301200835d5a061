"""PlantNet image recognition client.

Sends a single photo with an organ hint to the PlantNet identify endpoint and returns
the ranked candidates unchanged. Timeouts belong here; the scoring engine only ever
sees the resolved result.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from plantkey.config.models import RecognitionConfig
from plantkey.recognition.models import ExternalCandidate, RecognitionOrgan, RecognitionResult

logger = logging.getLogger(__name__)


class RecognitionError(Exception):
    """Base class for recognition adapter failures."""


class RecognitionConfigError(RecognitionError):
    """Raised when the adapter is not configured (e.g. missing API key)."""


class InvalidImageError(RecognitionError):
    """Raised when the image cannot be sent."""


class RecognitionNetworkError(RecognitionError):
    """Raised when the service cannot be reached."""


class RecognitionApiError(RecognitionError):
    """Raised when the service answers with an error status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class RecognitionDecodeError(RecognitionError):
    """Raised when the response body does not match the expected schema."""


class PlantNetClient:
    """Async client for the PlantNet v2 identify API."""

    def __init__(self, config: RecognitionConfig) -> None:
        """Initialize the client.

        Args:
            config: Recognition settings (API key, endpoint, timeout)
        """
        self.config = config

    @property
    def identify_url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/v2/identify/{self.config.project}"

    def _query_params(self) -> dict[str, str]:
        return {
            "include-related-images": str(self.config.include_related_images).lower(),
            "no-reject": str(self.config.no_reject).lower(),
            "lang": self.config.language,
            "api-key": self.config.api_key,
        }

    async def identify(
        self,
        image: bytes,
        organ: RecognitionOrgan | str = RecognitionOrgan.AUTO,
        filename: str = "plant.jpg",
        content_type: str = "image/jpeg",
    ) -> RecognitionResult:
        """Identify the plant in a photo.

        Args:
            image: Encoded image bytes
            organ: Organ hint (flower, leaf, fruit, bark or auto)
            filename: Filename reported in the multipart body
            content_type: MIME type of the image

        Returns:
            RecognitionResult with candidates in provider order; empty when the
            service finds no species

        Raises:
            RecognitionConfigError: If no API key is configured
            InvalidImageError: If the image is empty
            RecognitionNetworkError: On connection failures or timeouts
            RecognitionApiError: On non-success status codes
            RecognitionDecodeError: On unexpected response bodies
        """
        if not self.config.api_key:
            raise RecognitionConfigError("PlantNet API key is not configured")
        if not image:
            raise InvalidImageError("Could not process the image: no image data")

        organ = RecognitionOrgan(organ)
        files = {"images": (filename, image, content_type)}
        data = {"organs": organ.value}

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await client.post(
                    self.identify_url, params=self._query_params(), files=files, data=data
                )
        except httpx.HTTPError as e:
            logger.warning("PlantNet request failed: %s", e)
            raise RecognitionNetworkError(f"Network error: {e}") from e

        if response.status_code == 404:
            # PlantNet answers 404 when no species could be proposed
            logger.info("PlantNet found no species for organ '%s'", organ.value)
            return RecognitionResult(organ=organ)

        if response.status_code != 200:
            raise RecognitionApiError(response.status_code, response.text or "Unknown error")

        try:
            payload = response.json()
        except ValueError as e:
            raise RecognitionDecodeError(f"Failed to parse response: {e}") from e

        result = self._parse_result(payload, organ)
        logger.info(
            "PlantNet returned %d candidates for organ '%s'",
            len(result.candidates),
            organ.value,
        )
        return result

    @staticmethod
    def _parse_result(payload: Any, organ: RecognitionOrgan) -> RecognitionResult:  # noqa: ANN401
        """Convert a PlantNet response body into a RecognitionResult."""
        try:
            candidates = [ExternalCandidate.from_plantnet(item) for item in payload["results"]]
            return RecognitionResult(
                candidates=candidates,
                organ=organ,
                language=payload.get("language"),
                remaining_requests=payload.get("remainingIdentificationRequests"),
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise RecognitionDecodeError(f"Failed to parse response: {e}") from e
