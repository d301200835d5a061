"""External image recognition package.

This package contains the request/response contract of the recognition service and
the PlantNet HTTP client:
- RecognitionOrgan: Organ hint sent with an image
- ExternalCandidate / RecognitionResult: Provider-ranked candidates
- PlantNetClient: httpx-based client and its error hierarchy
"""

from plantkey.recognition.models import ExternalCandidate, RecognitionOrgan, RecognitionResult
from plantkey.recognition.plantnet import (
    InvalidImageError,
    PlantNetClient,
    RecognitionApiError,
    RecognitionConfigError,
    RecognitionDecodeError,
    RecognitionError,
    RecognitionNetworkError,
)

__all__ = [
    "ExternalCandidate",
    "InvalidImageError",
    "PlantNetClient",
    "RecognitionApiError",
    "RecognitionConfigError",
    "RecognitionDecodeError",
    "RecognitionError",
    "RecognitionNetworkError",
    "RecognitionOrgan",
    "RecognitionResult",
]
