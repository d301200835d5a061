"""Request and response models for the external image recognition service."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RecognitionOrgan(str, Enum):
    """Organ hint sent with an image."""

    FLOWER = "flower"
    LEAF = "leaf"
    FRUIT = "fruit"
    BARK = "bark"
    AUTO = "auto"

    @classmethod
    def from_organ(cls, organ: Enum | str) -> "RecognitionOrgan":
        """Map a catalog organ onto the recognition hint of the same name."""
        return cls(getattr(organ, "value", organ))


class ExternalCandidate(BaseModel):
    """One species proposed by the recognition service.

    Immutable for the lifetime of an identification attempt.
    """

    model_config = ConfigDict(frozen=True)

    scientific_name: str = Field(..., min_length=1, description="Name without authorship")
    score: float = Field(..., ge=0.0, le=1.0, description="Provider score")
    common_names: list[str] = Field(default_factory=list)
    family: str | None = None
    genus: str | None = None
    authorship: str | None = None

    @property
    def common_name(self) -> str:
        """Primary common name, falling back to the scientific name."""
        return self.common_names[0] if self.common_names else self.scientific_name

    def common_names_display(self, limit: int = 3) -> str:
        """Comma-separated common names for display."""
        if not self.common_names:
            return self.scientific_name
        return ", ".join(self.common_names[:limit])

    @classmethod
    def from_plantnet(cls, result: dict[str, Any]) -> "ExternalCandidate":
        """Build a candidate from one entry of a PlantNet ``results`` array."""
        species = result["species"]
        family = species.get("family") or {}
        genus = species.get("genus") or {}
        return cls(
            scientific_name=species["scientificNameWithoutAuthor"],
            score=result["score"],
            common_names=species.get("commonNames") or [],
            family=family.get("scientificNameWithoutAuthor"),
            genus=genus.get("scientificNameWithoutAuthor"),
            authorship=species.get("scientificNameAuthorship"),
        )


class RecognitionResult(BaseModel):
    """Ranked candidates in provider order."""

    candidates: list[ExternalCandidate] = Field(default_factory=list)
    organ: RecognitionOrgan = RecognitionOrgan.AUTO
    language: str | None = None
    remaining_requests: int | None = None

    @property
    def best_match(self) -> ExternalCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def is_empty(self) -> bool:
        return not self.candidates
