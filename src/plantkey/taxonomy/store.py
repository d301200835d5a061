"""In-memory taxonomy store for species records and the trait vocabulary."""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from plantkey.taxonomy.models import Species, TraitTerm

logger = logging.getLogger(__name__)

# Species in the first positions of the bundled file are available on the free tier
FREE_SPECIES_COUNT = 30


class TaxonomyDataError(Exception):
    """Raised when reference data files are missing or malformed."""


class TaxonomyStore:
    """Read-only access to species records and the controlled trait vocabulary.

    Species are kept in load order; lookups by scientific name are case-insensitive.
    """

    def __init__(self, species: Iterable[Species], terms: Iterable[TraitTerm] = ()):
        """Initialize the store.

        Args:
            species: Species records; later duplicates of a scientific name are dropped
            terms: Trait vocabulary terms
        """
        self._species: list[Species] = []
        self._by_name: dict[str, Species] = {}
        for record in species:
            key = record.scientific_name.casefold()
            if key in self._by_name:
                logger.warning("Duplicate species record ignored: %s", record.scientific_name)
                continue
            self._by_name[key] = record
            self._species.append(record)

        self._terms: list[TraitTerm] = list(terms)
        self._terms_by_category: dict[str, list[TraitTerm]] = {}
        for term in self._terms:
            self._terms_by_category.setdefault(term.category, []).append(term)

    @classmethod
    def from_json_files(cls, species_path: Path, vocabulary_path: Path) -> "TaxonomyStore":
        """Load the bundled reference JSON files.

        Args:
            species_path: JSON array of species records
            vocabulary_path: JSON array of trait vocabulary terms

        Returns:
            A populated TaxonomyStore

        Raises:
            TaxonomyDataError: If a file is missing, unreadable or holds invalid records
        """
        raw_species = _read_json_array(species_path)
        raw_terms = _read_json_array(vocabulary_path)

        species = []
        for index, record in enumerate(raw_species):
            try:
                species.append(
                    Species.model_validate({**record, "is_free": index < FREE_SPECIES_COUNT})
                )
            except (ValidationError, TypeError) as e:
                raise TaxonomyDataError(
                    f"Invalid species record #{index} in {species_path}: {e}"
                ) from e

        terms = []
        for index, record in enumerate(raw_terms):
            try:
                terms.append(TraitTerm.model_validate(record))
            except ValidationError as e:
                raise TaxonomyDataError(
                    f"Invalid vocabulary term #{index} in {vocabulary_path}: {e}"
                ) from e

        store = cls(species, terms)
        logger.info(
            "Loaded taxonomy: %d species, %d vocabulary terms",
            len(store),
            len(store._terms),
        )
        return store

    def __len__(self) -> int:
        return len(self._species)

    def __iter__(self) -> Iterator[Species]:
        return iter(self._species)

    @property
    def species(self) -> list[Species]:
        """All species records in load order."""
        return list(self._species)

    def find_species(self, scientific_name: str) -> Species | None:
        """Find a species by exact scientific name, ignoring case."""
        return self._by_name.get(scientific_name.casefold())

    def contains(self, scientific_name: str) -> bool:
        """Check whether a species has a local record."""
        return scientific_name.casefold() in self._by_name

    def terms_for(self, category: str, identification_only: bool = True) -> list[TraitTerm]:
        """Get the vocabulary terms for a trait category.

        Args:
            category: Trait category key
            identification_only: Only return terms flagged for plant identification

        Returns:
            Terms in load order
        """
        terms = self._terms_by_category.get(category, [])
        if identification_only:
            return [term for term in terms if term.show_plant_id]
        return list(terms)


def _read_json_array(path: Path) -> list[dict[str, Any]]:
    """Read a JSON file that must contain an array of objects."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise TaxonomyDataError(f"Reference data file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyDataError(f"Could not read reference data {path}: {e}") from e

    if not isinstance(data, list):
        raise TaxonomyDataError(f"Reference data {path} must be a JSON array")
    return data
