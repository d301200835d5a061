"""Taxonomy domain package.

This package contains the reference data used by identification:
- TraitCategory: Stable trait category keys and their groups
- Species: Species record with nullable trait attributes
- TraitTerm: Controlled vocabulary term
- TaxonomyStore: In-memory store with JSON loading
"""

from plantkey.taxonomy.categories import TraitCategory, TraitGroup
from plantkey.taxonomy.models import Species, TraitTerm, trait_accessor
from plantkey.taxonomy.store import TaxonomyDataError, TaxonomyStore

__all__ = [
    "Species",
    "TaxonomyDataError",
    "TaxonomyStore",
    "TraitCategory",
    "TraitGroup",
    "TraitTerm",
    "trait_accessor",
]
