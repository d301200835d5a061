"""Shared loading and parsing helpers for the command-line tools."""

import click

from plantkey.config import ConfigManager, PlantKeyConfig
from plantkey.system.path_resolver import PathResolver
from plantkey.taxonomy.categories import TraitCategory
from plantkey.taxonomy.store import TaxonomyStore


def load_config(path_resolver: PathResolver) -> PlantKeyConfig:
    """Load configuration, creating the default file on first run."""
    return ConfigManager(path_resolver).load()


def load_taxonomy(path_resolver: PathResolver) -> TaxonomyStore:
    """Load the bundled species and vocabulary files."""
    return TaxonomyStore.from_json_files(
        path_resolver.get_species_data_path(),
        path_resolver.get_vocabulary_data_path(),
    )


def parse_traits(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``Category=Value`` pairs into a trait selection.

    Raises:
        click.BadParameter: If a pair is malformed or names an unknown category
    """
    traits: dict[str, str] = {}
    for item in values:
        category, separator, value = item.partition("=")
        category = category.strip()
        value = value.strip()
        if not separator or not category or not value:
            raise click.BadParameter(f"Expected Category=Value, got '{item}'")
        try:
            TraitCategory(category)
        except ValueError as e:
            raise click.BadParameter(f"Unknown trait category '{category}'") from e
        traits[category] = value
    return traits
