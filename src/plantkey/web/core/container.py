"""Dependency injection container for the PlantKey web application."""

from dependency_injector import containers, providers

from plantkey.identification.adjustment import ConfidenceAdjuster
from plantkey.identification.matching import ObserveMatcher
from plantkey.quota.factory import create_quota_store, create_quota_tracker
from plantkey.recognition.plantnet import PlantNetClient
from plantkey.system.path_resolver import PathResolver
from plantkey.taxonomy.store import TaxonomyStore
from plantkey.web.core.config import get_config


def load_taxonomy_store(resolver: PathResolver) -> TaxonomyStore:
    """Load the bundled taxonomy from the data directory."""
    return TaxonomyStore.from_json_files(
        resolver.get_species_data_path(),
        resolver.get_vocabulary_data_path(),
    )


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Reference data and the scoring engine are singletons: they are immutable after
    loading. The quota tracker is a singleton so its lock serializes all requests.
    """

    # Core infrastructure - singletons
    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    # Reference data
    taxonomy_store = providers.Singleton(
        load_taxonomy_store,
        resolver=path_resolver,
    )

    # Scoring engine
    observe_matcher = providers.Singleton(
        ObserveMatcher,
        store=taxonomy_store,
    )

    confidence_adjuster = providers.Singleton(
        ConfidenceAdjuster,
        store=taxonomy_store,
        scoring=config.provided.scoring,
    )

    # Daily quota
    quota_store = providers.Singleton(
        create_quota_store,
        config=config,
        path_resolver=path_resolver,
    )

    quota_tracker = providers.Singleton(
        create_quota_tracker,
        config=config,
        path_resolver=path_resolver,
        store=quota_store,
    )

    # External recognition
    plantnet_client = providers.Singleton(
        PlantNetClient,
        config=config.provided.recognition,
    )
