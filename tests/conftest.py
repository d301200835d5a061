import json
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from plantkey.config import ConfigManager, PlantKeyConfig
from plantkey.quota.entitlements import StaticEntitlementGate
from plantkey.quota.stores import MemoryStore
from plantkey.quota.tracker import QuotaTracker
from plantkey.recognition.models import ExternalCandidate
from plantkey.recognition.plantnet import PlantNetClient
from plantkey.system.path_resolver import PathResolver
from plantkey.taxonomy.store import TaxonomyStore
from plantkey.web.core.container import Container
from plantkey.web.core.factory import create_app

SAMPLE_SPECIES = [
    {
        "Plant_Name_Latin": "Quercus alba",
        "Plant_Name_Common": "White Oak",
        "Plant_Family": "Fagaceae",
        "Plant_Genus": "Quercus",
        "Leaf_Type": "simple",
        "Leaf_Shape": "obovate",
        "Leaf_Margin": "lobed",
        "Leaf_Arrangement": "alternate",
        "Stem_Habit": "tree",
        "Fruit_Type": "nut",
    },
    {
        "Plant_Name_Latin": "Prunus serotina",
        "Plant_Name_Common": "Black Cherry",
        "Plant_Family": "Rosaceae",
        "Plant_Genus": "Prunus",
        "Leaf_Type": "simple",
        "Leaf_Shape": "lanceolate",
        "Leaf_Margin": "serrate",
        "Flower_Color": "white",
        "Flower_Petal Count": "5",
        "Flower_Inflorescence": "raceme",
        "Fruit_Type": "drupe",
        "Stem_Habit": "tree",
    },
    {
        "Plant_Name_Latin": "Trillium grandiflorum",
        "Plant_Name_Common": "White Trillium",
        "Plant_Family": "Melanthiaceae",
        "Plant_Genus": "Trillium",
        "Leaf_Shape": "ovate",
        "Flower_Color": "white",
        "Flower_Petal Count": "3",
        "Flower_Symmetry": "radial",
        "Stem_Habit": "herb",
    },
    {
        "Plant_Name_Latin": "Rosa multiflora",
        "Plant_Name_Common": "Multiflora Rose",
        "Plant_Family": "Rosaceae",
        "Plant_Genus": "Rosa",
        "Leaf_Type": "compound",
        "Leaf_Shape": "ovate",
        "Leaf_Margin": "serrate",
        "Flower_Color": "white to pink",
        "Flower_Petal Count": "5",
        "Stem_Habit": "shrub",
    },
    {
        "Plant_Name_Latin": "Acer rubrum",
        "Plant_Name_Common": "Red Maple",
        "Plant_Family": "Sapindaceae",
        "Plant_Genus": "Acer",
        "Leaf_Type": "simple",
        "Leaf_Shape": "palmately lobed",
        "Leaf_Margin": "serrate",
        "Leaf_Arrangement": "opposite",
        "Flower_Color": "red",
        "Fruit_Type": "samara",
        "Stem_Habit": "tree",
    },
    {
        "Plant_Name_Latin": "Taraxacum officinale",
        "Plant_Name_Common": "Dandelion",
        "Plant_Family": "Asteraceae",
        "Plant_Genus": "Taraxacum",
        "Leaf_Shape": "",
        "Flower_Color": "yellow",
        "Flower_Inflorescence": "head",
    },
]


def _term(category: str, term: str, show_plant_id: bool = True) -> dict:
    return {
        "term": term,
        "category": category,
        "descriptionShort": f"{term} {category.split('_')[-1].lower()}",
        "descriptionLong": None,
        "imageURL": None,
        "showPlantID": show_plant_id,
        "isFree": True,
    }


SAMPLE_TERMS = [
    _term("Leaf_Type", "simple"),
    _term("Leaf_Type", "compound"),
    _term("Leaf_Shape", "ovate"),
    _term("Leaf_Shape", "lanceolate"),
    _term("Leaf_Shape", "obovate"),
    _term("Leaf_Shape", "cordate", show_plant_id=False),
    _term("Leaf_Margin", "serrate"),
    _term("Leaf_Margin", "entire"),
    _term("Leaf_Margin", "lobed"),
    _term("Flower_Color", "white"),
    _term("Flower_Color", "red"),
    _term("Flower_Color", "yellow"),
    _term("Flower_Petal Count", "3"),
    _term("Flower_Petal Count", "5"),
    _term("Fruit_Type", "drupe"),
    _term("Fruit_Type", "nut"),
    _term("Fruit_Type", "samara"),
    _term("Stem_Habit", "tree"),
    _term("Stem_Habit", "shrub"),
    _term("Stem_Habit", "herb"),
]


@pytest.fixture
def path_resolver(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PathResolver:
    """Provide a PathResolver whose data and config live under tmp_path.

    The sample taxonomy files are written to the taxonomy directory so loaders and the
    web container find them without extra setup.
    """
    monkeypatch.delenv("PLANTKEY_CONFIG", raising=False)
    monkeypatch.delenv("PLANTNET_API_KEY", raising=False)

    resolver = PathResolver()
    resolver.data_dir = tmp_path / "data"

    taxonomy_dir = resolver.get_taxonomy_dir()
    taxonomy_dir.mkdir(parents=True)
    resolver.get_species_data_path().write_text(json.dumps(SAMPLE_SPECIES))
    resolver.get_vocabulary_data_path().write_text(json.dumps(SAMPLE_TERMS))

    return resolver


@pytest.fixture
def test_config(path_resolver: PathResolver) -> PlantKeyConfig:
    """Load a default configuration from the temporary config path."""
    return ConfigManager(path_resolver).load()


@pytest.fixture
def taxonomy_store(path_resolver: PathResolver) -> TaxonomyStore:
    """Load the sample taxonomy from disk."""
    return TaxonomyStore.from_json_files(
        path_resolver.get_species_data_path(),
        path_resolver.get_vocabulary_data_path(),
    )


class FakeClock:
    """Controllable replacement for date.today."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2024, 5, 1))


@pytest.fixture
def free_tracker(clock: FakeClock) -> QuotaTracker:
    """Quota tracker for a non-entitled user backed by memory."""
    return QuotaTracker(MemoryStore(), StaticEntitlementGate(False), clock=clock)


@pytest.fixture
def candidates() -> list[ExternalCandidate]:
    """External candidates in provider order."""
    return [
        ExternalCandidate(
            scientific_name="Prunus serotina", score=0.42, common_names=["Black Cherry"]
        ),
        ExternalCandidate(
            scientific_name="Trillium grandiflorum", score=0.40, common_names=["White Trillium"]
        ),
        ExternalCandidate(scientific_name="Cornus florida", score=0.10),
    ]


@pytest.fixture
def mock_plantnet_client() -> MagicMock:
    """PlantNet client whose identify call is an AsyncMock."""
    client = MagicMock(spec=PlantNetClient)
    client.identify = AsyncMock()
    return client


@pytest.fixture
def app_container(
    path_resolver: PathResolver, test_config: PlantKeyConfig, mock_plantnet_client: MagicMock
) -> Container:
    """Container wired to temporary paths, an in-memory quota store and a mocked client."""
    container = Container()
    container.path_resolver.override(providers.Singleton(lambda: path_resolver))
    container.config.override(providers.Singleton(lambda: test_config))
    container.quota_store.override(providers.Singleton(MemoryStore))
    container.plantnet_client.override(providers.Singleton(lambda: mock_plantnet_client))
    return container


@pytest.fixture
def client(app_container: Container) -> TestClient:
    """Test client for the full application, without running the lifespan."""
    return TestClient(create_app(app_container))
