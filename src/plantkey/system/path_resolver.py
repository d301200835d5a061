import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in PlantKey.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.data_dir = Path(os.getenv("PLANTKEY_DATA", "/var/lib/plantkey"))

    def get_plantkey_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks PLANTKEY_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("PLANTKEY_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "plantkey.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory where all runtime data is stored."""
        return self.data_dir

    def get_taxonomy_dir(self) -> Path:
        """Get the directory holding the bundled reference data."""
        return self.data_dir / "taxonomy"

    def get_species_data_path(self) -> Path:
        """Get the path to the species reference JSON."""
        return self.get_taxonomy_dir() / "Plants.json"

    def get_vocabulary_data_path(self) -> Path:
        """Get the path to the trait vocabulary JSON."""
        return self.get_taxonomy_dir() / "Botany.json"

    def get_state_dir(self) -> Path:
        """Get the directory for small mutable state files."""
        return self.data_dir / "state"

    def get_quota_state_path(self) -> Path:
        """Get the path to the file-backed quota store."""
        return self.get_state_dir() / "quota.yaml"
